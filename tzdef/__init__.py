"""
.. include:: ../README.md
"""

__all__ = [
    "adjustment",
    "definition",
    "duration",
    "exceptions",
    "period",
    "transition",
    "transition_group",
    "tz_rule",
    "tzinfo",
    "wire",
]

"""Library for parsing and encoding xs:duration values.

Period biases and transition time offsets are exchanged on the wire as
xml schema durations, e.g. `PT8H` or `-P0DT5H30M0.0S`. Years and months
have no fixed length so they are only accepted when zero.
"""

import datetime
import re

__all__ = [
    "parse_duration",
    "encode_duration",
]

DATE_PART = r"(?:(\d+)Y)?(?:(\d+)M)?(?:(\d+)D)?"
TIME_PART = r"(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d*)?)S)?)?"
DURATION_REGEX = re.compile(f"([-+]?)P{DATE_PART}{TIME_PART}")

_ZERO = datetime.timedelta(0)


def parse_duration(value: str) -> datetime.timedelta:
    """Parse an xs:duration into a datetime.timedelta."""
    value = value.strip()
    if (
        not (match := DURATION_REGEX.fullmatch(value))
        or value.endswith(("P", "T"))
    ):
        raise ValueError(f"Expected value to match xs:duration pattern: {value}")
    sign, years, months, days, hours, minutes, seconds = match.groups()
    if int(years or 0) or int(months or 0):
        raise ValueError(f"Duration with years or months is not supported: {value}")
    result = datetime.timedelta(
        days=int(days or 0),
        hours=int(hours or 0),
        minutes=int(minutes or 0),
        seconds=float(seconds or 0),
    )
    if sign == "-":
        result = -result
    return result


def encode_duration(duration: datetime.timedelta) -> str:
    """Serialize a time delta as an xs:duration value."""
    if duration == _ZERO:
        return "PT0S"
    parts = []
    if duration < _ZERO:
        parts.append("-")
        duration = -duration
    parts.append("P")
    if duration.days > 0:
        parts.append(f"{duration.days}D")
    if duration.seconds != 0 or duration.microseconds != 0:
        parts.append("T")
        seconds = duration.seconds
        hours = int(seconds / 3600)
        seconds %= 3600
        if hours != 0:
            parts.append(f"{hours}H")
        minutes = int(seconds / 60)
        seconds %= 60
        if minutes != 0:
            parts.append(f"{minutes}M")
        if duration.microseconds:
            fraction = f"{duration.microseconds:06d}".rstrip("0")
            parts.append(f"{seconds}.{fraction}S")
        elif seconds != 0:
            parts.append(f"{seconds}S")
    return "".join(parts)

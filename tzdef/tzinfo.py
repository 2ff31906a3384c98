"""A host time zone built from creation parameters and adjustment rules."""

from __future__ import annotations

import datetime
from collections.abc import Iterable

from .adjustment import AdjustmentRule
from .transition_group import CustomTimeZoneCreateParams

__all__ = [
    "CustomTimeZone",
]

_ZERO = datetime.timedelta(0)


class CustomTimeZone(datetime.tzinfo):
    """An implementation of tzinfo based on a base offset and adjustment rules.

    The base offset to UTC applies whenever no adjustment rule covers a date,
    or the date is outside of the daylight window of the rule. Daylight
    windows that span the end of the year, as in the southern hemisphere,
    are supported.

    This class uses the default implementation of fromutc.
    """

    def __init__(
        self,
        key: str,
        params: CustomTimeZoneCreateParams,
        adjustment_rules: Iterable[AdjustmentRule] = (),
    ) -> None:
        """Initialize CustomTimeZone."""
        self._key = key
        self._params = params
        self._adjustment_rules = list(adjustment_rules)

    def utcoffset(self, dt: datetime.datetime | None) -> datetime.timedelta:
        """Return offset of local time from UTC, as a timedelta object."""
        result = self._params.base_offset_to_utc
        if dt is not None and (dst_offset := self.dst(dt)):
            result += dst_offset
        return result

    def tzname(self, dt: datetime.datetime | None) -> str | None:
        """Return the time zone name for the datetime."""
        if dt is not None and self.dst(dt) and self._params.has_daylight_period:
            return self._params.daylight_display_name
        return self._params.standard_display_name

    def dst(self, dt: datetime.datetime | None) -> datetime.timedelta | None:
        """Return the daylight saving time (DST) adjustment, if applicable."""
        if dt is None:
            return None
        local = dt.replace(tzinfo=None)
        if (rule := self._find_rule(local)) is None or not rule.daylight_delta:
            return _ZERO
        dst_start, dst_end = rule.daylight_window(local.year)
        if dst_start <= dst_end:
            in_daylight = dst_start <= local < dst_end
        else:
            in_daylight = local >= dst_start or local < dst_end
        return rule.daylight_delta if in_daylight else _ZERO

    def _find_rule(self, value: datetime.datetime) -> AdjustmentRule | None:
        for rule in self._adjustment_rules:
            if rule.covers(value.date()):
                return rule
        return None

    def __str__(self) -> str:
        """Return the string representation of the timezone."""
        return self._key

    def __repr__(self) -> str:
        """Return the string representation of the timezone."""
        return f"{self.__class__.__name__}({self._key})"

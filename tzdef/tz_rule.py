"""Library for parsing TZ rules into periods and adjustment rules.

TZ supports these two formats

No DST: std offset
  - std: Name of the timezone
  - offset: Time added to local time to get UTC
  Example: EST+5

DST: std offset dst [offset],start[/time],end[/time]
  - dst: Name of the Daylight savings time timezone
  - offset: Defaults to 1 hour ahead of STD offset if not specified
  - start & end: Time period when DST is in effect, in the format Mm.w.d:
      m: Month between 1 and 12
      d: Between 0 (Sunday) and 6 (Saturday)
      w: Between 1 and 5. Week 1 is first week d occurs, 5 is the last
    The time field is in hh:mm:ss.

The julian day formats (Jn and n) and transition times outside of a day
(e.g. /24 or /-1) have no equivalent transition time and are rejected.
"""

from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass
from typing import Optional

from .adjustment import AdjustmentRule, DayOfWeek, TransitionTime

__all__ = [
    "Rule",
    "RuleOccurrence",
    "parse_tz_rule",
]

_LOGGER = logging.getLogger(__name__)

_ZERO = datetime.timedelta(seconds=0)
_DEFAULT_TIME_DELTA = datetime.timedelta(hours=2)
_DEFAULT_DST_DELTA = datetime.timedelta(hours=1)
_ONE_DAY = datetime.timedelta(days=1)


def _parse_time(match: re.Match[str]) -> datetime.timedelta | None:
    """Convert an offset from [+/-]hh[:mm[:ss]] to a timedelta."""
    if (hour := match.group("hour")) is None:
        return None
    sign = -1 if hour.startswith("-") else 1
    minutes = match.group("minutes") or "0"
    seconds = match.group("seconds") or "0"
    return sign * datetime.timedelta(
        hours=int(hour.lstrip("+-")), minutes=int(minutes), seconds=int(seconds)
    )


@dataclass
class RuleOccurrence:
    """A TimeZone rule occurrence."""

    name: str
    """The name of the timezone occurrence e.g. EST."""

    offset: datetime.timedelta
    """UTC offset for this timezone occurrence (not time added to local time)."""


@dataclass
class Rule:
    """A rule for evaluating future timezone transitions."""

    std: RuleOccurrence
    """An occurrence of a timezone transition for standard time."""

    dst: Optional[RuleOccurrence] = None
    """An occurrence of a timezone transition for daylight time."""

    dst_start: Optional[TransitionTime] = None
    """Describes when dst goes into effect."""

    dst_end: Optional[TransitionTime] = None
    """Describes when dst ends (std starts)."""

    @property
    def daylight_delta(self) -> datetime.timedelta:
        """Return the time added to standard time during daylight time."""
        if not self.dst:
            return _ZERO
        return self.dst.offset - self.std.offset

    def adjustment_rule(
        self,
        date_start: datetime.date | datetime.datetime,
        date_end: datetime.date | datetime.datetime,
    ) -> AdjustmentRule | None:
        """Return the adjustment rule for the range, or None without daylight time."""
        if not self.dst or not self.dst_start or not self.dst_end:
            return None
        return AdjustmentRule.create(
            date_start,
            date_end,
            self.daylight_delta,
            self.dst_start,
            self.dst_end,
        )


# Regexp for parsing the TZ string
_OFFSET_RE_PATTERN: re.Pattern[str] = re.compile(
    r"(?P<name>(\<[+\-]?\d+\>|[a-zA-Z]+))"  # name
    r"((?P<hour>[+-]?\d+)(?::(?P<minutes>\d{1,2})(?::(?P<seconds>\d{1,2}))?)?)?"  # offset
)
_START_END_RE_PATTERN = re.compile(
    # days in julian (J prefix or bare) or month.week.day (M prefix) format
    r",(?P<julian>J?\d+|M(?P<month>\d{1,2})\.(?P<week_of_month>\d)\.(?P<day_of_week>\d))"
    # time
    r"(\/(?P<hour>[+-]?\d+)(?::(?P<minutes>\d{1,2})(?::(?P<seconds>\d{1,2}))?)?)?"
)


def _rule_occurrence_from_match(match: re.Match[str]) -> RuleOccurrence:
    """Create a rule occurrence, converting time added to local time to a UTC offset."""
    return RuleOccurrence(
        name=match.group("name"), offset=_ZERO - (_parse_time(match) or _ZERO)
    )


def _transition_time_from_match(match: re.Match[str]) -> TransitionTime:
    """Create a transition time from a regex match."""
    if match.group("month") is None:
        raise ValueError(f"Julian day rules are not supported: {match.group('julian')}")
    if (time_of_day := _parse_time(match)) is None:
        time_of_day = _DEFAULT_TIME_DELTA
    if not _ZERO <= time_of_day < _ONE_DAY:
        raise ValueError(
            f"Transition times outside of a day are not supported: {match.group(0)}"
        )
    return TransitionTime.floating_date(
        time_of_day,
        month=int(match.group("month")),
        week=int(match.group("week_of_month")),
        day_of_week=DayOfWeek.from_index(int(match.group("day_of_week"))),
    )


def parse_tz_rule(tz_str: str) -> Rule:
    """Parse the TZ string into a Rule object."""
    buffer = tz_str
    if (std_match := _OFFSET_RE_PATTERN.match(buffer)) is None:
        raise ValueError(f"Unable to parse TZ string: {tz_str}")
    buffer = buffer[std_match.end() :]
    if (dst_match := _OFFSET_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[dst_match.end() :]
    if (dst_start := _START_END_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[dst_start.end() :]
    if (dst_end := _START_END_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[dst_end.end() :]
    if (dst_start is None) != (dst_end is None):
        raise ValueError(
            f"Unable to parse TZ string, should have both or neither start and end dates: {tz_str}"
        )
    if buffer:
        raise ValueError(
            f"Unable to parse TZ string, unexpected trailing data: {tz_str}"
        )
    std = _rule_occurrence_from_match(std_match)
    dst = None
    if dst_match:
        dst = _rule_occurrence_from_match(dst_match)
        if dst_match.group("hour") is None:
            # If the dst offset is omitted, it defaults to one hour ahead of standard time.
            dst.offset = std.offset + _DEFAULT_DST_DELTA
    _LOGGER.debug("Parsed TZ string %s", tz_str)
    return Rule(
        std=std,
        dst=dst,
        dst_start=_transition_time_from_match(dst_start) if dst_start else None,
        dst_end=_transition_time_from_match(dst_end) if dst_end else None,
    )

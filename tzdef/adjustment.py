"""Host calendar adjustment rules.

An adjustment rule describes a daylight saving window for a range of
dates: the amount of time added during daylight time and the recurring
transition times into and out of daylight time. This is the model that
transition groups are converted to and from.

The recurring transition times are expanded for a specific year with
`dateutil.rrule`, for example the second Sunday in March:

```python
import datetime
from tzdef.adjustment import DayOfWeek, TransitionTime

transition_time = TransitionTime.floating_date(
    datetime.timedelta(hours=2), month=3, week=2, day_of_week=DayOfWeek.SUNDAY
)
print(transition_time.occurrence(2022))
```
"""

from __future__ import annotations

import calendar
import datetime
import enum
from dataclasses import dataclass

from dateutil import rrule

__all__ = [
    "DayOfWeek",
    "TransitionTime",
    "AdjustmentRule",
]

_ZERO = datetime.timedelta(0)
_ONE_DAY = datetime.timedelta(days=1)
_LAST_WEEK = 5


class DayOfWeek(str, enum.Enum):
    """Corresponds to a day of the week, using the wire names."""

    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_index(cls, index: int) -> DayOfWeek:
        """Return the day of the week from 0 (Sunday) to 6 (Saturday)."""
        if not 0 <= index <= 6:
            raise ValueError(f"Day of week must be between 0 and 6: {index}")
        return list(cls)[index]

    @property
    def day_index(self) -> int:
        """Return the day of the week from 0 (Sunday) to 6 (Saturday)."""
        return list(DayOfWeek).index(self)

    @property
    def rrule_weekday(self) -> rrule.weekday:
        """Return the dateutil weekday."""
        return rrule.weekdays[(self.day_index - 1) % 7]


@dataclass(frozen=True)
class TransitionTime:
    """The local time of year at which a daylight saving transition happens.

    A fixed date rule happens on the same month and day every year. A
    floating date rule happens on a day of the week in a week of the month,
    e.g. the last Sunday in October.
    """

    time_of_day: datetime.timedelta
    """Offset from local midnight when the transition goes into effect."""

    month: int
    """A month between 1 and 12."""

    week: int = 1
    """A week of the month (1 to 5) based on the first occurrence of day_of_week, 5 is the last week."""

    day_of_week: DayOfWeek = DayOfWeek.SUNDAY
    """Day of the week of a floating date rule."""

    day: int = 1
    """Day of the month of a fixed date rule."""

    is_fixed_date_rule: bool = False
    """Whether the transition happens on a fixed day of the month."""

    def __post_init__(self) -> None:
        """Verify the transition time is in range."""
        if not _ZERO <= self.time_of_day < _ONE_DAY:
            raise ValueError(f"Time of day must be within a day: {self.time_of_day}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12: {self.month}")
        if self.is_fixed_date_rule:
            if not 1 <= self.day <= 31:
                raise ValueError(f"Day must be between 1 and 31: {self.day}")
        elif not 1 <= self.week <= _LAST_WEEK:
            raise ValueError(f"Week must be between 1 and 5: {self.week}")

    @classmethod
    def fixed_date(
        cls, time_of_day: datetime.timedelta, month: int, day: int
    ) -> TransitionTime:
        """Create a transition time on the same day every year."""
        return cls(time_of_day=time_of_day, month=month, day=day, is_fixed_date_rule=True)

    @classmethod
    def floating_date(
        cls,
        time_of_day: datetime.timedelta,
        month: int,
        week: int,
        day_of_week: DayOfWeek,
    ) -> TransitionTime:
        """Create a transition time on a day of the week within a month."""
        return cls(
            time_of_day=time_of_day, month=month, week=week, day_of_week=day_of_week
        )

    def as_rrule(self, dtstart: datetime.datetime) -> rrule.rrule:
        """Return a yearly recurrence rule for a floating date rule."""
        if self.is_fixed_date_rule:
            raise ValueError("Fixed date rules are not expanded with a recurrence rule")
        week = -1 if self.week == _LAST_WEEK else self.week
        return rrule.rrule(
            freq=rrule.YEARLY,
            bymonth=self.month,
            byweekday=self.day_of_week.rrule_weekday(week),
            dtstart=dtstart,
        )

    def occurrence(self, year: int) -> datetime.datetime:
        """Return the local date and time of the transition in the year."""
        if self.is_fixed_date_rule:
            # Clamp e.g. February 29th in years without a leap day
            last_day = calendar.monthrange(year, self.month)[1]
            day = datetime.datetime(year, self.month, min(self.day, last_day))
        else:
            day = next(iter(self.as_rrule(datetime.datetime(year, 1, 1))))
        return day + self.time_of_day


def _as_date(value: datetime.date | datetime.datetime) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class AdjustmentRule:
    """A daylight saving window for a range of dates."""

    date_start: datetime.date
    """The first day the rule is in effect."""

    date_end: datetime.date
    """The last day the rule is in effect."""

    daylight_delta: datetime.timedelta
    """The time added to the base offset to UTC during daylight time."""

    daylight_transition_start: TransitionTime
    """When daylight time begins each year."""

    daylight_transition_end: TransitionTime
    """When daylight time ends each year."""

    def __post_init__(self) -> None:
        """Verify the date range."""
        if self.date_end < self.date_start:
            raise ValueError(
                f"Adjustment rule end {self.date_end} is before start {self.date_start}"
            )

    @classmethod
    def create(
        cls,
        date_start: datetime.date | datetime.datetime,
        date_end: datetime.date | datetime.datetime,
        daylight_delta: datetime.timedelta,
        daylight_transition_start: TransitionTime,
        daylight_transition_end: TransitionTime,
    ) -> AdjustmentRule:
        """Create an adjustment rule, dropping any time of day from the dates."""
        return cls(
            date_start=_as_date(date_start),
            date_end=_as_date(date_end),
            daylight_delta=daylight_delta,
            daylight_transition_start=daylight_transition_start,
            daylight_transition_end=daylight_transition_end,
        )

    def covers(self, value: datetime.date) -> bool:
        """Return true if the rule is in effect on the date."""
        return self.date_start <= _as_date(value) <= self.date_end

    def daylight_window(
        self, year: int
    ) -> tuple[datetime.datetime, datetime.datetime]:
        """Return the local start and end of daylight time within the year."""
        return (
            self.daylight_transition_start.occurrence(year),
            self.daylight_transition_end.occurrence(year),
        )

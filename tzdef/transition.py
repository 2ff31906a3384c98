"""A transition that switches the observed time zone period.

A transition within a transition group is one of two kinds:

- An absolute transition switches to its target period and stays there,
  used for locations without daylight saving time.
- A recurring transition switches to its target period every year at the
  time described by a `TransitionTime`, either a fixed date or a day of the
  week within a month.

Callers distinguish the two by `Transition.kind`.
"""

from __future__ import annotations

import enum
import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from . import wire
from .adjustment import DayOfWeek, TransitionTime
from .duration import encode_duration, parse_duration
from .exceptions import (
    InvalidTimeZoneDefinitionError,
    MissingPeriodError,
    TimeZoneParseError,
)
from .period import Period

__all__ = [
    "TransitionKind",
    "Transition",
    "resolve_target",
]

_LOGGER = logging.getLogger(__name__)

_LAST_OCCURRENCE = -1
_LAST_WEEK = 5


class TransitionKind(str, enum.Enum):
    """The kind of a transition within a transition group."""

    ABSOLUTE = "ABSOLUTE"
    """Switch to the target period unconditionally."""

    RECURRING = "RECURRING"
    """Switch to the target period at a recurring time every year."""


def resolve_target(periods: Mapping[str, Period], period_id: str) -> Period:
    """Return the period with the id, raising MissingPeriodError if absent."""
    if (period := periods.get(period_id)) is None:
        raise MissingPeriodError(period_id)
    return period


@dataclass
class Transition:
    """A transition to a time zone period."""

    kind: TransitionKind
    """Determines if the transition is absolute or recurring."""

    target_period: Period
    """The period observed after the transition."""

    transition_time: Optional[TransitionTime] = None
    """When a recurring transition happens each year, unset for absolute transitions."""

    def __post_init__(self) -> None:
        """Verify the transition time is present only for recurring transitions."""
        if self.kind == TransitionKind.RECURRING and self.transition_time is None:
            raise ValueError("A recurring transition requires a transition time")
        if self.kind == TransitionKind.ABSOLUTE and self.transition_time is not None:
            raise ValueError("An absolute transition does not have a transition time")

    @classmethod
    def absolute(cls, target_period: Period) -> Transition:
        """Create a transition that switches to the period unconditionally."""
        return cls(kind=TransitionKind.ABSOLUTE, target_period=target_period)

    @classmethod
    def recurring(
        cls, target_period: Period, transition_time: TransitionTime
    ) -> Transition:
        """Create a transition that switches to the period every year."""
        return cls(
            kind=TransitionKind.RECURRING,
            target_period=target_period,
            transition_time=transition_time,
        )

    @property
    def element_name(self) -> str:
        """Return the wire element name for this transition."""
        if self.kind == TransitionKind.ABSOLUTE:
            return wire.TRANSITION
        if self.kind == TransitionKind.RECURRING:
            if self.create_transition_time().is_fixed_date_rule:
                return wire.RECURRING_DATE_TRANSITION
            return wire.RECURRING_DAY_TRANSITION
        raise ValueError(f"Unknown transition kind: {self.kind}")

    def create_transition_time(self) -> TransitionTime:
        """Return the yearly transition time of a recurring transition."""
        if self.transition_time is None:
            raise ValueError("An absolute transition does not have a transition time")
        return self.transition_time

    @classmethod
    def from_xml(cls, element: ET.Element, periods: Mapping[str, Period]) -> Transition:
        """Load a transition within a transition group from a wire element."""
        name = wire.local_name(element)
        if name == wire.TRANSITION:
            kind = TransitionKind.ABSOLUTE
        elif name in (wire.RECURRING_DAY_TRANSITION, wire.RECURRING_DATE_TRANSITION):
            kind = TransitionKind.RECURRING
        else:
            raise InvalidTimeZoneDefinitionError(
                f"Unsupported transition '{name}' in transition group"
            )
        target_period = resolve_target(periods, _read_target_period_id(element))
        transition_time = None
        if kind == TransitionKind.RECURRING:
            transition_time = _read_transition_time(element)
        _LOGGER.debug("Loaded %s transition to %s", kind.value, target_period.id)
        return cls(
            kind=kind, target_period=target_period, transition_time=transition_time
        )

    def to_xml(self, parent: ET.Element | None = None) -> ET.Element:
        """Write the transition as a wire element."""
        element = wire.write_element(parent, self.element_name)
        wire.write_element(
            element,
            wire.TO,
            self.target_period.id,
            attributes={wire.KIND: wire.KIND_PERIOD},
        )
        if self.kind == TransitionKind.RECURRING:
            _write_transition_time(element, self.create_transition_time())
        return element


def _read_target_period_id(element: ET.Element) -> str:
    if (to := wire.find_child(element, wire.TO)) is None:
        raise TimeZoneParseError(
            f"Transition '{wire.local_name(element)}' is missing a target"
        )
    if to.get(wire.KIND) != wire.KIND_PERIOD:
        raise InvalidTimeZoneDefinitionError(
            f"Transition in a transition group must target a period, not '{to.get(wire.KIND)}'"
        )
    return (to.text or "").strip()


def _read_transition_time(element: ET.Element) -> TransitionTime:
    time_offset = wire.read_child_text(element, wire.TIME_OFFSET)
    try:
        time_of_day = parse_duration(time_offset)
    except ValueError as err:
        raise TimeZoneParseError(
            f"Invalid transition time offset '{time_offset}'", detailed_error=str(err)
        ) from err
    month = wire.read_child_int(element, wire.MONTH)
    try:
        if wire.local_name(element) == wire.RECURRING_DATE_TRANSITION:
            return TransitionTime.fixed_date(
                time_of_day, month=month, day=wire.read_child_int(element, wire.DAY)
            )
        day_of_week = DayOfWeek(wire.read_child_text(element, wire.DAY_OF_WEEK))
        occurrence = wire.read_child_int(element, wire.OCCURRENCE)
        return TransitionTime.floating_date(
            time_of_day,
            month=month,
            week=_LAST_WEEK if occurrence == _LAST_OCCURRENCE else occurrence,
            day_of_week=day_of_week,
        )
    except ValueError as err:
        raise TimeZoneParseError(
            f"Invalid recurring transition '{wire.local_name(element)}'",
            detailed_error=str(err),
        ) from err


def _write_transition_time(element: ET.Element, transition_time: TransitionTime) -> None:
    wire.write_element(
        element, wire.TIME_OFFSET, encode_duration(transition_time.time_of_day)
    )
    wire.write_element(element, wire.MONTH, str(transition_time.month))
    if transition_time.is_fixed_date_rule:
        wire.write_element(element, wire.DAY, str(transition_time.day))
        return
    wire.write_element(element, wire.DAY_OF_WEEK, transition_time.day_of_week.value)
    occurrence = transition_time.week
    if occurrence == _LAST_WEEK:
        occurrence = _LAST_OCCURRENCE
    wire.write_element(element, wire.OCCURRENCE, str(occurrence))

"""A complete time zone definition made of periods and transition groups.

A time zone definition owns the periods referenced by its transitions,
the transition groups describing the rules for a span of years, and the
transitions that switch between groups on specific dates.

This is an example of loading a definition from the wire format and using
it as a `datetime.tzinfo`:

```python
import datetime
from pathlib import Path

from tzdef.definition import TimeZoneDefinition

definition = TimeZoneDefinition.from_xml_string(Path("definition.xml").read_text())
tzinfo = definition.to_tzinfo()
print(datetime.datetime(2022, 7, 1, 12, tzinfo=tzinfo).utcoffset())
```

A definition can also be created from host adjustment rules and encoded
back to the wire format with `to_xml_string()`.
"""

from __future__ import annotations

import datetime
import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from . import wire
from .adjustment import AdjustmentRule
from .exceptions import InvalidTimeZoneDefinitionError, TimeZoneParseError
from .period import STANDARD_PERIOD_ID, STANDARD_PERIOD_NAME, Period
from .transition import Transition
from .transition_group import CustomTimeZoneCreateParams, TransitionGroup
from .tz_rule import parse_tz_rule
from .tzinfo import CustomTimeZone

__all__ = [
    "TimeZoneDefinition",
    "GroupTransition",
]

_LOGGER = logging.getLogger(__name__)

_ONE_DAY = datetime.timedelta(days=1)

# Assume that rules from a TZ string start at an arbitrary old date. Only the
# current rules are known so earlier dates use the standard period.
_TZ_START = datetime.date(2010, 1, 1)


@dataclass
class GroupTransition:
    """A transition to a transition group, optionally from a specific date."""

    group_id: str
    """The id of the transition group in effect after the transition."""

    date_time: Optional[datetime.datetime] = None
    """When the group goes into effect, unset for the first transition."""

    @classmethod
    def from_xml(cls, element: ET.Element) -> GroupTransition:
        """Load a definition level Transition or AbsoluteDateTransition element."""
        name = wire.local_name(element)
        if name not in (wire.TRANSITION, wire.ABSOLUTE_DATE_TRANSITION):
            raise InvalidTimeZoneDefinitionError(
                f"Unsupported transition '{name}' in time zone definition"
            )
        if (to := wire.find_child(element, wire.TO)) is None:
            raise TimeZoneParseError(f"Transition '{name}' is missing a target")
        if to.get(wire.KIND) != wire.KIND_GROUP:
            raise InvalidTimeZoneDefinitionError(
                f"Transition in a time zone definition must target a group, not '{to.get(wire.KIND)}'"
            )
        date_time = None
        if name == wire.ABSOLUTE_DATE_TRANSITION:
            value = wire.read_child_text(element, wire.DATE_TIME)
            try:
                date_time = datetime.datetime.fromisoformat(value).replace(tzinfo=None)
            except ValueError as err:
                raise TimeZoneParseError(
                    f"Invalid transition date time '{value}'", detailed_error=str(err)
                ) from err
        return cls(group_id=(to.text or "").strip(), date_time=date_time)

    def to_xml(self, parent: ET.Element | None = None) -> ET.Element:
        """Write the transition as a wire element."""
        if self.date_time is None:
            element = wire.write_element(parent, wire.TRANSITION)
        else:
            element = wire.write_element(parent, wire.ABSOLUTE_DATE_TRANSITION)
        wire.write_element(
            element, wire.TO, self.group_id, attributes={wire.KIND: wire.KIND_GROUP}
        )
        if self.date_time is not None:
            wire.write_element(element, wire.DATE_TIME, self.date_time.isoformat())
        return element


@dataclass
class TimeZoneDefinition:
    """A time zone definition."""

    id: str
    """An identifier for the time zone e.g. Pacific Standard Time."""

    name: str = ""
    """The display name of the time zone."""

    periods: dict[str, Period] = field(default_factory=dict)
    """The periods of the definition keyed by id."""

    transition_groups: dict[str, TransitionGroup] = field(default_factory=dict)
    """The transition groups of the definition keyed by id."""

    transitions: list[GroupTransition] = field(default_factory=list)
    """Transitions between groups, ordered by date."""

    @classmethod
    def from_xml(cls, element: ET.Element) -> TimeZoneDefinition:
        """Load a definition from a wire TimeZoneDefinition element."""
        wire.ensure_start_element(element, wire.TIME_ZONE_DEFINITION)
        definition = cls(
            id=wire.read_attribute(element, wire.ID),
            name=element.get(wire.NAME, ""),
        )
        if (periods := wire.find_child(element, wire.PERIODS)) is not None:
            for child in wire.child_elements(periods, wire.PERIOD):
                period = Period.from_xml(child)
                definition.periods[period.id] = period
        if (groups := wire.find_child(element, wire.TRANSITIONS_GROUPS)) is not None:
            for child in wire.child_elements(groups, wire.TRANSITIONS_GROUP):
                group = TransitionGroup.from_xml(child, definition.periods)
                definition.transition_groups[group.id] = group
        if (transitions := wire.find_child(element, wire.TRANSITIONS)) is not None:
            for child in transitions:
                definition.transitions.append(GroupTransition.from_xml(child))
        _LOGGER.debug(
            "Loaded time zone definition %s with %d period(s) and %d group(s)",
            definition.id,
            len(definition.periods),
            len(definition.transition_groups),
        )
        return definition

    @classmethod
    def from_xml_string(cls, content: str) -> TimeZoneDefinition:
        """Load a definition from wire xml content."""
        return cls.from_xml(wire.parse_xml(content))

    def to_xml(self) -> ET.Element:
        """Write the definition as a wire TimeZoneDefinition element."""
        element = wire.write_element(
            None,
            wire.TIME_ZONE_DEFINITION,
            attributes={wire.ID: self.id, wire.NAME: self.name},
        )
        periods = wire.write_element(element, wire.PERIODS)
        for period in self.periods.values():
            period.to_xml(periods)
        groups = wire.write_element(element, wire.TRANSITIONS_GROUPS)
        for group in self.transition_groups.values():
            group.to_xml(groups)
        transitions = wire.write_element(element, wire.TRANSITIONS)
        for transition in self.transitions:
            transition.to_xml(transitions)
        return element

    def to_xml_string(self) -> str:
        """Encode the definition as wire xml content."""
        return wire.encode_xml(self.to_xml())

    def validate(self) -> None:
        """Verify the definition and all of its transition groups."""
        if not self.periods or not self.transition_groups or not self.transitions:
            raise InvalidTimeZoneDefinitionError(
                f"Time zone definition {self.id} requires periods, groups, and transitions"
            )
        if self.transitions[0].date_time is not None:
            raise InvalidTimeZoneDefinitionError(
                f"Time zone definition {self.id} first transition must not have a date"
            )
        for group in self.transition_groups.values():
            group.validate()
        for transition in self.transitions:
            if transition.group_id not in self.transition_groups:
                raise InvalidTimeZoneDefinitionError(
                    f"Time zone definition {self.id} references unknown group {transition.group_id}"
                )

    def _windows(
        self,
    ) -> Iterable[tuple[TransitionGroup, datetime.date, datetime.date]]:
        """Return each group with the first and last day it is in effect."""
        for index, transition in enumerate(self.transitions):
            start = datetime.date.min
            if transition.date_time is not None:
                start = transition.date_time.date()
            end = datetime.date.max
            if index + 1 < len(self.transitions):
                next_date_time = self.transitions[index + 1].date_time
                if next_date_time is not None:
                    end = next_date_time.date() - _ONE_DAY
            if end < start:
                continue
            yield (self.transition_groups[transition.group_id], start, end)

    def adjustment_rules(self) -> list[AdjustmentRule]:
        """Return the adjustment rules for each group with a daylight window."""
        rules = []
        for group, start, end in self._windows():
            if (rule := group.create_adjustment_rule(start, end)) is not None:
                rules.append(rule)
        return rules

    def custom_time_zone_create_params(self) -> CustomTimeZoneCreateParams:
        """Return the creation parameters from the group currently in effect."""
        if not self.transitions:
            raise InvalidTimeZoneDefinitionError(
                f"Time zone definition {self.id} has no transitions"
            )
        group = self.transition_groups[self.transitions[-1].group_id]
        return group.custom_time_zone_create_params()

    def to_tzinfo(self) -> CustomTimeZone:
        """Create a host time zone from the definition."""
        self.validate()
        return CustomTimeZone(
            self.id, self.custom_time_zone_create_params(), self.adjustment_rules()
        )

    @classmethod
    def from_adjustment_rules(
        cls,
        tz_id: str,
        name: str,
        base_offset_to_utc: datetime.timedelta,
        adjustment_rules: Iterable[AdjustmentRule] = (),
    ) -> TimeZoneDefinition:
        """Create a definition from host adjustment rules.

        Each rule gets its own transition group. Dates not covered by any
        rule use a group with a single transition to the standard period.
        Periods use the well known Standard and Daylight names since the
        standard period is found by name when loading from the wire.
        """
        definition = cls(id=tz_id, name=name)
        # Wire bias is the negated UTC offset
        standard = Period(
            id=STANDARD_PERIOD_ID, name=STANDARD_PERIOD_NAME, bias=-base_offset_to_utc
        )
        definition.periods[standard.id] = standard

        cursor: datetime.date | None = datetime.date.min
        for rule in sorted(adjustment_rules, key=lambda value: value.date_start):
            if cursor is None or rule.date_start < cursor:
                raise ValueError(f"Adjustment rules overlap at {rule.date_start}")
            if rule.date_start > cursor:
                definition._add_standard_group(standard, cursor)
            group = TransitionGroup.from_adjustment_rule(
                str(len(definition.transition_groups)),
                rule,
                standard,
                definition.periods,
            )
            definition._add_group(group, rule.date_start)
            cursor = None
            if rule.date_end < datetime.date.max:
                cursor = rule.date_end + _ONE_DAY
        if cursor is not None:
            definition._add_standard_group(standard, cursor)
        return definition

    @classmethod
    def from_tz_string(
        cls,
        tz_id: str,
        tz_str: str,
        start: datetime.date = _TZ_START,
    ) -> TimeZoneDefinition:
        """Create a definition from a POSIX TZ string e.g. EST5EDT,M3.2.0,M11.1.0."""
        rule = parse_tz_rule(tz_str)
        adjustment_rules = []
        if (adjustment_rule := rule.adjustment_rule(start, datetime.date.max)) is not None:
            adjustment_rules.append(adjustment_rule)
        return cls.from_adjustment_rules(
            tz_id, tz_id, rule.std.offset, adjustment_rules
        )

    def _add_standard_group(self, standard: Period, start: datetime.date) -> None:
        group = TransitionGroup(
            id=str(len(self.transition_groups)),
            transitions=[Transition.absolute(standard)],
        )
        self._add_group(group, start)

    def _add_group(self, group: TransitionGroup, start: datetime.date) -> None:
        self.transition_groups[group.id] = group
        date_time = None
        if self.transitions:
            date_time = datetime.datetime.combine(start, datetime.time())
        self.transitions.append(GroupTransition(group_id=group.id, date_time=date_time))

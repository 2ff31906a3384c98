"""A group of transitions describing one year's standard and daylight periods.

A transition group is the unit that converts between the wire format and
host adjustment rules. A valid group has either:

- A single absolute transition to a standard period, for a location that
  does not observe daylight saving time.
- Two recurring transitions, one to a daylight period and one to a
  standard period.

This is an example of loading a group and creating an adjustment rule:

```python
import datetime
import xml.etree.ElementTree as ET

from tzdef.transition_group import TransitionGroup

group = TransitionGroup.from_xml(ET.fromstring(content), periods)
group.validate()
rule = group.create_adjustment_rule(
    datetime.datetime(2007, 1, 1), datetime.datetime(2007, 12, 31)
)
```

Periods use the wire sign convention for their bias (positive is behind
UTC) so the conversion to host values negates the standard bias, while the
daylight delta is the standard bias minus the daylight bias.
"""

from __future__ import annotations

import datetime
import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Optional

from . import wire
from .adjustment import AdjustmentRule
from .exceptions import InvalidTimeZoneDefinitionError
from .period import DAYLIGHT_PERIOD_ID, DAYLIGHT_PERIOD_NAME, Period
from .transition import Transition, TransitionKind

__all__ = [
    "TransitionGroup",
    "CustomTimeZoneCreateParams",
]

_LOGGER = logging.getLogger(__name__)

_ZERO = datetime.timedelta(0)


@dataclass
class CustomTimeZoneCreateParams:
    """Parameters used to create a host time zone."""

    base_offset_to_utc: datetime.timedelta
    """The UTC offset of standard time (positive is ahead of UTC)."""

    standard_display_name: str
    """The name of the standard period."""

    daylight_display_name: Optional[str] = None
    """The name of the daylight period, if any."""

    @property
    def has_daylight_period(self) -> bool:
        """Return true if the time zone should have a daylight period."""
        return bool(self.daylight_display_name)


@dataclass(frozen=True)
class _Classification:
    """The transitions of a group to the standard and daylight periods."""

    to_standard: Transition
    to_daylight: Optional[Transition]


@dataclass
class TransitionGroup:
    """A group of one or two transitions within a time zone definition."""

    id: str
    """The wire identifier of the group, unique within a definition."""

    transitions: list[Transition] = field(default_factory=list)
    """The transitions in the order they were loaded or created."""

    _classification: Optional[_Classification] = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_xml(
        cls, element: ET.Element, periods: Mapping[str, Period]
    ) -> TransitionGroup:
        """Load a group from a wire TransitionsGroup element.

        The transition targets are resolved against the periods already
        loaded into the definition. The group is not validated.
        """
        wire.ensure_start_element(element, wire.TRANSITIONS_GROUP)
        group = cls(id=wire.read_attribute(element, wire.ID))
        for child in element:
            transition = Transition.from_xml(child, periods)
            assert (
                transition.target_period is not None
            ), "The transition's target period is null"
            group.transitions.append(transition)
        _LOGGER.debug(
            "Loaded transition group %s with %d transition(s)",
            group.id,
            len(group.transitions),
        )
        return group

    def to_xml(self, parent: ET.Element | None = None) -> ET.Element:
        """Write the group as a wire TransitionsGroup element."""
        element = wire.write_element(
            parent, wire.TRANSITIONS_GROUP, attributes={wire.ID: self.id}
        )
        for transition in self.transitions:
            transition.to_xml(element)
        return element

    @classmethod
    def from_adjustment_rule(
        cls,
        group_id: str,
        adjustment_rule: AdjustmentRule,
        standard_period: Period,
        periods: MutableMapping[str, Period],
    ) -> TransitionGroup:
        """Create a group from a host adjustment rule.

        New periods for the year the rule starts are added to the periods,
        e.g. `Std/2008` and `Dlt/2008`.
        """
        year = adjustment_rule.date_start.year
        group = cls(id=group_id)
        standard = standard_period.with_id(f"{standard_period.id}/{year}")
        if adjustment_rule.daylight_delta == _ZERO:
            periods[standard.id] = standard
            to_standard = Transition.absolute(standard)
            group.transitions.append(to_standard)
            group._classification = _Classification(to_standard, None)
            return group

        daylight = Period(
            id=f"{DAYLIGHT_PERIOD_ID}/{year}",
            name=DAYLIGHT_PERIOD_NAME,
            bias=standard_period.bias - adjustment_rule.daylight_delta,
        )
        periods[daylight.id] = daylight
        to_daylight = Transition.recurring(
            daylight, adjustment_rule.daylight_transition_start
        )
        periods[standard.id] = standard
        to_standard = Transition.recurring(
            standard, adjustment_rule.daylight_transition_end
        )
        group.transitions.extend([to_daylight, to_standard])
        group._classification = _Classification(to_standard, to_daylight)
        _LOGGER.debug(
            "Created transition group %s with periods %s, %s",
            group.id,
            daylight.id,
            standard.id,
        )
        return group

    def validate(self) -> None:
        """Verify the group has a supported set of transitions."""
        if not 1 <= len(self.transitions) <= 2:
            raise InvalidTimeZoneDefinitionError(
                f"Transition group {self.id} must have one or two transitions, "
                f"found {len(self.transitions)}"
            )
        if (
            len(self.transitions) == 1
            and self.transitions[0].kind != TransitionKind.ABSOLUTE
        ):
            raise InvalidTimeZoneDefinitionError(
                f"Transition group {self.id} with one transition must be absolute"
            )
        if len(self.transitions) == 2 and any(
            transition.kind == TransitionKind.ABSOLUTE
            for transition in self.transitions
        ):
            raise InvalidTimeZoneDefinitionError(
                f"Transition group {self.id} with two transitions must be recurring"
            )
        for transition in self.transitions:
            if transition.target_period is None:
                raise InvalidTimeZoneDefinitionError(
                    f"Transition group {self.id} has a transition without a period"
                )

    def _classify(self) -> _Classification:
        """Find the transitions to the standard and daylight periods."""
        if self._classification is not None:
            return self._classification
        to_standard: Transition | None = None
        to_daylight: Transition | None = None
        for transition in self.transitions:
            if (
                transition.target_period.is_standard_period
                or len(self.transitions) == 1
            ):
                to_standard = transition
            else:
                to_daylight = transition
        if to_standard is None:
            raise InvalidTimeZoneDefinitionError(
                f"Transition group {self.id} has no transition to a standard period"
            )
        self._classification = _Classification(to_standard, to_daylight)
        return self._classification

    @property
    def transition_to_standard(self) -> Transition:
        """Return the transition to the standard period."""
        return self._classify().to_standard

    @property
    def transition_to_daylight(self) -> Transition | None:
        """Return the transition to the daylight period, if any."""
        return self._classify().to_daylight

    @property
    def supports_daylight(self) -> bool:
        """Return true if the group contains a transition to daylight."""
        return len(self.transitions) == 2

    def daylight_delta(self) -> datetime.timedelta:
        """Return the time added to standard time during daylight time."""
        if not self.supports_daylight:
            return _ZERO
        if (to_daylight := self.transition_to_daylight) is None:
            raise InvalidTimeZoneDefinitionError(
                f"Transition group {self.id} has no transition to a daylight period"
            )
        # The wire bias is positive behind UTC, so the subtraction order
        # already gives the host sign.
        standard_bias = self.transition_to_standard.target_period.bias
        return standard_bias - to_daylight.target_period.bias

    def custom_time_zone_create_params(self) -> CustomTimeZoneCreateParams:
        """Return the parameters for creating a host time zone from this group."""
        to_standard = self.transition_to_standard
        to_daylight = self.transition_to_daylight
        return CustomTimeZoneCreateParams(
            # The standard bias is the base offset, with the sign flipped to
            # a UTC offset.
            base_offset_to_utc=-to_standard.target_period.bias,
            standard_display_name=to_standard.target_period.name,
            daylight_display_name=(
                to_daylight.target_period.name if to_daylight else None
            ),
        )

    def create_adjustment_rule(
        self,
        start_date: datetime.date | datetime.datetime,
        end_date: datetime.date | datetime.datetime,
    ) -> AdjustmentRule | None:
        """Create an adjustment rule in effect for the whole days of the range.

        A group with one transition has no daylight window, so there is no
        rule and the base offset applies for the whole range.
        """
        if len(self.transitions) == 1:
            return None
        daylight_delta = self.daylight_delta()
        if (to_daylight := self.transition_to_daylight) is None:
            raise InvalidTimeZoneDefinitionError(
                f"Transition group {self.id} has no transition to a daylight period"
            )
        return AdjustmentRule.create(
            start_date,
            end_date,
            daylight_delta,
            to_daylight.create_transition_time(),
            self.transition_to_standard.create_transition_time(),
        )

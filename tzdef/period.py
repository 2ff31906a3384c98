"""A named offset from UTC observed for part of a year.

The bias of a period follows the wire convention: it is the time added to
local time to get UTC. A location behind UTC has a positive bias, e.g. a
bias of `PT5H` is UTC-05:00. This is the opposite sign of a UTC offset as
used by `datetime.tzinfo`.
"""

from __future__ import annotations

import datetime
import xml.etree.ElementTree as ET
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from . import wire
from .duration import encode_duration, parse_duration
from .exceptions import TimeZoneParseError

__all__ = [
    "Period",
    "STANDARD_PERIOD_ID",
    "STANDARD_PERIOD_NAME",
    "DAYLIGHT_PERIOD_ID",
    "DAYLIGHT_PERIOD_NAME",
]

STANDARD_PERIOD_ID = "Std"
STANDARD_PERIOD_NAME = "Standard"
DAYLIGHT_PERIOD_ID = "Dlt"
DAYLIGHT_PERIOD_NAME = "Daylight"


class Period(BaseModel):
    """A time zone period, identified by an id unique within a definition."""

    model_config = ConfigDict(frozen=True)

    id: str
    """An identifier for the period, unique within a time zone definition."""

    name: str
    """The display name of the period e.g. Standard or Daylight."""

    bias: datetime.timedelta
    """Time added to local time to get UTC (positive is behind UTC)."""

    @field_validator("bias", mode="before")
    @classmethod
    def parse_bias(cls, value: Any) -> Any:
        """Accept a wire xs:duration as the bias."""
        if isinstance(value, str):
            return parse_duration(value)
        return value

    @property
    def is_standard_period(self) -> bool:
        """Return true if this is a standard time period."""
        return self.name.casefold() == STANDARD_PERIOD_NAME.casefold()

    def with_id(self, period_id: str) -> Period:
        """Return a copy of this period with a new id."""
        return self.model_copy(update={"id": period_id})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @classmethod
    def from_xml(cls, element: ET.Element) -> Period:
        """Load a period from a wire Period element."""
        wire.ensure_start_element(element, wire.PERIOD)
        values = {
            "id": wire.read_attribute(element, wire.ID),
            "name": wire.read_attribute(element, wire.NAME),
            "bias": wire.read_attribute(element, wire.BIAS),
        }
        try:
            return cls(**values)
        except ValidationError as err:
            raise TimeZoneParseError(
                f"Invalid period '{values['id']}'", detailed_error=str(err)
            ) from err

    def to_xml(self, parent: ET.Element | None = None) -> ET.Element:
        """Write the period as a wire Period element."""
        return wire.write_element(
            parent,
            wire.PERIOD,
            attributes={
                wire.BIAS: encode_duration(self.bias),
                wire.NAME: self.name,
                wire.ID: self.id,
            },
        )

"""Element and attribute names and helpers for reading and writing wire xml.

The wire format is the xml used by the exchange web services time zone
definitions. Elements are read from and written to `xml.etree.ElementTree`
elements. Elements are written in the types namespace, and both namespaced
and bare element names are accepted when reading.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import xml.etree.ElementTree as ET

from .exceptions import TimeZoneParseError

_LOGGER = logging.getLogger(__name__)

NAMESPACE = "http://schemas.microsoft.com/exchange/services/2006/types"
PREFIX = "t"

# Element names
TIME_ZONE_DEFINITION = "TimeZoneDefinition"
PERIODS = "Periods"
PERIOD = "Period"
TRANSITIONS_GROUPS = "TransitionsGroups"
TRANSITIONS_GROUP = "TransitionsGroup"
TRANSITIONS = "Transitions"
TRANSITION = "Transition"
ABSOLUTE_DATE_TRANSITION = "AbsoluteDateTransition"
RECURRING_DAY_TRANSITION = "RecurringDayTransition"
RECURRING_DATE_TRANSITION = "RecurringDateTransition"
TO = "To"
TIME_OFFSET = "TimeOffset"
MONTH = "Month"
DAY_OF_WEEK = "DayOfWeek"
OCCURRENCE = "Occurrence"
DAY = "Day"
DATE_TIME = "DateTime"

# Attribute names
ID = "Id"
NAME = "Name"
BIAS = "Bias"
KIND = "Kind"

# Values of the Kind attribute of a To element
KIND_PERIOD = "Period"
KIND_GROUP = "Group"

ET.register_namespace(PREFIX, NAMESPACE)


def qualified(name: str) -> str:
    """Return the namespace qualified tag for an element name."""
    return f"{{{NAMESPACE}}}{name}"


def local_name(element: ET.Element) -> str:
    """Return the element name without any namespace."""
    return element.tag.rsplit("}", 1)[-1]


def ensure_start_element(element: ET.Element, name: str) -> None:
    """Verify the element is the expected element."""
    if local_name(element) != name:
        raise TimeZoneParseError(
            f"Expected element '{name}' but was '{local_name(element)}'"
        )


def read_attribute(element: ET.Element, name: str) -> str:
    """Return the value of a required attribute."""
    if (value := element.get(name)) is None:
        raise TimeZoneParseError(
            f"Element '{local_name(element)}' is missing required attribute '{name}'"
        )
    return value


def find_child(element: ET.Element, name: str) -> ET.Element | None:
    """Return the first child element with the local name, if any."""
    for child in element:
        if local_name(child) == name:
            return child
    return None


def child_elements(element: ET.Element, name: str | None = None) -> Iterable[ET.Element]:
    """Return all child elements, optionally only those with the local name."""
    for child in element:
        if name is None or local_name(child) == name:
            yield child


def read_child_text(element: ET.Element, name: str) -> str:
    """Return the text of a required child element."""
    if (child := find_child(element, name)) is None:
        raise TimeZoneParseError(
            f"Element '{local_name(element)}' is missing required element '{name}'"
        )
    return (child.text or "").strip()


def read_child_int(element: ET.Element, name: str) -> int:
    """Return the integer value of a required child element."""
    value = read_child_text(element, name)
    try:
        return int(value)
    except ValueError as err:
        raise TimeZoneParseError(
            f"Element '{name}' expected an integer but was '{value}'",
            detailed_error=str(err),
        ) from err


def write_element(
    parent: ET.Element | None,
    name: str,
    text: str | None = None,
    attributes: dict[str, str] | None = None,
) -> ET.Element:
    """Create a namespaced element, as a child of parent when specified."""
    if parent is None:
        element = ET.Element(qualified(name), attributes or {})
    else:
        element = ET.SubElement(parent, qualified(name), attributes or {})
    if text is not None:
        element.text = text
    return element


def parse_xml(content: str) -> ET.Element:
    """Parse xml content into the root element."""
    try:
        return ET.fromstring(content)
    except ET.ParseError as err:
        raise TimeZoneParseError(
            "Failed to parse time zone xml", detailed_error=str(err)
        ) from err


def encode_xml(element: ET.Element) -> str:
    """Encode an element and its children as an xml string."""
    _LOGGER.debug("Encoding element %s", local_name(element))
    return ET.tostring(element, encoding="unicode")

"""Tests for the wire xml helpers."""

import xml.etree.ElementTree as ET

import pytest

from tzdef import wire
from tzdef.exceptions import TimeZoneParseError


def test_namespaced_and_bare_names() -> None:
    """Test both namespaced and bare element names are read."""
    element = wire.parse_xml(
        f'<t:Periods xmlns:t="{wire.NAMESPACE}"><t:Period Id="Std" /><Period Id="Dlt" /></t:Periods>'
    )
    assert wire.local_name(element) == "Periods"
    wire.ensure_start_element(element, wire.PERIODS)
    assert [
        child.get(wire.ID) for child in wire.child_elements(element, wire.PERIOD)
    ] == ["Std", "Dlt"]
    child = wire.find_child(element, wire.PERIOD)
    assert child is not None
    assert child.tag == wire.qualified("Period")
    assert wire.find_child(element, wire.TRANSITION) is None


def test_read_child_values() -> None:
    """Test reading required child elements."""
    element = ET.fromstring("<Transition><Month> 3 </Month><Day>x</Day></Transition>")
    assert wire.read_child_text(element, wire.MONTH) == "3"
    assert wire.read_child_int(element, wire.MONTH) == 3
    with pytest.raises(TimeZoneParseError, match="expected an integer"):
        wire.read_child_int(element, wire.DAY)
    with pytest.raises(TimeZoneParseError, match="missing required element 'To'"):
        wire.read_child_text(element, wire.TO)
    with pytest.raises(TimeZoneParseError, match="missing required attribute 'Id'"):
        wire.read_attribute(element, wire.ID)
    with pytest.raises(TimeZoneParseError, match="Expected element 'Period'"):
        wire.ensure_start_element(element, wire.PERIOD)


def test_write_element() -> None:
    """Test writing namespaced elements with the registered prefix."""
    parent = wire.write_element(None, wire.TRANSITIONS)
    child = wire.write_element(
        parent, wire.TO, "0", attributes={wire.KIND: wire.KIND_GROUP}
    )
    assert list(parent) == [child]
    assert wire.encode_xml(parent) == (
        f'<t:Transitions xmlns:t="{wire.NAMESPACE}">'
        '<t:To Kind="Group">0</t:To>'
        "</t:Transitions>"
    )


def test_parse_error() -> None:
    """Test invalid xml content."""
    with pytest.raises(TimeZoneParseError, match="Failed to parse") as exc_info:
        wire.parse_xml("<Periods>")
    assert exc_info.value.detailed_error

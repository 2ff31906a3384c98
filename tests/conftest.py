"""Test fixtures."""

import datetime

import pytest

from tzdef.period import Period

PACIFIC_DEFINITION = """\
<t:TimeZoneDefinition xmlns:t="http://schemas.microsoft.com/exchange/services/2006/types" Id="Pacific Standard Time" Name="(UTC-08:00) Pacific Time (US &amp; Canada)">
  <t:Periods>
    <t:Period Bias="PT8H" Name="Standard" Id="Std/2006" />
    <t:Period Bias="PT7H" Name="Daylight" Id="Dlt/2006" />
    <t:Period Bias="PT8H" Name="Standard" Id="Std/2007" />
    <t:Period Bias="PT7H" Name="Daylight" Id="Dlt/2007" />
  </t:Periods>
  <t:TransitionsGroups>
    <t:TransitionsGroup Id="0">
      <t:RecurringDayTransition>
        <t:To Kind="Period">Dlt/2006</t:To>
        <t:TimeOffset>PT2H</t:TimeOffset>
        <t:Month>4</t:Month>
        <t:DayOfWeek>Sunday</t:DayOfWeek>
        <t:Occurrence>1</t:Occurrence>
      </t:RecurringDayTransition>
      <t:RecurringDayTransition>
        <t:To Kind="Period">Std/2006</t:To>
        <t:TimeOffset>PT2H</t:TimeOffset>
        <t:Month>10</t:Month>
        <t:DayOfWeek>Sunday</t:DayOfWeek>
        <t:Occurrence>-1</t:Occurrence>
      </t:RecurringDayTransition>
    </t:TransitionsGroup>
    <t:TransitionsGroup Id="1">
      <t:RecurringDayTransition>
        <t:To Kind="Period">Dlt/2007</t:To>
        <t:TimeOffset>PT2H</t:TimeOffset>
        <t:Month>3</t:Month>
        <t:DayOfWeek>Sunday</t:DayOfWeek>
        <t:Occurrence>2</t:Occurrence>
      </t:RecurringDayTransition>
      <t:RecurringDayTransition>
        <t:To Kind="Period">Std/2007</t:To>
        <t:TimeOffset>PT2H</t:TimeOffset>
        <t:Month>11</t:Month>
        <t:DayOfWeek>Sunday</t:DayOfWeek>
        <t:Occurrence>1</t:Occurrence>
      </t:RecurringDayTransition>
    </t:TransitionsGroup>
  </t:TransitionsGroups>
  <t:Transitions>
    <t:Transition>
      <t:To Kind="Group">0</t:To>
    </t:Transition>
    <t:AbsoluteDateTransition>
      <t:To Kind="Group">1</t:To>
      <t:DateTime>2007-01-01T00:00:00</t:DateTime>
    </t:AbsoluteDateTransition>
  </t:Transitions>
</t:TimeZoneDefinition>
"""


@pytest.fixture
def periods() -> dict[str, Period]:
    """Fixture for a registry of eastern time periods."""
    return {
        "Std": Period(id="Std", name="Standard", bias=datetime.timedelta(hours=5)),
        "Dlt": Period(id="Dlt", name="Daylight", bias=datetime.timedelta(hours=4)),
    }


@pytest.fixture
def pacific_definition() -> str:
    """Fixture for wire xml of a definition with two transition groups."""
    return PACIFIC_DEFINITION

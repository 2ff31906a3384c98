"""Tests for host time zones built from adjustment rules."""

import datetime

import pytest

from tzdef.adjustment import AdjustmentRule, DayOfWeek, TransitionTime
from tzdef.transition_group import CustomTimeZoneCreateParams
from tzdef.tzinfo import CustomTimeZone

PACIFIC = CustomTimeZone(
    "Pacific",
    CustomTimeZoneCreateParams(
        base_offset_to_utc=datetime.timedelta(hours=-8),
        standard_display_name="PST",
        daylight_display_name="PDT",
    ),
    [
        AdjustmentRule.create(
            datetime.date(2007, 1, 1),
            datetime.date.max,
            datetime.timedelta(hours=1),
            TransitionTime.floating_date(
                datetime.timedelta(hours=2),
                month=3,
                week=2,
                day_of_week=DayOfWeek.SUNDAY,
            ),
            TransitionTime.floating_date(
                datetime.timedelta(hours=2),
                month=11,
                week=1,
                day_of_week=DayOfWeek.SUNDAY,
            ),
        )
    ],
)

SYDNEY = CustomTimeZone(
    "Sydney",
    CustomTimeZoneCreateParams(
        base_offset_to_utc=datetime.timedelta(hours=10),
        standard_display_name="AEST",
        daylight_display_name="AEDT",
    ),
    [
        AdjustmentRule.create(
            datetime.date(2008, 1, 1),
            datetime.date.max,
            datetime.timedelta(hours=1),
            TransitionTime.floating_date(
                datetime.timedelta(hours=2),
                month=10,
                week=1,
                day_of_week=DayOfWeek.SUNDAY,
            ),
            TransitionTime.floating_date(
                datetime.timedelta(hours=3),
                month=4,
                week=1,
                day_of_week=DayOfWeek.SUNDAY,
            ),
        )
    ],
)


@pytest.mark.parametrize(
    "tzinfo,value,expected_tzname,expected_offset",
    [
        (PACIFIC, datetime.datetime(2022, 1, 15, 12, 0), "PST", datetime.timedelta(hours=-8)),
        (PACIFIC, datetime.datetime(2022, 3, 13, 1, 59), "PST", datetime.timedelta(hours=-8)),
        (PACIFIC, datetime.datetime(2022, 3, 13, 2, 0), "PDT", datetime.timedelta(hours=-7)),
        (PACIFIC, datetime.datetime(2022, 7, 1, 12, 0), "PDT", datetime.timedelta(hours=-7)),
        (PACIFIC, datetime.datetime(2022, 11, 6, 1, 59), "PDT", datetime.timedelta(hours=-7)),
        (PACIFIC, datetime.datetime(2022, 11, 6, 2, 0), "PST", datetime.timedelta(hours=-8)),
        # No adjustment rule before 2007
        (PACIFIC, datetime.datetime(2000, 7, 1, 12, 0), "PST", datetime.timedelta(hours=-8)),
        (SYDNEY, datetime.datetime(2022, 1, 15, 12, 0), "AEDT", datetime.timedelta(hours=11)),
        (SYDNEY, datetime.datetime(2022, 4, 3, 2, 59), "AEDT", datetime.timedelta(hours=11)),
        (SYDNEY, datetime.datetime(2022, 4, 3, 3, 0), "AEST", datetime.timedelta(hours=10)),
        (SYDNEY, datetime.datetime(2022, 7, 1, 12, 0), "AEST", datetime.timedelta(hours=10)),
        (SYDNEY, datetime.datetime(2022, 10, 2, 1, 59), "AEST", datetime.timedelta(hours=10)),
        (SYDNEY, datetime.datetime(2022, 10, 2, 2, 0), "AEDT", datetime.timedelta(hours=11)),
        (SYDNEY, datetime.datetime(2022, 12, 31, 23, 0), "AEDT", datetime.timedelta(hours=11)),
    ],
)
def test_tzinfo(
    tzinfo: CustomTimeZone,
    value: datetime.datetime,
    expected_tzname: str,
    expected_offset: datetime.timedelta,
) -> None:
    """Test the offset and name of a local time."""
    value = value.replace(tzinfo=tzinfo)
    assert value.tzname() == expected_tzname
    assert value.utcoffset() == expected_offset


def test_dst() -> None:
    """Test the daylight saving adjustment."""
    assert PACIFIC.dst(datetime.datetime(2022, 7, 1, 12, 0)) == datetime.timedelta(hours=1)
    assert PACIFIC.dst(datetime.datetime(2022, 1, 1, 12, 0)) == datetime.timedelta(0)
    assert PACIFIC.dst(None) is None


def test_no_datetime() -> None:
    """Test the offset and name without a datetime."""
    assert PACIFIC.utcoffset(None) == datetime.timedelta(hours=-8)
    assert PACIFIC.tzname(None) == "PST"


def test_no_adjustment_rules() -> None:
    """Test a time zone without daylight saving time."""
    tzinfo = CustomTimeZone(
        "Tokyo",
        CustomTimeZoneCreateParams(
            base_offset_to_utc=datetime.timedelta(hours=9),
            standard_display_name="JST",
        ),
    )
    value = datetime.datetime(2022, 7, 1, 12, 0, tzinfo=tzinfo)
    assert value.utcoffset() == datetime.timedelta(hours=9)
    assert value.tzname() == "JST"
    assert value.dst() == datetime.timedelta(0)


def test_convert_from_utc() -> None:
    """Test converting a UTC time to local time."""
    value = datetime.datetime(2022, 7, 1, 19, 0, tzinfo=datetime.timezone.utc)
    local = value.astimezone(PACIFIC)
    assert local.replace(tzinfo=None) == datetime.datetime(2022, 7, 1, 12, 0)
    assert local.tzname() == "PDT"


def test_str() -> None:
    """Test the string representation."""
    assert str(PACIFIC) == "Pacific"
    assert repr(PACIFIC) == "CustomTimeZone(Pacific)"

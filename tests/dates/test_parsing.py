import math
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from chronochroma.dates.calendar import make_epoch_ms
from chronochroma.dates.parsing import DatetimeString, from_datetime, parse_datetime_string
from ..samples import MARCH_10_13H_UTC

BERLIN = ZoneInfo("Europe/Berlin")


def test_parse_full_datetime():
    parsed = parse_datetime_string("2023-03-10T08:00:00-05:00")

    assert parsed.date == (2023, 3, 10)
    assert parsed.time == (8, 0, 0, 0)
    assert parsed.timezone.offset_minutes == 300
    assert parsed.timezone.timezone == "-05:00"


def test_parse_date_only_and_time_only():
    date_only = parse_datetime_string("2023-03-10")
    assert date_only.time is None and date_only.timezone is None

    time_only = parse_datetime_string("08:30")
    assert time_only.date is None
    assert time_only.time == (8, 30, 0, 0)


def test_parse_basic_format():
    parsed = parse_datetime_string("20230310T083000.250Z")
    assert parsed.date == (2023, 3, 10)
    assert parsed.time == (8, 30, 0, 250)
    assert parsed.timezone.offset_minutes == 0


def test_parse_negative_year():
    parsed = parse_datetime_string("-000005-06-15")
    assert parsed.date == (-5, 6, 15)
    assert parsed.wall_ms == make_epoch_ms(-5, 6, 15)


def test_parse_end_of_day():
    assert parse_datetime_string("24:00").time == (24, 0, 0, 0)
    assert parse_datetime_string("24:01") is None


@pytest.mark.parametrize("text", ["", "garbage", "2023-02-30", "2023-13-01", "25:00", "12:60", "T"])
def test_parse_rejects(text):
    assert parse_datetime_string(text) is None


def test_wall_ms_defaults_to_epoch_date():
    assert DatetimeString((1970, 1, 2), None, None).wall_ms == 86400000
    assert DatetimeString(None, (1, 0, 0, 0), None).wall_ms == 3600000


def test_from_datetime_with_timezone():
    assert from_datetime("2023-03-10T08:00:00-05:00") == (MARCH_10_13H_UTC, 300)


def test_from_datetime_local_string():
    epoch_ms, offset = from_datetime("2023-03-10T08:00", local_tz=BERLIN)
    assert offset == -60
    assert epoch_ms == make_epoch_ms(2023, 3, 10, 7)


def test_from_datetime_time_only():
    assert from_datetime("08:00", time_only=True, local_tz=BERLIN) == (8 * 3600000, 0)
    assert from_datetime("08:00", offset_minutes=120) == (10 * 3600000, 120)


def test_from_datetime_number():
    assert from_datetime(MARCH_10_13H_UTC + 0.7, local_tz=timezone.utc) == (MARCH_10_13H_UTC, 0)
    assert from_datetime(0, local_tz=BERLIN) == (0, -60)


def test_from_datetime_datetime():
    aware = datetime(2023, 3, 10, 13, tzinfo=timezone.utc)
    assert from_datetime(aware, local_tz=timezone.utc) == (MARCH_10_13H_UTC, 0)

    naive = datetime(2023, 7, 1, 12)
    epoch_ms, offset = from_datetime(naive, local_tz=BERLIN)
    assert epoch_ms == make_epoch_ms(2023, 7, 1, 10)
    assert offset == -120


@pytest.mark.parametrize("value", ["nope", math.nan, None, 1e17, True])
def test_from_datetime_unresolvable(value):
    epoch_ms, _ = from_datetime(value)
    assert epoch_ms is None

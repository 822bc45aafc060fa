# SPDX-License-Identifier: MIT

import datetime

import pendulum
import pytest

from dailywins.time import (
    instant_of,
    is_valid_key,
    key_for_parts,
    key_of,
    range_for_key,
    shift_key,
    today_range,
)


def test_key_of_uses_local_calendar_day():
    # 03:00 UTC is still the previous evening in New York
    instant = pendulum.datetime(2024, 1, 10, 3, tz="UTC")
    assert key_of(instant) == "2024-01-09"


def test_key_of_accepts_iso_strings_and_stdlib_datetimes():
    assert key_of("2024-01-10T17:00:00+00:00") == "2024-01-10"
    assert key_of(datetime.datetime(2024, 1, 10, 23, 30)) == "2024-01-10"


@pytest.mark.parametrize("value", [None, "", "not a date", "P1D"])
def test_key_of_invalid_is_empty(value):
    assert key_of(value) == ""


def test_key_of_zero_pads():
    assert key_of(pendulum.datetime(2024, 3, 5, 12, tz="local")) == "2024-03-05"


def test_instant_of_defaults_to_local_noon():
    instant = instant_of("2024-01-10")
    assert instant is not None
    local = instant.in_tz("local")
    assert (local.year, local.month, local.day, local.hour) == (2024, 1, 10, 12)


def test_instant_of_custom_hour():
    instant = instant_of("2024-01-10", hour=0)
    assert instant is not None
    assert instant.in_tz("local").hour == 0


@pytest.mark.parametrize(
    "day_key", ["", "2024-01", "2024-xx-10", "2024-02-30", "2024-13-01", "a-b-c"]
)
def test_instant_of_malformed_is_none(day_key):
    assert instant_of(day_key) is None


def test_key_round_trip_is_day_stable():
    # Every hour of a few days around both DST transitions
    for start in (
        pendulum.datetime(2024, 3, 9, tz="local"),
        pendulum.datetime(2024, 11, 2, tz="local"),
        pendulum.datetime(2024, 12, 30, tz="local"),
    ):
        for hour in range(72):
            instant = start.add(hours=hour)
            round_trip = instant_of(key_of(instant), 12)
            assert round_trip is not None
            assert round_trip.in_tz("local").date() == instant.in_tz("local").date()


@pytest.mark.parametrize(
    "day_key, delta, expected",
    [
        ("2024-01-31", 1, "2024-02-01"),
        ("2024-12-31", 1, "2025-01-01"),
        ("2024-03-01", -1, "2024-02-29"),
        ("2024-03-10", 1, "2024-03-11"),
        ("2024-11-03", -1, "2024-11-02"),
        ("2024-01-10", 0, "2024-01-10"),
        ("2024-01-10", -365, "2023-01-10"),
    ],
)
def test_shift_key(day_key, delta, expected):
    assert shift_key(day_key, delta) == expected


def test_shift_key_is_reversible():
    for day_key in ("2024-03-10", "2024-11-03", "2023-12-31", "2024-02-29"):
        for delta in (-400, -31, -1, 1, 7, 60, 366):
            assert shift_key(shift_key(day_key, delta), -delta) == day_key


def test_shift_key_malformed_is_empty():
    assert shift_key("garbage", 1) == ""


def test_range_for_key_covers_local_day():
    start, end = range_for_key("2024-01-10")
    assert start is not None and end is not None
    assert start.in_tz("local").to_datetime_string() == "2024-01-10 00:00:00"
    assert end.in_tz("local").to_datetime_string() == "2024-01-11 00:00:00"


def test_range_for_key_on_dst_day_is_23_hours():
    start, end = range_for_key("2024-03-10")
    assert start is not None and end is not None
    assert end.timestamp() - start.timestamp() == 23 * 3600


def test_range_for_key_malformed():
    assert range_for_key("2024-02-30") == (None, None)
    assert range_for_key("") == (None, None)


def test_today_range_is_anchored_on_now():
    now = pendulum.datetime(2024, 1, 10, 15, 30, tz="local")
    start, end = today_range(now)
    assert key_of(start) == "2024-01-10"
    assert start.in_tz("local").hour == 0
    assert key_of(end) == "2024-01-11"


def test_is_valid_key_requires_canonical_form():
    assert is_valid_key("2024-01-05")
    assert not is_valid_key("2024-1-5")
    assert not is_valid_key("")
    assert not is_valid_key("2024-02-30")


def test_key_for_parts():
    assert key_for_parts(2024, 2, 29) == "2024-02-29"
    assert key_for_parts(2023, 2, 29) == ""

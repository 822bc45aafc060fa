# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, Union, cast

import pendulum

InstantLike = Union[pendulum.DateTime, datetime.datetime, str]

DAY_KEY_FORMAT = "YYYY-MM-DD"


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd")


def datetime_to_display_local_time_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime.in_tz("local").format("HH:mm")


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def instant_from_value(value: Optional[InstantLike]) -> Optional[pendulum.DateTime]:
    """Coerce a DateTime, stdlib datetime or ISO string into a DateTime.

    Returns None when the value is missing or cannot be read as an instant.
    Naive stdlib datetimes are taken to be local time.
    """
    if value is None or value == "":
        return None
    if isinstance(value, pendulum.DateTime):
        return value
    if isinstance(value, datetime.datetime):
        return pendulum.instance(value, tz="local")
    try:
        parsed = pendulum.parse(value)
    except ValueError:
        return None
    if not isinstance(parsed, pendulum.DateTime):
        return None
    return parsed


# Calendar day keys
#
# A day key is "YYYY-MM-DD" for a local calendar day. Day arithmetic goes
# through a noon anchor so that DST transitions never move a key to the
# neighbouring day.


def key_of(value: Optional[InstantLike]) -> str:
    """Format an instant as the local calendar day key, or "" if invalid."""
    instant = instant_from_value(value)
    if instant is None:
        return ""
    return instant.in_tz("local").format(DAY_KEY_FORMAT)


def _parse_key(day_key: str) -> Optional[tuple[int, int, int]]:
    parts = day_key.split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(part) for part in parts)
    except ValueError:
        return None
    return year, month, day


def _local_datetime(
    year: int, month: int, day: int, hour: int = 0
) -> Optional[pendulum.DateTime]:
    try:
        return pendulum.datetime(year, month, day, hour, tz="local")
    except ValueError:
        return None


def instant_of(day_key: str, hour: int = 12) -> Optional[pendulum.DateTime]:
    """Local instant at `hour` on the key's day, or None for a malformed key."""
    parts = _parse_key(day_key)
    if parts is None:
        return None
    return _local_datetime(*parts, hour=hour)


def shift_key(day_key: str, delta_days: int) -> str:
    base = instant_of(day_key, 12)
    if base is None:
        return ""
    return key_of(base.add(days=delta_days))


def key_for_parts(year: int, month: int, day: int) -> str:
    return key_of(_local_datetime(year, month, day, 12))


def is_valid_key(day_key: str) -> bool:
    """True only for canonical keys, which compare correctly as strings."""
    return bool(day_key) and key_of(instant_of(day_key)) == day_key


def range_for_key(
    day_key: str,
) -> tuple[Optional[pendulum.DateTime], Optional[pendulum.DateTime]]:
    """
    Half-open range [start, end) covering the key's local calendar day.

    Both bounds are None when the key is malformed.
    """
    parts = _parse_key(day_key)
    start = _local_datetime(*parts) if parts is not None else None
    if start is None:
        return None, None
    return start, start.add(days=1)


def today_range(
    now: Optional[pendulum.DateTime] = None,
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    if now is None:
        now = now_local()
    start = now.in_tz("local").start_of("day")
    return start, start.add(days=1)

# SPDX-License-Identifier: MIT

import calendar
from typing import Optional

import pendulum

from dailywins.model.journal import Journal
from dailywins.model.progress import ProgressDay, ProgressMonth
from dailywins.service.journal import fetch_journals
from dailywins.service.snapshot import index_journals_by_key
from dailywins.source.base import DataSource
from dailywins.time import key_for_parts

MONTH_LABELS = [
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
]


def year_range(year: int) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """Local midnight on Jan 1 of `year` to local midnight on Jan 1 of the next."""
    start = pendulum.datetime(year, 1, 1, tz="local")
    return start, pendulum.datetime(year + 1, 1, 1, tz="local")


def build_progress_day(
    day_key: str, day: int, journals_by_key: dict[str, Journal], today_key: str
) -> ProgressDay:
    journal = journals_by_key.get(day_key)
    rating = journal["rating"] if journal is not None else None
    if journal is None:
        state = "missing"
    elif rating:
        state = "rated"
    else:
        state = "unrated"
    return {
        "key": day_key,
        "day": day,
        "state": state,  # type: ignore[typeddict-item]
        "rating": rating or None,
        "selectable": day_key <= today_key,
    }


def build_month_grid(
    year: int, journals: list[Journal], today_key: str
) -> list[ProgressMonth]:
    journals_by_key = index_journals_by_key(journals)
    months: list[ProgressMonth] = []
    for month, label in enumerate(MONTH_LABELS, start=1):
        days_in_month = calendar.monthrange(year, month)[1]
        months.append(
            {
                "label": label,
                "month": month,
                "days": [
                    build_progress_day(
                        key_for_parts(year, month, day),
                        day,
                        journals_by_key,
                        today_key,
                    )
                    for day in range(1, days_in_month + 1)
                ],
            }
        )
    return months


def build_week_grid(
    year: int, journals: list[Journal], today_key: str
) -> list[Optional[ProgressDay]]:
    """
    Days of the year laid out Sunday-first, column by column.

    The list is padded at the front with None so that index % 7 is the
    weekday (0 = Sunday).
    """
    journals_by_key = index_journals_by_key(journals)
    # pendulum counts Monday as 0, the grid starts on Sunday
    offset = (pendulum.date(year, 1, 1).weekday() + 1) % 7
    total_days = 366 if calendar.isleap(year) else 365

    cells: list[Optional[ProgressDay]] = [None] * offset
    current = pendulum.date(year, 1, 1)
    for _ in range(total_days):
        day_key = key_for_parts(current.year, current.month, current.day)
        cells.append(build_progress_day(day_key, current.day, journals_by_key, today_key))
        current = current.add(days=1)
    return cells


def fetch_year_journals(source: DataSource, year: int) -> list[Journal]:
    return fetch_journals(
        source, limit=366, depth=0, sort="date", date_range=year_range(year)
    )

# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

import pendulum

from dailywins import time
from dailywins.model.collection import Collection
from dailywins.model.journal import Journal
from dailywins.model.snapshot import DaySnapshot
from dailywins.service.record import journal_from_doc
from dailywins.service.snapshot import build_day_snapshot
from dailywins.service.win import fetch_wins, sort_wins
from dailywins.source.base import DataSource, ListQuery

logger = logging.getLogger(__name__)


def fetch_journals(
    source: DataSource,
    limit: Optional[int] = None,
    depth: Optional[int] = None,
    sort: Optional[str] = None,
    date_range: Optional[tuple[pendulum.DateTime, pendulum.DateTime]] = None,
) -> list[Journal]:
    query: ListQuery = {}
    if limit is not None:
        query["limit"] = limit
    if depth is not None:
        query["depth"] = depth
    if sort is not None:
        query["sort"] = sort
    if date_range is not None:
        query["date_range"] = date_range
    return [journal_from_doc(doc) for doc in source.list(Collection.JOURNALS, query)]


def fetch_journal_by_date(source: DataSource, day_key: str) -> Optional[Journal]:
    start, end = time.range_for_key(day_key)
    if start is None or end is None:
        raise ValueError(f"Invalid day key: {day_key!r}")
    journals = fetch_journals(source, limit=1, depth=0, date_range=(start, end))
    return journals[0] if journals else None


def save_journal(
    source: DataSource, journal_id: Optional[int], payload: dict[str, Any]
) -> Journal:
    """Create the day's journal, or update it when its id is known."""
    if journal_id is None:
        doc = source.create(Collection.JOURNALS, payload)
    else:
        doc = source.update(Collection.JOURNALS, journal_id, payload)
    if doc.get("date") is None:
        doc["date"] = payload["date"]
    logger.info("saved journal %s for %s", doc.get("id"), time.key_of(doc["date"]))
    return journal_from_doc(doc)


def load_today_snapshot(
    source: DataSource,
    now: Optional[pendulum.DateTime] = None,
    journal_window: int = 60,
    wins_limit: int = 200,
) -> DaySnapshot:
    """Fetch active wins and the most recent journals, then build today's snapshot."""
    start, _ = time.today_range(now)
    wins = [
        win
        for win in sort_wins(fetch_wins(source, limit=wins_limit, sort="_order"))
        if win["active"]
    ]
    journals = fetch_journals(source, limit=journal_window, depth=0, sort="-date")
    return build_day_snapshot(start, wins, journals)

# SPDX-License-Identifier: MIT

from typing import Iterable, Optional

import pendulum

from dailywins.model.journal import Journal
from dailywins.model.snapshot import DaySnapshot
from dailywins.model.win import Win, WinId
from dailywins.service.record import get_win_id
from dailywins.service.streak import (
    STREAK_LOOKBACK_DAYS,
    calculate_streak,
    calculate_win_streaks,
)
from dailywins.time import InstantLike, instant_from_value, key_of


def index_journals_by_key(journals: Iterable[Journal]) -> dict[str, Journal]:
    """
    Map day key -> journal.

    If the window holds two journals for the same day the first one wins.
    Journals without a usable date are left out.
    """
    journals_by_key: dict[str, Journal] = {}
    for journal in journals:
        day_key = key_of(journal["date"])
        if not day_key or day_key in journals_by_key:
            continue
        journals_by_key[day_key] = journal
    return journals_by_key


def get_completed_win_ids(journal: Journal) -> set[WinId]:
    completed: set[WinId] = set()
    for entry in journal["wins"]:
        if not entry["completed"]:
            continue
        win_id = get_win_id(entry["win"])
        if win_id is None:
            continue
        completed.add(win_id)
    return completed


def build_day_snapshot(
    today: InstantLike,
    wins: list[Win],
    journals: list[Journal],
    lookback: int = STREAK_LOOKBACK_DAYS,
) -> DaySnapshot:
    """
    Build the view of `today` from the active wins and a window of journals.

    Pure: the anchor is a parameter and the inputs are not modified, so the
    same inputs always give the same snapshot.
    """
    anchor: Optional[pendulum.DateTime] = instant_from_value(today)
    if anchor is None:
        raise ValueError(f"Invalid anchor instant: {today!r}")
    today_key = key_of(anchor)

    journals_by_key = index_journals_by_key(journals)
    wins_by_date: dict[str, set[WinId]] = {}
    for day_key, journal in journals_by_key.items():
        completed = get_completed_win_ids(journal)
        if completed:
            wins_by_date[day_key] = completed

    journal_streak = calculate_streak(
        lambda day_key: day_key in journals_by_key, today_key, lookback
    )
    win_streaks = calculate_win_streaks(
        [win["id"] for win in wins], wins_by_date, today_key, lookback
    )

    return {
        "today_key": today_key,
        "today": anchor,
        "journal": journals_by_key.get(today_key),
        "wins": list(wins),
        "journal_streak": journal_streak,
        "win_streaks": win_streaks,
    }

# SPDX-License-Identifier: MIT

from typing import Callable, Iterable

from dailywins.model.win import WinId
from dailywins.time import instant_of, key_of, shift_key

# Streaks never look further back than this many days
STREAK_LOOKBACK_DAYS = 60


def get_streak_start_key(today_key: str, has_entry_today: bool) -> str:
    """
    Day the backward scan starts from.

    A day that hasn't been logged yet doesn't break the streak until it is
    over, so without an entry today the scan starts at yesterday.
    """
    if has_entry_today:
        return today_key
    return shift_key(today_key, -1)


def count_streak(
    has_event: Callable[[str], bool],
    start_key: str,
    lookback: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Count consecutive qualifying days walking backward from start_key."""
    start_date = instant_of(start_key)
    if start_date is None:
        return 0

    streak = 0
    for offset in range(lookback):
        day_key = key_of(start_date.subtract(days=offset))
        if not has_event(day_key):
            break
        streak += 1
    return streak


def calculate_streak(
    has_event: Callable[[str], bool],
    today_key: str,
    lookback: int = STREAK_LOOKBACK_DAYS,
) -> int:
    start_key = get_streak_start_key(today_key, has_event(today_key))
    return count_streak(has_event, start_key, lookback)


def calculate_win_streaks(
    win_ids: Iterable[WinId],
    wins_by_date: dict[str, set[WinId]],
    today_key: str,
    lookback: int = STREAK_LOOKBACK_DAYS,
) -> dict[WinId, int]:
    streaks: dict[WinId, int] = {}
    for win_id in win_ids:

        def has_win(day_key: str, win_id: WinId = win_id) -> bool:
            return win_id in wins_by_date.get(day_key, ())

        streaks[win_id] = calculate_streak(has_win, today_key, lookback)
    return streaks

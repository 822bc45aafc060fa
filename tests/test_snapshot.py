# SPDX-License-Identifier: MIT

from copy import deepcopy

import pytest

from dailywins.service.snapshot import (
    build_day_snapshot,
    get_completed_win_ids,
    index_journals_by_key,
)
from dailywins.time import instant_of

from .factories import make_journal, make_win

TODAY = "2024-01-10"


def anchor():
    return instant_of(TODAY)


def test_journal_streak_counts_consecutive_days():
    journals = [make_journal(2, TODAY), make_journal(1, "2024-01-09")]
    snapshot = build_day_snapshot(anchor(), [], journals)
    assert snapshot["today_key"] == TODAY
    assert snapshot["journal_streak"] == 2
    assert snapshot["journal"] is not None
    assert snapshot["journal"]["id"] == 2


def test_grace_for_today_and_per_win_streaks():
    wins = [make_win(1, "Read"), make_win(2, "Run")]
    journals = [
        make_journal(2, "2024-01-09", completed=(1,)),
        make_journal(1, "2024-01-08", completed=(1, 2)),
    ]
    snapshot = build_day_snapshot(anchor(), wins, journals)
    assert snapshot["journal"] is None
    assert snapshot["journal_streak"] == 2
    assert snapshot["win_streaks"] == {1: 2, 2: 0}


def test_no_journals_gives_zero_streaks():
    wins = [make_win(1), make_win(2)]
    snapshot = build_day_snapshot(anchor(), wins, [])
    assert snapshot["journal"] is None
    assert snapshot["journal_streak"] == 0
    assert snapshot["win_streaks"] == {1: 0, 2: 0}


def test_only_given_wins_get_streaks():
    # Archived wins are simply not passed in
    journals = [make_journal(1, TODAY, completed=(1, 9))]
    snapshot = build_day_snapshot(anchor(), [make_win(1)], journals)
    assert snapshot["win_streaks"] == {1: 1}


def test_duplicate_days_first_journal_wins():
    journals = [
        make_journal(5, TODAY, completed=(1,), rating=4),
        make_journal(6, TODAY, completed=(2,), rating=1),
    ]
    snapshot = build_day_snapshot(anchor(), [make_win(1), make_win(2)], journals)
    assert snapshot["journal"] is not None
    assert snapshot["journal"]["id"] == 5
    assert snapshot["win_streaks"] == {1: 1, 2: 0}


def test_dangling_and_expanded_win_references():
    journal = make_journal(1, TODAY)
    journal["wins"] = [
        {"win": None, "completed": True, "note": None},
        {"win": {"name": "deleted"}, "completed": True, "note": None},
        {"win": {"id": 2, "name": "Run"}, "completed": True, "note": None},
        {"win": 3, "completed": False, "note": "tomorrow"},
    ]
    assert get_completed_win_ids(journal) == {2}

    wins = [make_win(2, "Run"), make_win(3, "Stretch")]
    snapshot = build_day_snapshot(anchor(), wins, [journal])
    assert snapshot["win_streaks"] == {2: 1, 3: 0}


def test_journals_without_date_are_skipped():
    broken = make_journal(1, TODAY)
    broken["date"] = None  # type: ignore[typeddict-item]
    indexed = index_journals_by_key([broken, make_journal(2, "2024-01-09")])
    assert list(indexed) == ["2024-01-09"]


def test_snapshot_is_pure():
    wins = [make_win(1), make_win(2)]
    journals = [
        make_journal(3, TODAY, completed=(1,)),
        make_journal(2, "2024-01-09", completed=(1, 2)),
    ]
    wins_before = deepcopy(wins)
    journals_before = deepcopy(journals)

    first = build_day_snapshot(anchor(), wins, journals)
    second = build_day_snapshot(anchor(), wins, journals)

    assert first == second
    assert wins == wins_before
    assert journals == journals_before


def test_anchor_may_be_a_string():
    snapshot = build_day_snapshot("2024-01-10T16:00:00+00:00", [], [])
    assert snapshot["today_key"] == TODAY


def test_invalid_anchor_raises():
    with pytest.raises(ValueError):
        build_day_snapshot("yesterday-ish", [], [])

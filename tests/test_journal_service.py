# SPDX-License-Identifier: MIT

import asyncio

import pendulum
import pytest

from dailywins.model.collection import Collection
from dailywins.service import journal as journal_service
from dailywins.service import win as win_service
from dailywins.service.gateway import JournalGateway
from dailywins.service.session import DaySession
from dailywins.source.local import LocalDataSource
from dailywins.time import range_for_key

NOW = pendulum.datetime(2024, 1, 10, 15, tz="America/New_York")


def day_start(day_key: str) -> str:
    start, _ = range_for_key(day_key)
    assert start is not None
    return start.in_tz("UTC").isoformat()


@pytest.fixture
def source(data_dir):
    return LocalDataSource()


def test_fetch_journal_by_date(source):
    source.create(Collection.JOURNALS, {"date": day_start("2024-01-09"), "rating": 2})
    journal = journal_service.fetch_journal_by_date(source, "2024-01-09")
    assert journal is not None
    assert journal["rating"] == 2
    assert journal_service.fetch_journal_by_date(source, "2024-01-10") is None


def test_fetch_journal_by_invalid_date(source):
    with pytest.raises(ValueError):
        journal_service.fetch_journal_by_date(source, "2024-02-31")


def test_save_journal_creates_then_updates(source):
    payload = {"date": day_start("2024-01-10"), "rating": 3, "wins": []}
    created = journal_service.save_journal(source, None, payload)
    assert created["rating"] == 3

    updated = journal_service.save_journal(
        source, created["id"], {"date": payload["date"], "rating": None, "journal": "x"}
    )
    assert updated["id"] == created["id"]
    assert updated["rating"] is None
    assert updated["journal"] == "x"
    assert len(journal_service.fetch_journals(source)) == 1


def test_load_today_snapshot(source):
    read = win_service.create_win(source, "Read")
    run = win_service.create_win(source, "Run")
    archived = win_service.create_win(source, "Floss")
    win_service.set_win_active(source, archived["id"], False)

    source.create(
        Collection.JOURNALS,
        {
            "date": day_start("2024-01-09"),
            "wins": [{"win": read["id"], "completed": True}],
        },
    )
    source.create(
        Collection.JOURNALS,
        {
            "date": day_start("2024-01-10"),
            "wins": [
                {"win": read["id"], "completed": True},
                {"win": archived["id"], "completed": True},
            ],
        },
    )

    snapshot = journal_service.load_today_snapshot(source, NOW)

    assert snapshot["today_key"] == "2024-01-10"
    assert [win["name"] for win in snapshot["wins"]] == ["Read", "Run"]
    assert snapshot["journal"] is not None
    assert snapshot["journal_streak"] == 2
    assert snapshot["win_streaks"] == {read["id"]: 2, run["id"]: 0}


def test_session_round_trip_through_gateway(source):
    win = win_service.create_win(source, "Read")

    async def scenario():
        snapshot = journal_service.load_today_snapshot(source, NOW)
        session = DaySession(snapshot, JournalGateway(source))
        session.edit(rating=5, win_id=win["id"], completed=True)
        assert await session.save_now()
        assert await session.navigate("2024-01-09")
        assert session.draft["journal_id"] is None
        assert await session.navigate("2024-01-10")
        session.close()
        return session.draft

    draft = asyncio.run(scenario())
    assert draft["rating"] == 5
    assert draft["wins"][0]["completed"] is True
    assert not draft["journal_text"]

    journals = journal_service.fetch_journals(source)
    assert len(journals) == 1

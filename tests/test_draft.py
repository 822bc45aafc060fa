# SPDX-License-Identifier: MIT

from dailywins.service.draft import (
    build_draft,
    build_journal_payload,
    build_wins_state,
    draft_fingerprint,
    fingerprint,
    is_dirty,
    is_savable,
    merge_saved_journal,
    rekey_wins_state,
)

from .factories import make_journal, make_win

TODAY = "2024-01-10"


def test_wins_state_follows_active_wins():
    journal = make_journal(1, TODAY, completed=(2, 7))
    journal["wins"][0]["note"] = "5k"
    state = build_wins_state([make_win(1), make_win(2)], journal)
    assert state == [
        {"win_id": 1, "completed": False, "note": ""},
        {"win_id": 2, "completed": True, "note": "5k"},
    ]


def test_rekey_keeps_existing_entries():
    previous = [{"win_id": 1, "completed": True, "note": "x"}]
    state = rekey_wins_state([make_win(2), make_win(1)], previous)
    assert state == [
        {"win_id": 2, "completed": False, "note": ""},
        {"win_id": 1, "completed": True, "note": "x"},
    ]


def test_fingerprint_ignores_order_and_whitespace():
    a = [
        {"win_id": 1, "completed": True, "note": "done "},
        {"win_id": 2, "completed": False, "note": ""},
    ]
    b = [
        {"win_id": 2, "completed": False, "note": ""},
        {"win_id": 1, "completed": True, "note": "done"},
    ]
    assert fingerprint(3, "  hello\n", a) == fingerprint(3, "hello", b)
    assert fingerprint(3, "hello", a) != fingerprint(4, "hello", a)


def test_seeded_draft_is_clean():
    journal = make_journal(4, TODAY, completed=(1,), rating=3, text="good")
    draft = build_draft(TODAY, [make_win(1), make_win(2)], journal)
    assert draft["journal_id"] == 4
    assert draft["rating"] == 3
    assert draft["journal_text"] == "good"
    assert not is_dirty(draft)

    draft["journal_text"] = "good "
    assert not is_dirty(draft)
    draft["rating"] = 5
    assert is_dirty(draft)


def test_empty_draft_is_not_savable():
    draft = build_draft(TODAY, [make_win(1)], None)
    assert draft["journal_id"] is None
    assert not is_savable(draft)

    draft["journal_text"] = "   "
    assert not is_savable(draft)

    draft["wins"][0]["completed"] = True
    assert is_savable(draft)


def test_create_payload():
    draft = build_draft(TODAY, [make_win(1), make_win(2), make_win(3)], None)
    draft["wins"][0].update(completed=True, note="  chapter 3 ")
    draft["wins"][1].update(completed=True, note="   ")
    draft["wins"][2].update(completed=False, note="ignored")

    payload = build_journal_payload(draft)

    # Local midnight in New York is 05:00 UTC in January
    assert payload == {
        "date": "2024-01-10T05:00:00+00:00",
        "wins": [
            {"win": 1, "completed": True, "note": "chapter 3"},
            {"win": 2, "completed": True},
        ],
    }


def test_update_payload_sends_cleared_fields():
    journal = make_journal(4, TODAY, rating=3, text="good")
    draft = build_draft(TODAY, [], journal)
    draft["rating"] = None
    draft["journal_text"] = ""
    payload = build_journal_payload(draft)
    assert payload["rating"] is None
    assert payload["journal"] is None
    assert payload["wins"] == []


def test_merge_fills_missing_echo_fields():
    draft = build_draft(TODAY, [make_win(1)], None)
    draft["rating"] = 4
    draft["journal_text"] = "fine"
    draft["wins"][0]["completed"] = True
    payload = build_journal_payload(draft)

    echo = make_journal(9, TODAY)
    merged = merge_saved_journal(echo, draft, payload)

    assert merged["id"] == 9
    assert merged["rating"] == 4
    assert merged["journal"] == "fine"
    assert merged["wins"] == [{"win": 1, "completed": True, "note": None}]
    assert echo["rating"] is None

    rebuilt = build_draft(TODAY, [make_win(1)], merged)
    assert draft_fingerprint(rebuilt) == draft_fingerprint(draft)


def test_rekey_copies_entries():
    previous = [{"win_id": 1, "completed": True, "note": "x"}]
    state = rekey_wins_state([make_win(1)], previous)
    state[0]["note"] = "changed"
    assert previous[0]["note"] == "x"

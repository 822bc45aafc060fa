# SPDX-License-Identifier: MIT

from copy import copy
from typing import Any, Optional

from dailywins import time
from dailywins.model.draft import Draft, Fingerprint, WinEntryState
from dailywins.model.journal import Journal
from dailywins.model.win import Win
from dailywins.service.record import get_win_id
from dailywins.template.draft import get_draft_template


def build_wins_state(wins: list[Win], journal: Optional[Journal]) -> list[WinEntryState]:
    """One entry per active win; wins missing from the journal are unchecked."""
    completions = {}
    if journal is not None:
        for entry in journal["wins"]:
            win_id = get_win_id(entry["win"])
            if win_id is not None and win_id not in completions:
                completions[win_id] = entry

    wins_state: list[WinEntryState] = []
    for win in wins:
        entry = completions.get(win["id"])
        wins_state.append(
            {
                "win_id": win["id"],
                "completed": bool(entry and entry["completed"]),
                "note": (entry["note"] or "") if entry else "",
            }
        )
    return wins_state


def rekey_wins_state(
    wins: list[Win], previous: list[WinEntryState]
) -> list[WinEntryState]:
    """Follow a changed win list, keeping state for wins that are still there."""
    previous_by_id = {entry["win_id"]: entry for entry in previous}
    wins_state: list[WinEntryState] = []
    for win in wins:
        entry = previous_by_id.get(win["id"])
        if entry is None:
            wins_state.append({"win_id": win["id"], "completed": False, "note": ""})
        else:
            wins_state.append(copy(entry))
    return wins_state


def fingerprint(
    rating: Optional[int], journal_text: str, wins_state: list[WinEntryState]
) -> Fingerprint:
    """
    Comparable summary of a draft's content.

    Text is trimmed and win state is keyed by id so whitespace or a
    reordered win list never make a draft look edited.
    """
    return (
        rating,
        journal_text.strip(),
        tuple(
            sorted(
                (entry["win_id"], entry["completed"], entry["note"].strip())
                for entry in wins_state
            )
        ),
    )


def draft_fingerprint(draft: Draft) -> Fingerprint:
    return fingerprint(draft["rating"], draft["journal_text"], draft["wins"])


def build_draft(date_key: str, wins: list[Win], journal: Optional[Journal]) -> Draft:
    """Seed a clean draft for a day from its journal (or nothing)."""
    draft = get_draft_template(date_key)
    if journal is not None:
        draft["journal_id"] = journal["id"]
        draft["rating"] = journal["rating"]
        draft["journal_text"] = journal["journal"] or ""
    draft["wins"] = build_wins_state(wins, journal)
    draft["saved_fingerprint"] = draft_fingerprint(draft)
    return draft


def is_dirty(draft: Draft) -> bool:
    return draft_fingerprint(draft) != draft["saved_fingerprint"]


def is_savable(draft: Draft) -> bool:
    return bool(
        draft["rating"]
        or draft["journal_text"].strip()
        or any(entry["completed"] for entry in draft["wins"])
    )


def build_journal_payload(draft: Draft) -> dict[str, Any]:
    """
    Write payload for the draft's day.

    Only completed wins are sent. Blank text and a missing rating are
    omitted on create; on update they are sent as null so clearing a field
    sticks.
    """
    start, _ = time.range_for_key(draft["date_key"])
    if start is None:
        raise ValueError(f"Invalid day key: {draft['date_key']!r}")

    wins_payload: list[dict[str, Any]] = []
    for entry in draft["wins"]:
        if not entry["completed"]:
            continue
        win_payload: dict[str, Any] = {"win": entry["win_id"], "completed": True}
        note = entry["note"].strip()
        if note:
            win_payload["note"] = note
        wins_payload.append(win_payload)

    payload: dict[str, Any] = {
        "date": time.datetime_to_iso_str(start.in_tz("UTC")),
        "wins": wins_payload,
    }
    journal_text = draft["journal_text"].strip()
    is_update = draft["journal_id"] is not None
    if draft["rating"] is not None or is_update:
        payload["rating"] = draft["rating"]
    if journal_text or is_update:
        payload["journal"] = journal_text or None
    return payload


def merge_saved_journal(
    saved: Journal, draft: Draft, payload: dict[str, Any]
) -> Journal:
    """Fill gaps in the server echo with what was sent."""
    merged: Journal = {**saved}
    if merged["rating"] is None:
        merged["rating"] = draft["rating"]
    if merged["journal"] is None:
        merged["journal"] = draft["journal_text"] or None
    if not saved["wins"] and payload["wins"]:
        merged["wins"] = [
            {"win": entry["win"], "completed": True, "note": entry.get("note")}
            for entry in payload["wins"]
        ]
    return merged

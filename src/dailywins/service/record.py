# SPDX-License-Identifier: MIT

from typing import Any, Optional, cast

from dailywins import time
from dailywins.model.journal import Journal, WinCompletion, WinReference
from dailywins.model.win import Win, WinId


def get_win_id(reference: WinReference) -> Optional[WinId]:
    """
    Resolve a completion's win reference to an id.

    References are either the id itself or an expanded win document.
    Anything else is unresolvable and yields None.
    """
    if isinstance(reference, bool):
        return None
    if isinstance(reference, int):
        return reference
    if isinstance(reference, dict):
        id = reference.get("id")
        if isinstance(id, int) and not isinstance(id, bool):
            return id
    return None


def win_from_doc(doc: dict[str, Any]) -> Win:
    return {
        "id": doc["id"],
        "name": doc["name"],
        "description": doc.get("description"),
        "active": doc.get("active") is not False,
        "order": doc.get("_order"),
        "created": time.datetime_from_str_optional(doc.get("createdAt")),
        "updated": time.datetime_from_str_optional(doc.get("updatedAt")),
    }


def completion_from_doc(doc: dict[str, Any]) -> WinCompletion:
    return {
        "win": cast(WinReference, doc.get("win")),
        "completed": bool(doc.get("completed")),
        "note": doc.get("note"),
    }


def journal_from_doc(doc: dict[str, Any]) -> Journal:
    return {
        "id": doc["id"],
        "date": time.datetime_from_str(doc["date"]),
        "rating": doc.get("rating"),
        "journal": doc.get("journal"),
        "wins": [completion_from_doc(entry) for entry in doc.get("wins") or []],
        "created": time.datetime_from_str_optional(doc.get("createdAt")),
        "updated": time.datetime_from_str_optional(doc.get("updatedAt")),
    }

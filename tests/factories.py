# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from dailywins.model.journal import Journal
from dailywins.model.win import Win
from dailywins.time import range_for_key


def make_win(
    id: int,
    name: str = "Read",
    active: bool = True,
    order: Optional[str] = None,
    description: Optional[str] = None,
) -> Win:
    return {
        "id": id,
        "name": name,
        "description": description,
        "active": active,
        "order": order,
        "created": None,
        "updated": None,
    }


def make_journal(
    id: int,
    day_key: str,
    completed: tuple[int, ...] = (),
    rating: Optional[int] = None,
    text: Optional[str] = None,
    updated: Optional[pendulum.DateTime] = None,
) -> Journal:
    start, _ = range_for_key(day_key)
    assert start is not None
    return {
        "id": id,
        "date": start.in_tz("UTC"),
        "rating": rating,
        "journal": text,
        "wins": [{"win": win_id, "completed": True, "note": None} for win_id in completed],
        "created": updated,
        "updated": updated,
    }

# SPDX-License-Identifier: MIT

from typing import Any, Optional, TypedDict, Union

import pendulum

from dailywins.model.win import WinId

# A completion references its win either by id or, for expanded queries,
# by the full win document.
WinReference = Union[WinId, dict[str, Any], None]


class WinCompletion(TypedDict):
    win: WinReference
    completed: bool
    note: Optional[str]


class Journal(TypedDict):
    id: int
    date: pendulum.DateTime  # Local midnight of the entry's calendar day
    rating: Optional[int]  # 1-5
    journal: Optional[str]  # Free-text body
    wins: list[WinCompletion]
    created: Optional[pendulum.DateTime]
    updated: Optional[pendulum.DateTime]

# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from dailywins.model.win import WinId

SessionState = Literal["idle", "loading", "saving", "saved", "error"]

Fingerprint = tuple[
    Optional[int], str, tuple[tuple[WinId, bool, str], ...]
]


class WinEntryState(TypedDict):
    win_id: WinId
    completed: bool
    note: str


class Draft(TypedDict):
    date_key: str
    journal_id: Optional[int]  # Server id for the day, None until first save
    rating: Optional[int]
    journal_text: str
    wins: list[WinEntryState]
    saved_fingerprint: Fingerprint  # Fingerprint of the last saved state

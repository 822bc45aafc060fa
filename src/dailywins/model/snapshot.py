# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from dailywins.model.journal import Journal
from dailywins.model.win import Win, WinId


class DaySnapshot(TypedDict):
    today_key: str
    today: pendulum.DateTime
    journal: Optional[Journal]  # Today's entry, if one exists
    wins: list[Win]  # Active wins only
    journal_streak: int
    win_streaks: dict[WinId, int]

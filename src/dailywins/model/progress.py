# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

DayState = Literal["missing", "unrated", "rated"]
LayoutMode = Literal["month", "week"]


class ProgressDay(TypedDict):
    key: str
    day: int
    state: DayState
    rating: Optional[int]
    selectable: bool  # Only days up to today


class ProgressMonth(TypedDict):
    label: str  # e.g., "Jan"
    month: int
    days: list[ProgressDay]

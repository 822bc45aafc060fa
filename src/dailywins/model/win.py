# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

WinId = int


class Win(TypedDict):
    id: WinId
    name: str  # e.g., "Read 20 pages"
    description: Optional[str]
    active: bool  # False = archived, never hard-deleted
    order: Optional[str]  # Opaque sortable insertion marker
    created: Optional[pendulum.DateTime]
    updated: Optional[pendulum.DateTime]

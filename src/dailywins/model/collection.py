# SPDX-License-Identifier: MIT

from typing import Literal

CollectionName = Literal["wins", "journals"]


class Collection:
    WINS: CollectionName = "wins"
    JOURNALS: CollectionName = "journals"

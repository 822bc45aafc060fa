# SPDX-License-Identifier: MIT

import re
from copy import deepcopy
from typing import Any

from dailywins import time

_DIGITS_P = re.compile(r"(\d+)")

DATE_FIELDS = ("date", "createdAt", "updatedAt")


def natural_sort_key(value: str) -> list[Any]:
    """Split digit runs out of a string so "a10" sorts after "a9"."""
    return [int(part) if part.isdigit() else part for part in _DIGITS_P.split(value)]


def sort_documents(
    documents: list[dict[str, Any]], sort_instruction: str
) -> list[dict[str, Any]]:
    """
    Sort wire documents by a CMS style instruction ("field" or "-field").

    Documents without a value for the field always go last.
    """
    descending = sort_instruction.startswith("-")
    column = sort_instruction.lstrip("-")

    def sort_key(item: dict[str, Any]) -> Any:
        value = item[column]
        if column in DATE_FIELDS:
            return time.datetime_from_str(value)
        if isinstance(value, str):
            return natural_sort_key(value)
        return value

    sorted_items = deepcopy(documents)
    none_items = [item for item in sorted_items if item.get(column) is None]
    value_items = [item for item in sorted_items if item.get(column) is not None]
    value_items.sort(key=sort_key, reverse=descending)
    return value_items + none_items

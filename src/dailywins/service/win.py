# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

from dailywins.model.collection import Collection
from dailywins.model.win import Win, WinId
from dailywins.query.sort import natural_sort_key
from dailywins.service.record import win_from_doc
from dailywins.source.base import DataSource, ListQuery
from dailywins.template.win import get_win_payload_template

logger = logging.getLogger(__name__)


class WinValidationError(Exception):
    """Raised when a win can't be saved as given."""

    pass


def fetch_wins(
    source: DataSource,
    limit: Optional[int] = None,
    sort: Optional[str] = None,
) -> list[Win]:
    query: ListQuery = {"depth": 0}
    if limit is not None:
        query["limit"] = limit
    if sort is not None:
        query["sort"] = sort
    return [win_from_doc(doc) for doc in source.list(Collection.WINS, query)]


def sort_wins(wins: list[Win]) -> list[Win]:
    """
    Order wins by their insertion marker.

    Wins without a marker fall back to creation time, after the ordered ones.
    """

    def sort_key(win: Win) -> tuple[int, Any]:
        if win["order"]:
            return (0, natural_sort_key(win["order"]))
        created = win["created"]
        return (1, created.timestamp() if created is not None else 0.0)

    return sorted(wins, key=sort_key)


def split_wins(wins: list[Win]) -> tuple[list[Win], list[Win]]:
    """Return (active, archived), each sorted."""
    ordered = sort_wins(wins)
    return (
        [win for win in ordered if win["active"]],
        [win for win in ordered if not win["active"]],
    )


def create_win(source: DataSource, name: str, description: Optional[str] = None) -> Win:
    name = name.strip()
    if not name:
        raise WinValidationError("A win needs a name")

    payload = get_win_payload_template()
    payload["name"] = name
    payload["description"] = (description or "").strip() or None
    win = win_from_doc(source.create(Collection.WINS, payload))
    logger.info("created win %s: %s", win["id"], win["name"])
    return win


def modify_win(
    source: DataSource,
    id: WinId,
    name: Optional[str] = None,
    description: Optional[str] = None,
    remove_description: bool = False,
) -> Win:
    payload: dict[str, Any] = {}
    if name is not None:
        if not name.strip():
            raise WinValidationError("A win needs a name")
        payload["name"] = name.strip()
    if description is not None:
        payload["description"] = description.strip() or None
    if remove_description:
        payload["description"] = None
    return win_from_doc(source.update(Collection.WINS, id, payload))


def set_win_active(source: DataSource, id: WinId, active: bool) -> Win:
    """Archive or unarchive. Wins are never hard-deleted."""
    win = win_from_doc(source.update(Collection.WINS, id, {"active": active}))
    logger.info("%s win %s", "unarchived" if active else "archived", id)
    return win

# SPDX-License-Identifier: MIT

from typing import Any, Optional, Protocol, TypedDict

import pendulum

from dailywins.model.collection import CollectionName

Document = dict[str, Any]


class DataSourceError(Exception):
    """Raised when the data collaborator cannot complete a request."""

    pass


class ListQuery(TypedDict, total=False):
    limit: int
    depth: int
    sort: str  # "field" ascending, "-field" descending
    # Inclusive start, exclusive end, matched against the "date" field
    date_range: tuple[pendulum.DateTime, pendulum.DateTime]


class DataSource(Protocol):
    """
    The CMS contract consumed by the services.

    Documents are in wire format: camelCase timestamps, ISO date strings
    and win references by id.
    """

    def list(
        self, collection: CollectionName, query: Optional[ListQuery] = None
    ) -> list[Document]: ...

    def create(self, collection: CollectionName, payload: Document) -> Document: ...

    def update(
        self, collection: CollectionName, id: int, payload: Document
    ) -> Document: ...

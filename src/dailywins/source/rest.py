# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

import pendulum
import requests

from dailywins import time
from dailywins.model.collection import CollectionName
from dailywins.source.base import DataSourceError, Document, ListQuery

logger = logging.getLogger(__name__)


def build_date_range_where(
    start: pendulum.DateTime, end: pendulum.DateTime
) -> dict[str, str]:
    """Query params matching `start <= date < end`."""
    return {
        "where[and][0][date][greater_than_equal]": time.datetime_to_iso_str(
            start.in_tz("UTC")
        ),
        "where[and][1][date][less_than]": time.datetime_to_iso_str(end.in_tz("UTC")),
    }


def build_params(query: Optional[ListQuery]) -> dict[str, Any]:
    if query is None:
        return {}
    params: dict[str, Any] = {}
    for key in ("limit", "depth", "sort"):
        value = query.get(key)
        if value is not None:
            params[key] = value
    date_range = query.get("date_range")
    if date_range is not None:
        params.update(build_date_range_where(*date_range))
    return params


def unwrap_document(result: Any) -> Document:
    """Create and update responses wrap the record as {"doc": ...}."""
    if isinstance(result, dict) and isinstance(result.get("doc"), dict):
        return result["doc"]
    if isinstance(result, dict):
        return result
    raise DataSourceError(f"Unexpected response body: {result!r}")


class RestDataSource:
    """Client for the CMS REST API (`/api/<collection>`)."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"JWT {token}"})

    def list(
        self, collection: CollectionName, query: Optional[ListQuery] = None
    ) -> list[Document]:
        payload = self.__request(
            "GET", f"/api/{collection}", params=build_params(query)
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("docs"), list):
            raise DataSourceError(f"Unexpected list response for {collection}")
        return payload["docs"]

    def create(self, collection: CollectionName, payload: Document) -> Document:
        return unwrap_document(self.__request("POST", f"/api/{collection}", json=payload))

    def update(self, collection: CollectionName, id: int, payload: Document) -> Document:
        return unwrap_document(
            self.__request("PATCH", f"/api/{collection}/{id}", json=payload)
        )

    def __request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise DataSourceError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            logger.error("%s %s returned %s", method, url, response.status_code)
            raise DataSourceError(
                f"{method} {path} failed with status {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise DataSourceError(f"Invalid JSON from {url}") from e

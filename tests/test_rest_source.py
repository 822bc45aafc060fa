# SPDX-License-Identifier: MIT

from typing import Any

import pendulum
import pytest
import requests

from dailywins.model.collection import Collection
from dailywins.source.base import DataSourceError
from dailywins.source.rest import RestDataSource, build_params


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self.ok = status_code < 400
        self._body = body

    def json(self) -> Any:
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    def __init__(self, *responses: Any) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self._responses = list(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_source(*responses: Any, token: str = "secret") -> tuple[RestDataSource, FakeSession]:
    session = FakeSession(*responses)
    source = RestDataSource(
        "https://cms.example.com/", token=token, timeout=3.0, session=session  # type: ignore[arg-type]
    )
    return source, session


def test_token_header():
    _, session = make_source()
    assert session.headers["Authorization"] == "JWT secret"

    _, anonymous = make_source(token="")
    assert "Authorization" not in anonymous.headers


def test_build_params_with_date_range():
    start = pendulum.datetime(2024, 1, 10, tz="America/New_York")
    params = build_params(
        {"limit": 1, "depth": 0, "date_range": (start, start.add(days=1))}
    )
    assert params == {
        "limit": 1,
        "depth": 0,
        "where[and][0][date][greater_than_equal]": "2024-01-10T05:00:00+00:00",
        "where[and][1][date][less_than]": "2024-01-11T05:00:00+00:00",
    }
    assert build_params(None) == {}


def test_list():
    docs = [{"id": 1, "name": "Read"}]
    source, session = make_source(FakeResponse(body={"docs": docs, "totalDocs": 1}))

    assert source.list(Collection.WINS, {"sort": "_order", "limit": 50}) == docs

    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert url == "https://cms.example.com/api/wins"
    assert kwargs["params"] == {"limit": 50, "sort": "_order"}
    assert kwargs["timeout"] == 3.0


def test_list_requires_docs():
    source, _ = make_source(FakeResponse(body={"errors": []}))
    with pytest.raises(DataSourceError):
        source.list(Collection.WINS)


def test_create_unwraps_doc():
    source, session = make_source(
        FakeResponse(201, {"message": "created", "doc": {"id": 5, "name": "Run"}})
    )
    assert source.create(Collection.WINS, {"name": "Run"}) == {"id": 5, "name": "Run"}
    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert kwargs["json"] == {"name": "Run"}


def test_update_patches_by_id():
    source, session = make_source(FakeResponse(body={"doc": {"id": 9, "rating": 3}}))
    assert source.update(Collection.JOURNALS, 9, {"rating": 3})["rating"] == 3
    method, url, _ = session.calls[0]
    assert method == "PATCH"
    assert url == "https://cms.example.com/api/journals/9"


def test_error_status_raises():
    source, _ = make_source(FakeResponse(403, {"errors": [{"message": "nope"}]}))
    with pytest.raises(DataSourceError, match="403"):
        source.list(Collection.JOURNALS)


def test_network_error_raises():
    source, _ = make_source(requests.ConnectionError("refused"))
    with pytest.raises(DataSourceError):
        source.create(Collection.JOURNALS, {"date": "2024-01-10T05:00:00+00:00"})


def test_invalid_json_raises():
    source, _ = make_source(FakeResponse(body=ValueError("not json")))
    with pytest.raises(DataSourceError):
        source.update(Collection.WINS, 1, {"name": "x"})

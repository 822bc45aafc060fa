# SPDX-License-Identifier: MIT

from typing import Iterator

import pendulum
import pytest

from dailywins import configuration
from dailywins.repository.configuration import CONFIGURATION_REPO
from dailywins.repository.document import JOURNAL_REPO, WIN_REPO
from dailywins.view import state as view_state

LOCAL_TIMEZONE = "America/New_York"


@pytest.fixture(autouse=True)
def local_timezone() -> Iterator[None]:
    with pendulum.test_local_timezone(pendulum.timezone(LOCAL_TIMEZONE)):
        yield


@pytest.fixture(autouse=True)
def view_defaults() -> Iterator[None]:
    yield
    view_state.set_show_header(True)
    view_state.set_plain(False)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    data_path = tmp_path / "data"
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", tmp_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(configuration, "DATA_WINS_DIR", data_path / "wins")
    monkeypatch.setattr(configuration, "DATA_JOURNALS_DIR", data_path / "journals")
    monkeypatch.setattr(configuration, "DATA_LOG_PATH", data_path / "dailywins.log")
    WIN_REPO.reset()
    JOURNAL_REPO.reset()
    CONFIGURATION_REPO.reset()
    yield data_path
    WIN_REPO.reset()
    JOURNAL_REPO.reset()
    CONFIGURATION_REPO.reset()

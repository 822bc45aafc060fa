# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Literal, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "dailywins"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_WINS_DIR: Path = DATA_PATH / "wins"
DATA_JOURNALS_DIR: Path = DATA_PATH / "journals"
DATA_LOG_PATH: Path = DATA_PATH / "dailywins.log"

BackendType = Literal["local", "remote"]


class Configuration(TypedDict):
    backend: BackendType
    api_url: Optional[str]
    api_token: Optional[str]
    data_path: Optional[str]
    show_header: bool
    autosave_delay_ms: int
    saved_display_ms: int
    journal_window: int
    wins_limit: int
    request_timeout: float
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "backend": "local",
        "api_url": None,
        "api_token": None,
        "data_path": None,
        "show_header": True,
        "autosave_delay_ms": 900,
        "saved_display_ms": 2500,
        "journal_window": 60,
        "wins_limit": 200,
        "request_timeout": 10.0,
        "log_level": "WARNING",
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_WINS_DIR, DATA_JOURNALS_DIR, DATA_LOG_PATH

    DATA_PATH = data_path
    DATA_WINS_DIR = DATA_PATH / "wins"
    DATA_JOURNALS_DIR = DATA_PATH / "journals"
    DATA_LOG_PATH = DATA_PATH / "dailywins.log"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are used.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))

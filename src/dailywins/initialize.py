# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from dailywins import configuration
from dailywins.logger import setup_logger
from dailywins.repository.configuration import CONFIGURATION_REPO
from dailywins.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_file()
    configuration.load_data_path_configuration()
    __ensure_data_dirs()

    config = CONFIGURATION_REPO.get_config()
    setup_logger(configuration.DATA_LOG_PATH, config["log_level"])
    view_state.set_show_header(config["show_header"])


def __ensure_config_file() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))


def __ensure_data_dirs() -> None:
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)
    configuration.DATA_WINS_DIR.mkdir(parents=True, exist_ok=True)
    configuration.DATA_JOURNALS_DIR.mkdir(parents=True, exist_ok=True)

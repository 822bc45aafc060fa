# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from dailywins import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if configuration.APP_CONFIG_PATH.is_file():
            self._config = load(
                configuration.APP_CONFIG_PATH.read_text(), Loader=Loader
            )
        if self._config is None:
            self._config = configuration.get_default_configuration()
            return

        # Migration: back-fill settings added after the file was written
        for key, value in configuration.get_default_configuration().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        backend: Optional[configuration.BackendType] = None,
        api_url: Optional[str] = None,
        remove_api_url: bool = False,
        api_token: Optional[str] = None,
        remove_api_token: bool = False,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        show_header: Optional[bool] = None,
        autosave_delay_ms: Optional[int] = None,
        saved_display_ms: Optional[int] = None,
        journal_window: Optional[int] = None,
        wins_limit: Optional[int] = None,
        request_timeout: Optional[float] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if backend is not None:
            self.config["backend"] = backend
        if api_url is not None:
            self.config["api_url"] = api_url
        if remove_api_url:
            self.config["api_url"] = None
        if api_token is not None:
            self.config["api_token"] = api_token
        if remove_api_token:
            self.config["api_token"] = None
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if show_header is not None:
            self.config["show_header"] = show_header
        if autosave_delay_ms is not None:
            self.config["autosave_delay_ms"] = autosave_delay_ms
        if saved_display_ms is not None:
            self.config["saved_display_ms"] = saved_display_ms
        if journal_window is not None:
            self.config["journal_window"] = journal_window
        if wins_limit is not None:
            self.config["wins_limit"] = wins_limit
        if request_timeout is not None:
            self.config["request_timeout"] = request_timeout
        if log_level is not None:
            self.config["log_level"] = log_level.upper()


CONFIGURATION_REPO = ConfigurationRepository()

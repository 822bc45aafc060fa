# SPDX-License-Identifier: MIT

from dailywins.repository.configuration import CONFIGURATION_REPO
from dailywins.source.base import DataSource, DataSourceError
from dailywins.source.local import LocalDataSource
from dailywins.source.rest import RestDataSource


def get_data_source() -> DataSource:
    config = CONFIGURATION_REPO.get_config()
    if config["backend"] == "remote":
        if not config["api_url"]:
            raise DataSourceError("backend is 'remote' but api_url is not configured")
        return RestDataSource(
            config["api_url"],
            token=config["api_token"],
            timeout=config["request_timeout"],
        )
    return LocalDataSource()

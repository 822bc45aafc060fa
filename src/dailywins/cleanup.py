# SPDX-License-Identifier: MIT

import atexit

from dailywins.repository.configuration import CONFIGURATION_REPO
from dailywins.repository.document import JOURNAL_REPO, WIN_REPO


def flush() -> None:
    CONFIGURATION_REPO.flush()
    WIN_REPO.flush()
    JOURNAL_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)

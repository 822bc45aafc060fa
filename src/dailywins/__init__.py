# SPDX-License-Identifier: MIT

from dailywins.cleanup import register_cleanup
from dailywins.initialize import initialize
from dailywins.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()

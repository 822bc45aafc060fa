# SPDX-License-Identifier: MIT

from typing import Optional

from rich.padding import Padding

from dailywins.view.state import get_console, get_show_header


def header(sub_header: Optional[str] = None) -> None:
    """Print "daily wins" and, below it, what is being shown."""
    if not get_show_header():
        return

    console = get_console()
    console.print(Padding("[dark_orange]daily wins[/dark_orange]", (1, 0, 0, 1)))
    if sub_header is not None:
        console.print(Padding(f"[sandy_brown]{sub_header}[/sandy_brown]", (0, 1)))

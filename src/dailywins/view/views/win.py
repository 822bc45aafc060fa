# SPDX-License-Identifier: MIT

from rich import box
from rich.table import Table

from dailywins.model.win import Win
from dailywins.time import datetime_to_display_local_date_str
from dailywins.view.state import get_console
from dailywins.view.views.header import header


def wins_view(
    report_name: str,
    wins: list[Win],
    columns: list[str] = ["id", "name", "description"],
) -> None:
    """Display a list of wins in a table."""
    header(report_name)

    wins_table = Table(box=box.SIMPLE)
    for column in columns:
        wins_table.add_column(column)

    for win in wins:
        row = []
        for column in columns:
            column_value = ""
            if column == "active":
                column_value = "yes" if win["active"] else "archived"
            elif column in ("created", "updated"):
                value = win[column]  # type: ignore[literal-required]
                column_value = (
                    datetime_to_display_local_date_str(value) if value is not None else ""
                )
            elif win.get(column) is not None:
                column_value = str(win[column])  # type: ignore[literal-required]
            if not win["active"]:
                column_value = f"[bright_black]{column_value}[/bright_black]"
            row.append(column_value)
        wins_table.add_row(*row)

    console = get_console()
    if wins:
        console.print(wins_table)
    else:
        console.print(" No wins yet.")


def single_win_view(win: Win) -> None:
    header("win")

    win_table = Table(box=box.SIMPLE)
    win_table.add_column("property")
    win_table.add_column("value")

    win_table.add_row("id", str(win["id"]))
    win_table.add_row("name", win["name"])
    win_table.add_row("description", win["description"] or "")
    win_table.add_row("active", "yes" if win["active"] else "archived")
    win_table.add_row(
        "created",
        datetime_to_display_local_date_str(win["created"]) if win["created"] else "",
    )
    win_table.add_row(
        "updated",
        datetime_to_display_local_date_str(win["updated"]) if win["updated"] else "",
    )

    console = get_console()
    console.print(win_table)

# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.padding import Padding
from rich.table import Table

from dailywins.model.draft import Draft, SessionState
from dailywins.model.snapshot import DaySnapshot
from dailywins.time import datetime_to_display_local_time_str_optional, instant_of
from dailywins.view.state import get_console
from dailywins.view.views.header import header

STATUS_LABELS: dict[SessionState, str] = {
    "idle": "",
    "loading": "Loading...",
    "saving": "Saving...",
    "saved": "Saved",
    "error": "Could not save",
}


def day_label(day_key: str, today_key: str) -> str:
    """'Today · Saturday, Oct 18' for today, 'Friday, Oct 17' otherwise."""
    instant = instant_of(day_key)
    if instant is None:
        return "Today"
    label = instant.format("dddd, MMM D")
    if day_key == today_key:
        return f"Today · {label}"
    return label


def status_label(
    state: SessionState, last_saved_label: Optional[str], error: Optional[str]
) -> str:
    label = STATUS_LABELS[state]
    if state == "error" and error:
        label = f"{label}: {error}"
    if last_saved_label is not None:
        if state == "idle":
            label = f"Last saved at {last_saved_label}"
        elif state == "saved":
            label = f"{label} · {last_saved_label}"
    return label


def day_view(
    snapshot: DaySnapshot,
    draft: Draft,
    state: SessionState = "idle",
    last_saved_at: Optional[pendulum.DateTime] = None,
    error: Optional[str] = None,
) -> None:
    """
    Show one day: rating, wins with streaks and notes, journal text.

    Streaks always come from the snapshot, i.e. they are anchored on today
    whatever day the draft belongs to.
    """
    header(day_label(draft["date_key"], snapshot["today_key"]))

    console = get_console()
    console.print(
        Padding(
            f"[bold]Journal streak:[/bold] {snapshot['journal_streak']} days", (0, 1)
        )
    )
    rating = draft["rating"]
    rating_str = " ".join(
        f"[bold green]{value}[/bold green]" if value == rating else f"[bright_black]{value}[/bright_black]"
        for value in range(1, 6)
    )
    console.print(Padding(f"[bold]Day rating:[/bold] {rating_str}", (0, 1)))

    entries = {entry["win_id"]: entry for entry in draft["wins"]}
    completed_count = sum(1 for entry in draft["wins"] if entry["completed"])

    wins_table = Table(
        box=box.SIMPLE,
        title=f"Wins: {completed_count} of {len(snapshot['wins'])} checked",
        title_justify="left",
    )
    wins_table.add_column("id")
    wins_table.add_column("done")
    wins_table.add_column("win")
    wins_table.add_column("streak")
    wins_table.add_column("note")

    for win in snapshot["wins"]:
        entry = entries.get(win["id"])
        completed = entry is not None and entry["completed"]
        name = win["name"]
        if win["description"]:
            name = f"{name}\n[bright_black]{win['description']}[/bright_black]"
        wins_table.add_row(
            str(win["id"]),
            "[green]X[/green]" if completed else "-",
            name,
            f"{snapshot['win_streaks'].get(win['id'], 0)} day streak",
            entry["note"] if entry is not None else "",
        )

    if snapshot["wins"]:
        console.print(wins_table)
    else:
        console.print(Padding("[bright_black]No active wins yet.[/bright_black]", (1, 1)))

    journal_text = draft["journal_text"].strip()
    console.print(Padding("[bold]Journal[/bold]", (0, 1)))
    console.print(
        Padding(journal_text or "[bright_black]Nothing written yet.[/bright_black]", (0, 2))
    )

    label = status_label(
        state, datetime_to_display_local_time_str_optional(last_saved_at), error
    )
    if label:
        console.print(Padding(f"[sandy_brown]{label}[/sandy_brown]", (1, 1, 0, 1)))

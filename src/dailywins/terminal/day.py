# SPDX-License-Identifier: MIT

import asyncio
import inspect
from typing import Annotated, Awaitable, Callable, Optional, Union

import typer

from dailywins.repository.configuration import CONFIGURATION_REPO
from dailywins.service.gateway import JournalGateway
from dailywins.service.journal import load_today_snapshot
from dailywins.service.session import DaySession
from dailywins.source.base import DataSourceError
from dailywins.source.factory import get_data_source
from dailywins.terminal.custom_typer import AliasedTyperGroup
from dailywins.terminal.parse import open_editor_for_text, parse_day_key
from dailywins.terminal.validate import validate_rating
from dailywins.time import key_of, now_local
from dailywins.view.views import day as day_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DateOption = Annotated[
    Optional[str],
    typer.Option(
        "--date",
        "-dt",
        help="YYYY-MM-DD, today (t), yesterday (y) or a day offset like -2",
    ),
]

# Edits that wait on an editor are coroutines
DayEdit = Callable[[DaySession], Union[None, Awaitable[None]]]


def resolve_day(date: Optional[str]) -> str:
    now = now_local()
    day_key = parse_day_key(date, now)
    if day_key > key_of(now):
        raise typer.BadParameter("Future days can't be edited yet")
    return day_key


async def run_session(day_key: str, edit: Optional[DayEdit]) -> None:
    """Open a session on today, move to `day_key`, apply `edit`, save and show."""
    config = CONFIGURATION_REPO.get_config()
    source = get_data_source()
    now = now_local()

    snapshot = await asyncio.to_thread(
        load_today_snapshot,
        source,
        now,
        config["journal_window"],
        config["wins_limit"],
    )
    session = DaySession(
        snapshot,
        JournalGateway(source),
        autosave_delay=config["autosave_delay_ms"] / 1000,
        saved_display_delay=config["saved_display_ms"] / 1000,
    )
    try:
        if day_key != session.selected_key and not await session.navigate(day_key):
            raise DataSourceError(session.error or f"Could not load {day_key}")
        if edit is not None:
            result = edit(session)
            if inspect.isawaitable(result):
                await result
            if session.is_dirty:
                await session.save_now()
        await session.wait_for_pending()
    finally:
        session.close()

    if session.state == "error":
        raise DataSourceError(session.error or "Could not save")

    if edit is not None:
        # Streaks may have moved with this save
        snapshot = await asyncio.to_thread(
            load_today_snapshot,
            source,
            now,
            config["journal_window"],
            config["wins_limit"],
        )
    day_report.day_view(
        snapshot,
        session.draft,
        session.state,
        session.last_saved_at,
        session.error,
    )


def run_day(date: Optional[str], edit: Optional[DayEdit] = None) -> None:
    day_key = resolve_day(date)
    try:
        asyncio.run(run_session(day_key, edit))
    except ValueError as e:
        raise typer.BadParameter(str(e))
    except DataSourceError as e:
        typer.echo(f"Journal store error: {e}")
        raise typer.Exit(1)


@app.command("show, s")
def show(date: DateOption = None) -> None:
    """Show a day's rating, wins and journal."""
    run_day(date)


@app.command("rate, r", no_args_is_help=True)
def rate(
    rating: Annotated[int, typer.Argument(callback=validate_rating, help="1-5")],
    date: DateOption = None,
) -> None:
    """Rate the day from 1 to 5."""
    run_day(date, lambda session: session.edit(rating=rating))


@app.command("unrate, ur")
def unrate(date: DateOption = None) -> None:
    """Remove the day's rating."""
    run_day(date, lambda session: session.edit(clear_rating=True))


@app.command("check, c", no_args_is_help=True)
def check(
    win_id: Annotated[int, typer.Argument(help="id of an active win")],
    date: DateOption = None,
) -> None:
    """Mark a win as done for the day."""
    run_day(date, lambda session: session.edit(win_id=win_id, completed=True))


@app.command("uncheck, uc", no_args_is_help=True)
def uncheck(
    win_id: Annotated[int, typer.Argument(help="id of an active win")],
    date: DateOption = None,
) -> None:
    """Mark a win as not done for the day."""
    run_day(date, lambda session: session.edit(win_id=win_id, completed=False))


@app.command("note, n", no_args_is_help=True)
def note(
    win_id: Annotated[int, typer.Argument(help="id of an active win")],
    text: Annotated[str, typer.Argument(help="note text, empty to clear")],
    date: DateOption = None,
) -> None:
    """Attach a note to a win for the day."""
    run_day(date, lambda session: session.edit(win_id=win_id, note=text))


@app.command("write, w")
def write(
    text: Annotated[
        Optional[str],
        typer.Argument(help="journal text; opens $EDITOR when omitted"),
    ] = None,
    append: Annotated[
        bool, typer.Option("--append", "-a", help="append to the existing text")
    ] = False,
    date: DateOption = None,
) -> None:
    """Write the day's journal."""

    async def edit(session: DaySession) -> None:
        current = session.draft["journal_text"]
        if text is None:
            new_text = (
                await asyncio.to_thread(open_editor_for_text, current or None) or ""
            )
        elif append and current.strip():
            new_text = f"{current.rstrip()}\n{text}"
        else:
            new_text = text
        session.edit(journal_text=new_text)

    run_day(date, edit)

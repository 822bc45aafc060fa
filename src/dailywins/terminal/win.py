# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from dailywins.repository.configuration import CONFIGURATION_REPO
from dailywins.service import win as win_service
from dailywins.source.base import DataSourceError
from dailywins.source.factory import get_data_source
from dailywins.terminal.custom_typer import AliasedTyperGroup
from dailywins.view.views import win as win_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
) -> None:
    """Create a new win to track daily."""
    try:
        win = win_service.create_win(get_data_source(), name, description)
    except win_service.WinValidationError as e:
        raise typer.BadParameter(str(e))
    except DataSourceError as e:
        typer.echo(f"Could not create win: {e}")
        raise typer.Exit(1)
    win_report.single_win_view(win)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: int,
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
) -> None:
    """Rename a win or change its description."""
    try:
        win = win_service.modify_win(
            get_data_source(),
            id,
            name=name,
            description=description,
            remove_description=remove_description,
        )
    except win_service.WinValidationError as e:
        raise typer.BadParameter(str(e))
    except DataSourceError as e:
        typer.echo(f"Could not update win {id}: {e}")
        raise typer.Exit(1)
    win_report.single_win_view(win)


def _set_active(id: int, active: bool) -> None:
    try:
        win = win_service.set_win_active(get_data_source(), id, active)
    except DataSourceError as e:
        typer.echo(f"Could not update win {id}: {e}")
        raise typer.Exit(1)
    win_report.single_win_view(win)


@app.command("archive, ar", no_args_is_help=True)
def archive(id: int) -> None:
    """Stop tracking a win. Its history is kept."""
    _set_active(id, False)


@app.command("unarchive, un", no_args_is_help=True)
def unarchive(id: int) -> None:
    """Start tracking an archived win again."""
    _set_active(id, True)


@app.command("list, ls")
def list_wins(
    all: Annotated[
        bool, typer.Option("--all", "-a", help="include archived wins")
    ] = False,
) -> None:
    """List active wins."""
    try:
        wins = win_service.fetch_wins(
            get_data_source(),
            limit=CONFIGURATION_REPO.get_config()["wins_limit"],
            sort="_order",
        )
    except DataSourceError as e:
        typer.echo(f"Could not load wins: {e}")
        raise typer.Exit(1)
    active, archived = win_service.split_wins(wins)
    if all:
        win_report.wins_view("wins", active + archived, ["id", "name", "description", "active"])
    else:
        win_report.wins_view("wins", active)

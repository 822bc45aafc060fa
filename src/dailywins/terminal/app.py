# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from dailywins.terminal import configuration, day, win
from dailywins.terminal.custom_typer import StoreAwareTyperGroup
from dailywins.terminal.progress import progress
from dailywins.view import state as view_state

app = typer.Typer(
    cls=StoreAwareTyperGroup,
    help="Daily wins - check off habits, rate the day, keep a journal",
    no_args_is_help=True,
)
app.add_typer(day.app, name="day, d", help="Rate, check off and write up a day.")
app.add_typer(win.app, name="win, w", help="Manage the wins you track.")
app.add_typer(configuration.app, name="config, c", help="View or change settings.")
app.command(name="progress, p")(progress)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option("--no-header", "-nh", help="Suppress header output in views"),
    ] = False,
    plain: Annotated[
        bool,
        typer.Option("--plain", help="Render views without colors"),
    ] = False,
) -> None:
    """
    Daily wins - check off habits, rate the day, keep a journal

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if plain:
        view_state.set_plain(True)


def run() -> None:
    app()

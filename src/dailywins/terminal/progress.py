# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from dailywins.service.progress import (
    build_month_grid,
    build_week_grid,
    fetch_year_journals,
)
from dailywins.source.base import DataSourceError
from dailywins.source.factory import get_data_source
from dailywins.terminal.validate import validate_layout
from dailywins.time import key_of, now_local
from dailywins.view.views import progress as progress_report


def progress(
    year: Annotated[
        Optional[int], typer.Option("--year", "-y", help="defaults to this year")
    ] = None,
    layout: Annotated[
        str,
        typer.Option("--layout", "-l", callback=validate_layout, help="month or week"),
    ] = "month",
) -> None:
    """Year overview of logged and rated days."""
    now = now_local()
    current_year = now.year
    if year is None:
        year = current_year
    if year > current_year:
        raise typer.BadParameter("Future years have no entries")

    try:
        journals = fetch_year_journals(get_data_source(), year)
    except DataSourceError as e:
        typer.echo(f"Could not load journals: {e}")
        raise typer.Exit(1)

    today_key = key_of(now)
    if layout == "week":
        progress_report.week_progress_view(
            year, build_week_grid(year, journals, today_key)
        )
    else:
        progress_report.month_progress_view(
            year, build_month_grid(year, journals, today_key)
        )

# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.table import Table

from dailywins import configuration
from dailywins.repository.configuration import CONFIGURATION_REPO
from dailywins.terminal.custom_typer import AliasedTyperGroup
from dailywins.terminal.validate import validate_log_level
from dailywins.view.state import get_console

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = get_console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("backend", config["backend"])
    table.add_row("api_url", config["api_url"] or "")
    table.add_row("api_token", "********" if config["api_token"] else "")
    table.add_row("data_path", config["data_path"] or str(configuration.DATA_PATH))
    table.add_row(
        "show_header", "✓ Enabled" if config["show_header"] else "✗ Disabled"
    )
    table.add_row("autosave_delay_ms", str(config["autosave_delay_ms"]))
    table.add_row("saved_display_ms", str(config["saved_display_ms"]))
    table.add_row("journal_window", str(config["journal_window"]))
    table.add_row("wins_limit", str(config["wins_limit"]))
    table.add_row("request_timeout", str(config["request_timeout"]))
    table.add_row("log_level", config["log_level"])

    console.print(table)
    console.print(f"\nConfig file: {configuration.APP_CONFIG_PATH}")


@app.command("set, s")
def set_config(
    backend: Annotated[
        Optional[str], typer.Option("--backend", "-b", help="local or remote")
    ] = None,
    api_url: Annotated[Optional[str], typer.Option("--api-url")] = None,
    remove_api_url: Annotated[bool, typer.Option("--remove-api-url")] = False,
    api_token: Annotated[Optional[str], typer.Option("--api-token")] = None,
    remove_api_token: Annotated[bool, typer.Option("--remove-api-token")] = False,
    data_path: Annotated[Optional[str], typer.Option("--data-path")] = None,
    remove_data_path: Annotated[bool, typer.Option("--remove-data-path")] = False,
    show_header: Annotated[
        Optional[bool], typer.Option("--show-header/--hide-header")
    ] = None,
    autosave_delay_ms: Annotated[
        Optional[int], typer.Option("--autosave-delay-ms", min=0)
    ] = None,
    saved_display_ms: Annotated[
        Optional[int], typer.Option("--saved-display-ms", min=0)
    ] = None,
    journal_window: Annotated[
        Optional[int], typer.Option("--journal-window", min=1)
    ] = None,
    wins_limit: Annotated[Optional[int], typer.Option("--wins-limit", min=1)] = None,
    request_timeout: Annotated[
        Optional[float], typer.Option("--request-timeout", min=0.1)
    ] = None,
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", callback=validate_log_level)
    ] = None,
) -> None:
    """Change configuration settings."""
    if backend is not None and backend not in ("local", "remote"):
        raise typer.BadParameter("Backend must be 'local' or 'remote'")

    CONFIGURATION_REPO.update_config(
        backend=backend,  # type: ignore[arg-type]
        api_url=api_url,
        remove_api_url=remove_api_url,
        api_token=api_token,
        remove_api_token=remove_api_token,
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        autosave_delay_ms=autosave_delay_ms,
        saved_display_ms=saved_display_ms,
        journal_window=journal_window,
        wins_limit=wins_limit,
        request_timeout=request_timeout,
        log_level=log_level,
    )
    view()

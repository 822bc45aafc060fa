# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core
from rich.padding import Padding

from dailywins import configuration
from dailywins.repository.configuration import CONFIGURATION_REPO
from dailywins.view.state import get_console


def describe_store() -> str:
    config = CONFIGURATION_REPO.get_config()
    if config["backend"] == "remote":
        return f"remote store: {config['api_url'] or 'api_url not set'}"
    return f"local store: {configuration.DATA_PATH}"


class AliasedTyperGroup(typer.core.TyperGroup):
    """TyperGroup whose command names carry their aliases, e.g. "day, d"."""

    _ALIAS_SPLIT_P = re.compile(r"\s*,\s*")
    command_order: tuple[str, ...] = ()

    def resolve_alias(self, cmd_name: str) -> str:
        for full_name in self.commands:
            if cmd_name in self._ALIAS_SPLIT_P.split(full_name):
                return full_name
        return cmd_name

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.resolve_alias(cmd_name))

    def list_commands(self, ctx: click.Context) -> list[str]:
        # Typer registers sub apps before commands, so order explicitly
        ordered = [name for name in self.command_order if name in self.commands]
        return ordered + [name for name in self.commands if name not in ordered]


class StoreAwareTyperGroup(AliasedTyperGroup):
    """Root group. Shows which store commands will read and write above the help."""

    command_order = ("day, d", "win, w", "progress, p", "config, c")

    def format_help(
        self, ctx: click.Context, formatter: click.formatting.HelpFormatter
    ) -> None:
        get_console().print(
            Padding(f"[bold plum1]{describe_store()}[/bold plum1]", (1, 0, 0, 1))
        )
        super().format_help(ctx, formatter)

"""View settings chosen by global options, held in context variables."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

from rich.console import Console

_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)
_plain_var: ContextVar[bool] = ContextVar("plain", default=False)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()


def set_plain(value: bool) -> None:
    """Render views without colors or highlighting."""
    _plain_var.set(value)


def get_plain() -> bool:
    return _plain_var.get()


def get_console() -> Console:
    """Console for the current output stream, honouring --plain."""
    plain = get_plain()
    return Console(no_color=True if plain else None, highlight=not plain)

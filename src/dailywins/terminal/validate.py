# SPDX-License-Identifier: MIT

from typing import Optional

import typer


def validate_rating(rating: Optional[int]) -> Optional[int]:
    if rating is None:
        return None
    if not (1 <= rating <= 5):
        raise typer.BadParameter("Rating must be between 1 and 5 (inclusive)")
    return rating


def validate_layout(layout: str) -> str:
    if layout not in ("month", "week"):
        raise typer.BadParameter("Layout must be 'month' or 'week'")
    return layout


def validate_log_level(log_level: Optional[str]) -> Optional[str]:
    if log_level is None:
        return None
    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    return log_level.upper()

# SPDX-License-Identifier: MIT

from typing import Optional

from rich.padding import Padding
from rich.text import Text

from dailywins.model.progress import ProgressDay, ProgressMonth
from dailywins.view.state import get_console
from dailywins.view.views.header import header

RATING_STYLES = {
    1: "red3",
    2: "dark_orange",
    3: "gold1",
    4: "chartreuse3",
    5: "green3",
}
MISSING_STYLE = "grey30"
UNRATED_STYLE = "grey62"
CELL = "■"


def get_day_symbol(day: Optional[ProgressDay]) -> tuple[str, str]:
    """Symbol and style for one grid cell."""
    if day is None:
        return " ", ""
    if not day["selectable"]:
        return "·", MISSING_STYLE
    if day["state"] == "rated" and day["rating"] is not None:
        return CELL, RATING_STYLES[day["rating"]]
    if day["state"] == "unrated":
        return CELL, UNRATED_STYLE
    return CELL, MISSING_STYLE


def legend() -> Text:
    text = Text(" ")
    text.append(CELL, style=MISSING_STYLE)
    text.append(" missing  ")
    text.append(CELL, style=UNRATED_STYLE)
    text.append(" no rating  ")
    for rating, style in RATING_STYLES.items():
        text.append(CELL, style=style)
    text.append(" 1-5")
    return text


def month_progress_view(year: int, months: list[ProgressMonth]) -> None:
    header(f"progress {year}")

    console = get_console()
    console.print(legend())
    console.print()
    for month in months:
        row = Text(f" {month['label']} ")
        for day in month["days"]:
            symbol, style = get_day_symbol(day)
            row.append(symbol, style=style)
        console.print(row)
    console.print(summary([day for month in months for day in month["days"]]))


def week_progress_view(year: int, cells: list[Optional[ProgressDay]]) -> None:
    """Sunday-first rows, one column per week."""
    header(f"progress {year}")

    console = get_console()
    console.print(legend())
    console.print()
    weekday_labels = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    for weekday, label in enumerate(weekday_labels):
        row = Text(f" {label} ")
        for day in cells[weekday::7]:
            symbol, style = get_day_symbol(day)
            row.append(symbol, style=style)
        console.print(row)

    console.print(summary([day for day in cells if day is not None]))


def summary(days: list[ProgressDay]) -> Padding:
    logged = [day for day in days if day["state"] != "missing"]
    ratings = [day["rating"] for day in days if day["rating"] is not None]
    line = f"{len(logged)} days logged"
    if ratings:
        line += f", {len(ratings)} rated, average {sum(ratings) / len(ratings):.1f}"
    return Padding(line, (1, 1))

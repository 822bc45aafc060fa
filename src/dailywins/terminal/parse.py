# SPDX-License-Identifier: MIT

import os
import re
import subprocess
import tempfile
from typing import Optional

import pendulum
import typer

from dailywins.time import is_valid_key, key_of, now_local, shift_key


def parse_day_key(
    day_param: Optional[str], now: Optional[pendulum.DateTime] = None
) -> str:
    """
    Turn a --date value into a day key.

    Accepts YYYY-MM-DD, today/t, yesterday/y, or a day offset such as -3.
    Missing values mean today.
    """
    today_key = key_of(now if now is not None else now_local())
    if day_param is None:
        return today_key

    day = day_param.strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", day):
        if not is_valid_key(day):
            raise typer.BadParameter(f"Not a calendar day: {day}")
        return day

    if re.match(r"^-?\d+$", day):
        return shift_key(today_key, int(day))

    if day == "today" or day == "t":
        return today_key
    if day == "yesterday" or day == "y":
        return shift_key(today_key, -1)
    raise typer.BadParameter("Incorrect date format, use YYYY-MM-DD, today, yesterday or an offset")


def open_editor_for_text(initial_text: Optional[str] = None) -> Optional[str]:
    """
    Open the user's preferred editor to edit journal text.
    Returns the edited text with trailing newlines removed, or None if empty.
    """
    editor = os.environ.get("EDITOR", "nano")

    with tempfile.NamedTemporaryFile(mode="w+", suffix=".txt") as tf:
        if initial_text is not None:
            tf.write(initial_text)
            tf.flush()

        subprocess.run([editor, tf.name], check=True)
        tf.seek(0)
        text = tf.read()
        if not text.strip():
            return None
        return text.rstrip("\n")

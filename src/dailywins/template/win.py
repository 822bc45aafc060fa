# SPDX-License-Identifier: MIT

from typing import Any


def get_win_payload_template() -> dict[str, Any]:
    return {
        "name": "",
        "description": None,
        "active": True,
    }

# SPDX-License-Identifier: MIT

from dailywins.model.draft import Draft


def get_draft_template(date_key: str) -> Draft:
    return {
        "date_key": date_key,
        "journal_id": None,
        "rating": None,
        "journal_text": "",
        "wins": [],
        "saved_fingerprint": (None, "", ()),
    }

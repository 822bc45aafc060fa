# SPDX-License-Identifier: MIT

import asyncio
from typing import Any, Optional

from dailywins.model.journal import Journal
from dailywins.service import journal as journal_service
from dailywins.source.base import DataSource


class JournalGateway:
    """
    Async face of a DataSource for the day session.

    Requests run in a worker thread so the event loop keeps handling edits
    and timers while a fetch or save is outstanding.
    """

    def __init__(self, source: DataSource) -> None:
        self.source = source

    async def fetch_journal_by_date(self, day_key: str) -> Optional[Journal]:
        return await asyncio.to_thread(
            journal_service.fetch_journal_by_date, self.source, day_key
        )

    async def save_journal(
        self, journal_id: Optional[int], payload: dict[str, Any]
    ) -> Journal:
        return await asyncio.to_thread(
            journal_service.save_journal, self.source, journal_id, payload
        )

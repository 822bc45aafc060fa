# SPDX-License-Identifier: MIT

import asyncio
import logging
from copy import deepcopy
from typing import Any, Callable, Coroutine, Optional, Protocol

import pendulum

from dailywins import time
from dailywins.model.draft import Draft, SessionState
from dailywins.model.journal import Journal
from dailywins.model.snapshot import DaySnapshot
from dailywins.model.win import Win, WinId
from dailywins.service.draft import (
    build_draft,
    build_journal_payload,
    draft_fingerprint,
    is_dirty,
    is_savable,
    merge_saved_journal,
    rekey_wins_state,
)
from dailywins.source.base import DataSourceError

logger = logging.getLogger(__name__)

AUTOSAVE_DELAY = 0.9
SAVED_DISPLAY_DELAY = 2.5


class Gateway(Protocol):
    async def fetch_journal_by_date(self, day_key: str) -> Optional[Journal]: ...

    async def save_journal(
        self, journal_id: Optional[int], payload: dict[str, Any]
    ) -> Journal: ...


class DaySession:
    """
    Editing state for one day at a time, reconciled against the server.

    All methods must be called from the event loop the session was created
    on. The only suspension points are the autosave timer and the gateway
    calls made by `navigate` and `save`.

    Guarantees:
    - at most one save is in flight; a save requested meanwhile is dropped
    - a save always writes the day it was taken from, even if the user has
      moved to another day by the time it runs or completes
    - a fetch that completes after the user moved on is discarded
    - unsaved local edits are never replaced by external data
    """

    def __init__(
        self,
        snapshot: DaySnapshot,
        gateway: Gateway,
        autosave_delay: float = AUTOSAVE_DELAY,
        saved_display_delay: float = SAVED_DISPLAY_DELAY,
        on_journal_saved: Optional[Callable[[Journal], None]] = None,
        on_date_change: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._loop = asyncio.get_running_loop()
        self._gateway = gateway
        self._autosave_delay = autosave_delay
        self._saved_display_delay = saved_display_delay
        self._on_journal_saved = on_journal_saved
        self._on_date_change = on_date_change

        journal = snapshot["journal"]
        self._wins: list[Win] = list(snapshot["wins"])
        self._today_key = snapshot["today_key"]
        self._selected_key = self._today_key
        self._draft = build_draft(self._today_key, self._wins, journal)
        self._journal_ids: dict[str, int] = {}
        if journal is not None:
            self._journal_ids[self._today_key] = journal["id"]
        self._last_saved_at: Optional[pendulum.DateTime] = (
            journal["updated"] if journal is not None else None
        )

        self._state: SessionState = "idle"
        self._error: Optional[str] = None
        self._save_in_flight = False
        self._autosave_handle: Optional[asyncio.TimerHandle] = None
        self._saved_handle: Optional[asyncio.TimerHandle] = None
        self._background: set[asyncio.Task[Any]] = set()
        self._closed = False

    # ─────────────────────────────────────────────────────────
    # Read-only state
    # ─────────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def selected_key(self) -> str:
        return self._selected_key

    @property
    def today_key(self) -> str:
        return self._today_key

    @property
    def is_today(self) -> bool:
        return self._selected_key == self._today_key

    @property
    def draft(self) -> Draft:
        return deepcopy(self._draft)

    @property
    def wins(self) -> list[Win]:
        return list(self._wins)

    @property
    def last_saved_at(self) -> Optional[pendulum.DateTime]:
        return self._last_saved_at

    @property
    def is_dirty(self) -> bool:
        return is_dirty(self._draft)

    @property
    def can_save(self) -> bool:
        return is_savable(self._draft)

    @property
    def is_saving(self) -> bool:
        return self._save_in_flight

    @property
    def has_pending_autosave(self) -> bool:
        return self._autosave_handle is not None

    def journal_id_for(self, day_key: str) -> Optional[int]:
        return self._journal_ids.get(day_key)

    # ─────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────

    async def navigate(self, target_key: str) -> bool:
        """
        Move to another day. Returns False if rejected or not applied.

        Future days, the current day and malformed keys are rejected
        without error.
        """
        if (
            not time.is_valid_key(target_key)
            or target_key == self._selected_key
            or target_key > self._today_key
        ):
            logger.debug("navigation to %r rejected", target_key)
            return False

        self._cancel_autosave()
        if self.is_dirty and self.can_save:
            # Flush the day being left under its own key
            self._spawn(self.save(deepcopy(self._draft)))

        previous_key = self._selected_key
        self._selected_key = target_key
        if self._on_date_change is not None:
            self._on_date_change(target_key)
        self._set_state("loading")

        try:
            journal = await self._gateway.fetch_journal_by_date(target_key)
        except DataSourceError as e:
            logger.error("loading %s failed: %s", target_key, e, exc_info=True)
            if self._selected_key == target_key:
                self._selected_key = previous_key
                self._error = str(e)
                self._set_state("error")
            return False

        if self._selected_key != target_key:
            logger.debug("discarding stale journal for %s", target_key)
            return False

        self._apply_journal(journal)
        return True

    def edit(
        self,
        rating: Optional[int] = None,
        journal_text: Optional[str] = None,
        win_id: Optional[WinId] = None,
        completed: Optional[bool] = None,
        note: Optional[str] = None,
        clear_rating: bool = False,
    ) -> None:
        if rating is not None and not 1 <= rating <= 5:
            raise ValueError("Rating must be between 1 and 5 (inclusive)")
        if (completed is not None or note is not None) and win_id is None:
            raise ValueError("win_id is required to edit a win")

        entry = None
        if win_id is not None:
            entry = next(
                (item for item in self._draft["wins"] if item["win_id"] == win_id),
                None,
            )
            if entry is None:
                raise ValueError(f"Win {win_id} is not an active win")

        if rating is not None:
            self._draft["rating"] = rating
        if clear_rating:
            self._draft["rating"] = None
        if journal_text is not None:
            self._draft["journal_text"] = journal_text
        if entry is not None:
            if completed is not None:
                entry["completed"] = completed
            if note is not None:
                entry["note"] = note

        self._schedule_autosave()

    async def save(self, draft: Optional[Draft] = None) -> bool:
        """
        Write a draft (the current one by default).

        Returns False without doing anything if a save is already in flight,
        and False if the write fails.
        """
        if self._save_in_flight:
            logger.debug("save skipped, another save is in flight")
            return False

        context = deepcopy(draft if draft is not None else self._draft)
        day_key = context["date_key"]
        known_id = self._journal_ids.get(day_key)
        if known_id is not None:
            context["journal_id"] = known_id
        payload = build_journal_payload(context)

        self._save_in_flight = True
        if day_key == self._selected_key:
            self._set_state("saving")

        try:
            saved = await self._gateway.save_journal(context["journal_id"], payload)
        except DataSourceError as e:
            logger.error("saving %s failed: %s", day_key, e, exc_info=True)
            if day_key == self._selected_key:
                self._error = str(e)
                self._set_state("error")
            return False
        finally:
            self._save_in_flight = False

        merged = merge_saved_journal(saved, context, payload)
        self._journal_ids[day_key] = merged["id"]

        if day_key == self._selected_key:
            self._apply_saved(merged, context)
            self._last_saved_at = merged["updated"] or time.now_utc()
            self._error = None
            self._set_state("saved")
            self._schedule_saved_reset()

        if self._on_journal_saved is not None:
            self._on_journal_saved(saved)

        # Edits made while the request was out still need saving, but only
        # the selected day has a draft to save
        if day_key == self._selected_key:
            self._schedule_autosave()
        return True

    async def save_now(self) -> bool:
        self._cancel_autosave()
        return await self.save()

    def apply_snapshot(self, snapshot: DaySnapshot) -> bool:
        """
        Take in a refreshed snapshot from elsewhere.

        The win list always follows the snapshot. Today's journal only
        replaces the draft when today is selected, nothing is unsaved, and
        the incoming journal is not older than our last save.
        """
        was_dirty = self.is_dirty
        self._wins = list(snapshot["wins"])
        self._today_key = snapshot["today_key"]
        self._draft["wins"] = rekey_wins_state(self._wins, self._draft["wins"])
        if not was_dirty:
            self._draft["saved_fingerprint"] = draft_fingerprint(self._draft)

        if not self.is_today or self.is_dirty:
            return False

        journal = snapshot["journal"]
        if journal is None:
            if self._journal_ids.get(self._today_key) is not None:
                logger.debug("ignoring snapshot without the journal we saved")
                return False
        elif (
            journal["updated"] is not None
            and self._last_saved_at is not None
            and journal["updated"] < self._last_saved_at
        ):
            logger.debug("ignoring stale snapshot for %s", self._today_key)
            return False

        self._apply_journal(
            journal, reset_state=self._state not in ("saving", "loading")
        )
        return True

    async def wait_for_pending(self) -> None:
        """Wait for background saves started by navigation or autosave."""
        while self._background:
            await asyncio.gather(*list(self._background))

    def close(self) -> None:
        self._closed = True
        self._cancel_autosave()
        if self._saved_handle is not None:
            self._saved_handle.cancel()
            self._saved_handle = None

    # ─────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────

    def _set_state(self, state: SessionState) -> None:
        if state != self._state:
            logger.debug("%s: %s -> %s", self._selected_key, self._state, state)
        self._state = state

    def _apply_journal(self, journal: Optional[Journal], reset_state: bool = True) -> None:
        day_key = self._selected_key
        self._cancel_autosave()
        self._draft = build_draft(day_key, self._wins, journal)
        if journal is not None:
            self._journal_ids[day_key] = journal["id"]
        else:
            self._draft["journal_id"] = self._journal_ids.get(day_key)
        self._last_saved_at = journal["updated"] if journal is not None else None
        if reset_state:
            self._error = None
            self._set_state("idle")

    def _apply_saved(self, merged: Journal, context: Draft) -> None:
        saved_fingerprint = draft_fingerprint(context)
        if draft_fingerprint(self._draft) == saved_fingerprint:
            self._draft = build_draft(context["date_key"], self._wins, merged)
            return
        self._draft["journal_id"] = merged["id"]
        self._draft["saved_fingerprint"] = saved_fingerprint

    def _schedule_autosave(self) -> None:
        self._cancel_autosave()
        if self._closed or self._save_in_flight:
            return
        if not self.is_dirty or not self.can_save:
            return
        self._autosave_handle = self._loop.call_later(
            self._autosave_delay, self._fire_autosave
        )

    def _fire_autosave(self) -> None:
        self._autosave_handle = None
        if self._closed or not self.is_dirty or not self.can_save:
            return
        self._spawn(self.save())

    def _cancel_autosave(self) -> None:
        if self._autosave_handle is not None:
            self._autosave_handle.cancel()
            self._autosave_handle = None

    def _schedule_saved_reset(self) -> None:
        if self._saved_handle is not None:
            self._saved_handle.cancel()
        self._saved_handle = self._loop.call_later(
            self._saved_display_delay, self._reset_saved
        )

    def _reset_saved(self) -> None:
        self._saved_handle = None
        if self._state == "saved":
            self._set_state("idle")

    def _spawn(self, coroutine: Coroutine[Any, Any, Any]) -> None:
        task = self._loop.create_task(coroutine)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

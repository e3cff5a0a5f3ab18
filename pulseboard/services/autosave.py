"""Debounced draft persistence for the post editor."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from pulseboard.persistence.snapshot import StatePersistence
from pulseboard.schemas.blog import Draft
from pulseboard.settings import DEFAULT_AUTOSAVE_DELAY_SECONDS

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay (``loop.call_later``)."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class DraftAutosaver:
    """Save the editor draft once edits have been quiet for ``delay`` seconds.

    At most one timer is pending at a time: every :meth:`edit` cancels the
    previous timer and schedules a new one. Blank drafts (no title and no
    content) are never written.
    """

    def __init__(
        self,
        persistence: StatePersistence,
        *,
        delay: float = DEFAULT_AUTOSAVE_DELAY_SECONDS,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._persistence = persistence
        self._delay = delay
        self._scheduler = scheduler
        self._handle: Cancellable | None = None
        self._draft: Draft | None = None
        self._closed = False

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def draft(self) -> Draft | None:
        return self._draft

    def restore(self) -> Draft | None:
        """Return the previously saved draft, if any, and track it as current."""

        draft = self._persistence.load_draft()
        if draft is not None:
            self._draft = draft
        return draft

    def edit(self, draft: Draft) -> None:
        """Record the latest editor contents and restart the debounce timer."""

        if self._closed:
            raise RuntimeError("DraftAutosaver is closed")
        self._draft = draft
        self.cancel()
        self._handle = self._resolve_scheduler().call_later(self._delay, self._fire)

    def flush(self) -> bool:
        """Save immediately instead of waiting for the timer."""

        self.cancel()
        return self._save_current()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def submit(self) -> None:
        """The draft became a post: stop the timer and drop the saved copy."""

        self.reset()

    def reset(self) -> None:
        self.cancel()
        self._draft = None
        self._persistence.clear_draft()

    def close(self) -> None:
        self.cancel()
        self._closed = True

    def __enter__(self) -> DraftAutosaver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _fire(self) -> None:
        self._handle = None
        self._save_current()

    def _save_current(self) -> bool:
        draft = self._draft
        if draft is None or draft.is_blank:
            return False
        self._persistence.save_draft(draft)
        logger.info("Autosaved draft %r", draft.title or "(untitled)")
        return True

    def _resolve_scheduler(self) -> Scheduler:
        if self._scheduler is None:
            self._scheduler = asyncio.get_running_loop()
        return self._scheduler


__all__ = ["Cancellable", "DraftAutosaver", "Scheduler"]

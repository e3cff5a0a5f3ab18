"""Stateful wrapper around :func:`pulseboard.store.reducer.reduce`.

The store is the single writer of the application state. After each effective
transition it

1. recomputes blog analytics when the post collection or the viewer changed,
2. mirrors the slices that changed (theme, user, posts, bookmarks) into
   storage, and
3. notifies subscribers with the new snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pulseboard.persistence.snapshot import StatePersistence
from pulseboard.schemas.state import AppState
from pulseboard.services.analytics import BlogAnalytics
from pulseboard.store.actions import AnyAction, UpdateAnalytics
from pulseboard.store.reducer import reduce
from pulseboard.utils.time import Clock, utcnow

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


class Store:
    """Hold the current snapshot and route every change through the reducer."""

    def __init__(
        self,
        state: AppState | None = None,
        *,
        persistence: StatePersistence | None = None,
        analytics: BlogAnalytics | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._persistence = persistence
        self._analytics = analytics or BlogAnalytics()
        self._clock = clock
        self._listeners: list[Listener] = []
        self._state = self._with_analytics(state or AppState())

    @classmethod
    def from_persistence(
        cls,
        persistence: StatePersistence,
        *,
        analytics: BlogAnalytics | None = None,
        clock: Clock = utcnow,
    ) -> Store:
        """Build a store whose initial state is restored from storage."""

        return cls(
            persistence.load_state(),
            persistence=persistence,
            analytics=analytics,
            clock=clock,
        )

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def persistence(self) -> StatePersistence | None:
        return self._persistence

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: AnyAction) -> AppState:
        """Apply ``action`` and return the resulting snapshot."""

        previous = self._state
        current = reduce(previous, action)
        if current is previous:
            logger.debug("Action %s left the state unchanged", action.type)
            return previous

        if current.blog_posts is not previous.blog_posts or current.user != previous.user:
            current = self._with_analytics(current)

        self._state = current
        logger.debug("Applied action %s", action.type)
        self._mirror(previous, current)
        for listener in list(self._listeners):
            listener(current)
        return current

    def refresh_analytics(self) -> AppState:
        """Recompute blog analytics against the current clock (e.g. after midnight)."""

        analytics = self._analytics.build(
            self._state.blog_posts, self._clock(), self._state.viewer.username
        )
        return self.dispatch(UpdateAnalytics(analytics=analytics))

    def _with_analytics(self, state: AppState) -> AppState:
        analytics = self._analytics.build(state.blog_posts, self._clock(), state.viewer.username)
        return reduce(state, UpdateAnalytics(analytics=analytics))

    def _mirror(self, previous: AppState, current: AppState) -> None:
        if self._persistence is None:
            return
        if current.theme != previous.theme:
            self._persistence.save_theme(current.theme)
        if current.user is not previous.user:
            self._persistence.save_user(current.user)
        if current.blog_posts is not previous.blog_posts:
            self._persistence.save_posts(current.blog_posts)
        if current.bookmarks is not previous.bookmarks:
            self._persistence.save_bookmarks(current.bookmarks)


__all__ = ["Listener", "Store"]

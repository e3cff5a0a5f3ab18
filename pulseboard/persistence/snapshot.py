"""Serialize state slices to storage and restore them at startup."""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from pulseboard.persistence.storage import KeyValueStorage
from pulseboard.schemas.blog import BlogPost, Draft
from pulseboard.schemas.bookmark import Bookmark
from pulseboard.schemas.state import AppState, Theme
from pulseboard.schemas.user import User

logger = logging.getLogger(__name__)

USER_KEY = "user"
POSTS_KEY = "blogPosts"
BOOKMARKS_KEY = "bookmarks"
DRAFT_KEY = "blogDrafts"
THEME_KEY = "theme"

T = TypeVar("T")

_USER_ADAPTER: TypeAdapter[User | None] = TypeAdapter(User | None)
_POSTS_ADAPTER: TypeAdapter[list[BlogPost]] = TypeAdapter(list[BlogPost])
_BOOKMARKS_ADAPTER: TypeAdapter[list[Bookmark]] = TypeAdapter(list[Bookmark])


def _dump(adapter: TypeAdapter[Any], value: Any) -> str:
    return adapter.dump_json(value, by_alias=True).decode("utf-8")


class StatePersistence:
    """Mirror the session slices and the editor draft into key-value storage.

    Loading is forgiving: a missing key yields the default for its slice, and a
    malformed or schema-invalid value is logged and replaced by the default so a
    damaged store never prevents startup.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    def _load_slice(self, key: str, adapter: TypeAdapter[T], default: T) -> T:
        raw = self._storage.load(key)
        if raw is None:
            return default
        try:
            return adapter.validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Discarding corrupt %r slice from storage (%d errors); using default",
                key,
                exc.error_count(),
            )
            return default

    def load_user(self) -> User | None:
        return self._load_slice(USER_KEY, _USER_ADAPTER, None)

    def load_posts(self) -> list[BlogPost]:
        return self._load_slice(POSTS_KEY, _POSTS_ADAPTER, [])

    def load_bookmarks(self) -> list[Bookmark]:
        return self._load_slice(BOOKMARKS_KEY, _BOOKMARKS_ADAPTER, [])

    def load_theme(self) -> Theme | None:
        raw = self._storage.load(THEME_KEY)
        if raw in ("light", "dark"):
            return raw
        if raw is not None:
            logger.warning("Ignoring unknown stored theme %r", raw)
        return None

    def load_state(self, initial: AppState | None = None) -> AppState:
        """Overlay persisted slices on top of ``initial`` (defaults to an empty state)."""

        base = initial or AppState()
        return base.model_copy(
            update={
                "theme": self.load_theme() or base.theme,
                "user": self.load_user(),
                "blog_posts": self.load_posts(),
                "bookmarks": self.load_bookmarks(),
            }
        )

    def save_user(self, user: User | None) -> None:
        self._storage.save(USER_KEY, _dump(_USER_ADAPTER, user))

    def save_posts(self, posts: list[BlogPost]) -> None:
        self._storage.save(POSTS_KEY, _dump(_POSTS_ADAPTER, posts))

    def save_bookmarks(self, bookmarks: list[Bookmark]) -> None:
        self._storage.save(BOOKMARKS_KEY, _dump(_BOOKMARKS_ADAPTER, bookmarks))

    def save_theme(self, theme: Theme) -> None:
        self._storage.save(THEME_KEY, theme)

    def save_state(self, state: AppState) -> None:
        self.save_theme(state.theme)
        self.save_user(state.user)
        self.save_posts(state.blog_posts)
        self.save_bookmarks(state.bookmarks)

    def load_draft(self) -> Draft | None:
        raw = self._storage.load(DRAFT_KEY)
        if raw is None:
            return None
        try:
            return Draft.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Failed to parse saved draft: %s", exc)
            return None

    def save_draft(self, draft: Draft) -> None:
        self._storage.save(DRAFT_KEY, json.dumps(draft.to_json_dict()))

    def clear_draft(self) -> None:
        self._storage.remove(DRAFT_KEY)


__all__ = [
    "BOOKMARKS_KEY",
    "DRAFT_KEY",
    "POSTS_KEY",
    "StatePersistence",
    "THEME_KEY",
    "USER_KEY",
]

"""Persistence adapter: key-value backends and state slice (de)serialization."""

from .snapshot import (
    BOOKMARKS_KEY,
    DRAFT_KEY,
    POSTS_KEY,
    THEME_KEY,
    USER_KEY,
    StatePersistence,
)
from .storage import (
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    RedisStorage,
    build_storage,
)

__all__ = [
    "BOOKMARKS_KEY",
    "DRAFT_KEY",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "POSTS_KEY",
    "RedisStorage",
    "StatePersistence",
    "THEME_KEY",
    "USER_KEY",
    "build_storage",
]

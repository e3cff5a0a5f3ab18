"""Centralized configuration management for Pulseboard."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so every consumer importing :mod:`pulseboard.settings` sees
# the same values as the CLI entry point.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_STORAGE_PATH = "./data/pulseboard.json"
DEFAULT_NEWS_API_BASE_URL = "https://newsapi.org/v2"
DEFAULT_NEWS_PAGE_SIZE = 20
DEFAULT_AUTOSAVE_DELAY_SECONDS = 5.0
DEFAULT_ANALYTICS_WINDOW_DAYS = 30
DEFAULT_TOP_POSTS_LIMIT = 5
DEFAULT_LOG_LEVEL = "INFO"

StorageBackend = Literal["memory", "file", "redis"]


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Besides the raw environment values the class exposes a few derived helpers
    (resolved storage backend, numeric log level) so callers never repeat the
    fallback rules.
    """

    _explicit_news_api_key: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        super().__init__(**values)
        self._explicit_news_api_key = bool(self.news_api_key and self.news_api_key.strip())

    storage_backend: StorageBackend = Field(
        default="file",
        alias="PULSEBOARD_STORAGE",
        description=(
            "Key-value backend that mirrors the session user, posts, bookmarks and"
            " draft buffer. ``memory`` keeps everything in-process."
        ),
    )
    storage_path: Path = Field(
        default=Path(DEFAULT_STORAGE_PATH),
        alias="PULSEBOARD_STORAGE_PATH",
        description="JSON file used by the ``file`` storage backend.",
    )
    redis_url: str | None = Field(
        default=None,
        alias="REDIS_URL",
        description="Redis connection string used by the ``redis`` storage backend.",
    )
    news_api_key: str | None = Field(
        default=None,
        alias="NEWS_API_KEY",
        description="API key sent to the news provider in the ``X-Api-Key`` header.",
    )
    news_api_base_url: str = Field(
        default=DEFAULT_NEWS_API_BASE_URL,
        alias="NEWS_API_BASE_URL",
        description="Base URL of a NewsAPI-compatible endpoint.",
    )
    news_page_size: int = Field(
        default=DEFAULT_NEWS_PAGE_SIZE,
        ge=1,
        le=100,
        alias="NEWS_PAGE_SIZE",
        description="Number of articles requested per page.",
    )
    news_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        alias="NEWS_TIMEOUT_SECONDS",
        description="HTTP timeout applied to news requests.",
    )
    autosave_delay_seconds: float = Field(
        default=DEFAULT_AUTOSAVE_DELAY_SECONDS,
        gt=0,
        alias="AUTOSAVE_DELAY_SECONDS",
        description="Debounce delay before an edited draft is written to storage.",
    )
    analytics_window_days: int = Field(
        default=DEFAULT_ANALYTICS_WINDOW_DAYS,
        ge=1,
        alias="ANALYTICS_WINDOW_DAYS",
        description="Length of the trailing day window used by the dashboard series.",
    )
    top_posts_limit: int = Field(
        default=DEFAULT_TOP_POSTS_LIMIT,
        ge=1,
        alias="TOP_POSTS_LIMIT",
        description="Number of posts listed in the top posts ranking.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    @property
    def resolved_storage_backend(self) -> StorageBackend:
        """Return the backend actually used once fallbacks are applied."""

        if self.storage_backend == "redis" and not self.redis_url:
            return "file"
        return self.storage_backend

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self._explicit_news_api_key:
            warnings.append(
                "NEWS_API_KEY is not set - news fetching is disabled "
                "(bookmarks and blog features still work)"
            )

        if self.storage_backend == "redis" and not self.redis_url:
            warnings.append(
                "PULSEBOARD_STORAGE=redis but REDIS_URL is not set - "
                f"falling back to the JSON file at {self.storage_path}"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


# Module-level singleton; the getter remains available for tests that prefer
# dependency injection.
settings = get_settings()

__all__ = [
    "AppSettings",
    "DEFAULT_ANALYTICS_WINDOW_DAYS",
    "DEFAULT_AUTOSAVE_DELAY_SECONDS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_NEWS_API_BASE_URL",
    "DEFAULT_NEWS_PAGE_SIZE",
    "DEFAULT_STORAGE_PATH",
    "DEFAULT_TOP_POSTS_LIMIT",
    "StorageBackend",
    "get_settings",
    "settings",
]

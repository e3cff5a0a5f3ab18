"""Bookmark schema."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from pulseboard.schemas.base import PulseboardModel
from pulseboard.utils.time import ensure_utc


class Bookmark(PulseboardModel):
    """A saved news article.

    Bookmarks are unique per ``article_id``. ``user_id`` records who saved the
    article but is not used for uniqueness or filtering.
    """

    id: str = Field(..., min_length=1)
    article_id: str = Field(..., min_length=1)
    user_id: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: datetime) -> datetime:
        return ensure_utc(value)


__all__ = ["Bookmark"]

"""Blog post, comment and draft schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, computed_field, field_validator

from pulseboard.schemas.base import PulseboardModel
from pulseboard.utils.time import ensure_utc


class Comment(PulseboardModel):
    """A single reader comment; immutable once created."""

    id: str = Field(..., min_length=1)
    post_id: str | None = None
    author: str
    content: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class BlogPost(PulseboardModel):
    """A post authored in the personal blog.

    ``likes`` is not stored independently: it is always the size of
    ``user_likes``, which holds each liking user id at most once.
    """

    id: str = Field(..., min_length=1)
    title: str
    content: str
    excerpt: str = ""
    author: str
    created_at: datetime
    updated_at: datetime
    views: int = Field(0, ge=0)
    comments: list[Comment] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    user_likes: list[str] = Field(default_factory=list)
    user_bookmarks: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def likes(self) -> int:
        return len(self.user_likes)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _normalize_timestamps(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("user_likes", "user_bookmarks")
    @classmethod
    def _dedupe_user_ids(cls, value: list[str]) -> list[str]:
        """Collapse repeated user ids while keeping first-seen order."""

        return list(dict.fromkeys(value))

    @field_validator("tags")
    @classmethod
    def _trim_tags(cls, value: list[str]) -> list[str]:
        return [tag.strip() for tag in value if tag.strip()]

    @property
    def engagement_score(self) -> int:
        """Ranking key used by the top posts list."""

        return self.views + self.likes


class Draft(PulseboardModel):
    """In-progress editor contents; ``tags`` is the raw comma-separated input."""

    title: str = ""
    content: str = ""
    excerpt: str = ""
    tags: str = ""

    @property
    def is_blank(self) -> bool:
        """A draft is worth saving once either title or content has text."""

        return not (self.title.strip() or self.content.strip())


__all__ = ["BlogPost", "Comment", "Draft"]

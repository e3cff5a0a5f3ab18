"""Schemas describing news articles and the queries used to fetch them."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from pulseboard.schemas.base import PulseboardModel
from pulseboard.utils.time import ensure_utc

NEWS_CATEGORIES: tuple[str, ...] = (
    "all",
    "technology",
    "business",
    "health",
    "sports",
    "entertainment",
    "science",
)


class NewsArticle(PulseboardModel):
    """Normalized article record returned by the news client."""

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    url: str
    image_url: str | None = None
    published_at: datetime | None = None
    source_name: str = ""
    category: str = "all"

    @field_validator("published_at")
    @classmethod
    def _normalize_published_at(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None


class NewsQuery(PulseboardModel):
    """Parameters for one page of news results."""

    category: str = Field("all", description="One of NEWS_CATEGORIES; ``all`` disables filtering.")
    search_term: str = ""
    page: int = Field(1, ge=1)

    @field_validator("category")
    @classmethod
    def _validate_category(cls, value: str) -> str:
        normalized = value.strip().lower() or "all"
        if normalized not in NEWS_CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(NEWS_CATEGORIES)}")
        return normalized

    @field_validator("search_term")
    @classmethod
    def _strip_search_term(cls, value: str) -> str:
        return value.strip()


class NewsPage(PulseboardModel):
    """One page of articles plus the provider's total result count."""

    articles: list[NewsArticle] = Field(default_factory=list)
    total_results: int = Field(0, ge=0)


__all__ = ["NEWS_CATEGORIES", "NewsArticle", "NewsPage", "NewsQuery"]

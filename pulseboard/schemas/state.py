"""The application state snapshot owned by the reducer."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pulseboard.schemas.analytics import AnalyticsData
from pulseboard.schemas.blog import BlogPost
from pulseboard.schemas.bookmark import Bookmark
from pulseboard.schemas.news import NewsArticle
from pulseboard.schemas.base import PulseboardModel
from pulseboard.schemas.user import User, ViewerContext

Theme = Literal["light", "dark"]


class AppState(PulseboardModel):
    """Immutable snapshot; every change produces a new instance."""

    theme: Theme = "light"
    user: User | None = None
    blog_posts: list[BlogPost] = Field(default_factory=list)
    bookmarks: list[Bookmark] = Field(default_factory=list)
    analytics: AnalyticsData = Field(default_factory=AnalyticsData)
    news_articles: list[NewsArticle] = Field(default_factory=list)
    news_analytics: AnalyticsData = Field(default_factory=AnalyticsData)

    @property
    def viewer(self) -> ViewerContext:
        """Explicit viewer context derived from the session user."""

        return ViewerContext(user=self.user)

    def find_post(self, post_id: str) -> BlogPost | None:
        return next((post for post in self.blog_posts if post.id == post_id), None)

    def find_bookmark_for_article(self, article_id: str) -> Bookmark | None:
        return next(
            (bookmark for bookmark in self.bookmarks if bookmark.article_id == article_id),
            None,
        )


__all__ = ["AppState", "Theme"]

"""Schemas for the engagement dashboard."""

from __future__ import annotations

import math

from pydantic import Field, computed_field

from pulseboard.schemas.base import PulseboardModel


class DailyViews(PulseboardModel):
    date: str = Field(..., description="ISO calendar date (YYYY-MM-DD)")
    views: int = 0


class DailyLikes(PulseboardModel):
    date: str
    likes: int = 0


class DailyComments(PulseboardModel):
    date: str
    comments: int = 0


class TopPost(PulseboardModel):
    """Entry of the top posts ranking; ``title`` may be truncated."""

    title: str
    views: int
    likes: int


class AnalyticsData(PulseboardModel):
    """Time series over the trailing day window plus the top posts ranking.

    Always derived from the post collection; never persisted.
    """

    post_views: list[DailyViews] = Field(default_factory=list)
    post_likes: list[DailyLikes] = Field(default_factory=list)
    comments: list[DailyComments] = Field(default_factory=list)
    top_posts: list[TopPost] = Field(default_factory=list)


class DashboardTotals(PulseboardModel):
    """Summary tiles shown above the charts.

    The per-post averages round half up and are 0 when there are no posts.
    """

    total_views: int = 0
    total_likes: int = 0
    total_comments: int = 0
    total_posts: int = 0

    def _per_post(self, total: int) -> int:
        if self.total_posts <= 0:
            return 0
        return math.floor(total / self.total_posts + 0.5)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def average_views(self) -> int:
        return self._per_post(self.total_views)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def average_likes(self) -> int:
        return self._per_post(self.total_likes)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def average_comments(self) -> int:
        return self._per_post(self.total_comments)


__all__ = [
    "AnalyticsData",
    "DailyComments",
    "DailyLikes",
    "DailyViews",
    "DashboardTotals",
    "TopPost",
]

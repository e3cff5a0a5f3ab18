"""Deterministic engagement analytics for the blog dashboard.

Views and likes are only known as running totals per post, so the daily
series spreads each total evenly over the days the post has been live inside
the window. Comments carry their own timestamps and are bucketed exactly.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from typing import Literal

from pulseboard.schemas.analytics import (
    AnalyticsData,
    DailyComments,
    DailyLikes,
    DailyViews,
    DashboardTotals,
    TopPost,
)
from pulseboard.schemas.blog import BlogPost
from pulseboard.schemas.state import AppState
from pulseboard.settings import DEFAULT_ANALYTICS_WINDOW_DAYS, DEFAULT_TOP_POSTS_LIMIT
from pulseboard.utils.time import ensure_utc

AnalyticsSource = Literal["blog", "news"]

_SECONDS_PER_DAY = 86_400
_TITLE_LIMIT = 30


def truncate_title(title: str, limit: int = _TITLE_LIMIT) -> str:
    """Shorten long titles for chart labels."""

    return f"{title[:limit]}..." if len(title) > limit else title


class BlogAnalytics:
    """Pure analytics routines; no state, no I/O, no randomness."""

    def __init__(
        self,
        *,
        window_days: int = DEFAULT_ANALYTICS_WINDOW_DAYS,
        top_limit: int = DEFAULT_TOP_POSTS_LIMIT,
    ) -> None:
        self.window_days = max(1, window_days)
        self.top_limit = max(0, top_limit)

    def filter_posts(
        self, posts: Iterable[BlogPost], viewer_username: str | None = None
    ) -> list[BlogPost]:
        """Restrict ``posts`` to the viewer's own when a username is given."""

        if viewer_username:
            return [post for post in posts if post.author == viewer_username]
        return list(posts)

    def day_keys(self, now: datetime) -> list[str]:
        """Return the ISO dates of the window ending at ``now``, oldest first."""

        today = ensure_utc(now).date()
        return [
            (today - timedelta(days=offset)).isoformat()
            for offset in range(self.window_days - 1, -1, -1)
        ]

    def days_live(self, post: BlogPost, now: datetime) -> int:
        """Number of trailing buckets a post's totals are spread across."""

        current = ensure_utc(now)
        window_start = current - timedelta(days=self.window_days - 1)
        effective_start = max(post.created_at, window_start)
        elapsed_days = int((current - effective_start).total_seconds() // _SECONDS_PER_DAY)
        return max(1, elapsed_days + 1)

    def distribute(self, total: int, days: int) -> list[int]:
        """Split ``total`` over ``days`` buckets, most recent bucket first.

        The remainder goes one unit at a time to the most recent buckets so
        the parts always sum back to ``total``.
        """

        days = max(1, days)
        base, extra = divmod(max(0, total), days)
        return [base + 1 if offset < extra else base for offset in range(days)]

    def build(
        self,
        posts: Iterable[BlogPost],
        now: datetime,
        viewer_username: str | None = None,
    ) -> AnalyticsData:
        """Compute the daily series and the top posts ranking."""

        selected = self.filter_posts(posts, viewer_username)
        keys = self.day_keys(now)
        views = dict.fromkeys(keys, 0)
        likes = dict.fromkeys(keys, 0)
        comments = dict.fromkeys(keys, 0)

        for post in selected:
            span = min(self.days_live(post, now), len(keys))
            # keys[-1 - offset] walks backwards from today.
            for offset, amount in enumerate(self.distribute(post.views, span)):
                views[keys[-1 - offset]] += amount
            for offset, amount in enumerate(self.distribute(post.likes, span)):
                likes[keys[-1 - offset]] += amount
            for comment in post.comments:
                bucket = comment.created_at.date().isoformat()
                if bucket in comments:
                    comments[bucket] += 1

        return AnalyticsData(
            post_views=[DailyViews(date=key, views=views[key]) for key in keys],
            post_likes=[DailyLikes(date=key, likes=likes[key]) for key in keys],
            comments=[DailyComments(date=key, comments=comments[key]) for key in keys],
            top_posts=self.top_posts(selected),
        )

    def top_posts(self, posts: Sequence[BlogPost]) -> list[TopPost]:
        """Rank by views plus likes; ties keep their original order."""

        ranked = sorted(posts, key=lambda post: post.engagement_score, reverse=True)
        return [
            TopPost(title=truncate_title(post.title), views=post.views, likes=post.likes)
            for post in ranked[: self.top_limit]
        ]

    def totals(
        self, posts: Iterable[BlogPost], viewer_username: str | None = None
    ) -> DashboardTotals:
        """Exact sums over the selected posts, independent of the window."""

        selected = self.filter_posts(posts, viewer_username)
        return DashboardTotals(
            total_views=sum(post.views for post in selected),
            total_likes=sum(post.likes for post in selected),
            total_comments=sum(len(post.comments) for post in selected),
            total_posts=len(selected),
        )


_default_analytics = BlogAnalytics()


def aggregate(
    posts: Iterable[BlogPost],
    now: datetime,
    viewer_username: str | None = None,
) -> AnalyticsData:
    """Build the 30-day dashboard series for ``posts`` as seen at ``now``."""

    return _default_analytics.build(posts, now, viewer_username)


def compute_totals(
    posts: Iterable[BlogPost], viewer_username: str | None = None
) -> DashboardTotals:
    """Summary tile values for ``posts``."""

    return _default_analytics.totals(posts, viewer_username)


def slice_series(analytics: AnalyticsData, start_index: int, end_index: int) -> AnalyticsData:
    """Keep the inclusive ``[start_index, end_index]`` range of every series.

    ``top_posts`` is not time based and is carried over unchanged.
    """

    start = max(0, start_index)
    stop = max(start, end_index + 1)
    return analytics.model_copy(
        update={
            "post_views": analytics.post_views[start:stop],
            "post_likes": analytics.post_likes[start:stop],
            "comments": analytics.comments[start:stop],
        }
    )


def series_totals(analytics: AnalyticsData, total_posts: int = 0) -> DashboardTotals:
    """Sum a (possibly sliced) set of series into summary tile values."""

    return DashboardTotals(
        total_views=sum(point.views for point in analytics.post_views),
        total_likes=sum(point.likes for point in analytics.post_likes),
        total_comments=sum(point.comments for point in analytics.comments),
        total_posts=total_posts,
    )


def analytics_for_source(state: AppState, source: AnalyticsSource) -> AnalyticsData:
    """Pick the blog or news analytics slice for the dashboard toggle."""

    return state.news_analytics if source == "news" else state.analytics


def dashboard_view(
    state: AppState,
    source: AnalyticsSource = "blog",
    start_index: int = 0,
    end_index: int | None = None,
) -> tuple[AnalyticsData, DashboardTotals]:
    """Series and summary tiles for the dashboard, optionally limited to a day range.

    The blog tiles cover the signed-in viewer's posts; the news tiles sum the
    news series and count the loaded articles. A range always sums the shown
    series but keeps the post count of the unranged view.
    """

    data = analytics_for_source(state, source)
    if source == "news":
        total_posts = len(state.news_articles)
        full = series_totals(data, total_posts=total_posts)
    else:
        full = compute_totals(state.blog_posts, state.viewer.username)
        total_posts = full.total_posts

    if end_index is None and not start_index:
        return data, full
    last = end_index if end_index is not None else len(data.post_views) - 1
    data = slice_series(data, start_index, last)
    return data, series_totals(data, total_posts=total_posts)


__all__ = [
    "AnalyticsSource",
    "BlogAnalytics",
    "aggregate",
    "analytics_for_source",
    "compute_totals",
    "dashboard_view",
    "series_totals",
    "slice_series",
    "truncate_title",
]

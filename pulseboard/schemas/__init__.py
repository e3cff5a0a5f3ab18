"""Pydantic schemas for Pulseboard state and payloads."""

from pulseboard.schemas.analytics import (  # noqa: F401
    AnalyticsData,
    DailyComments,
    DailyLikes,
    DailyViews,
    DashboardTotals,
    TopPost,
)
from pulseboard.schemas.blog import BlogPost, Comment, Draft  # noqa: F401
from pulseboard.schemas.bookmark import Bookmark  # noqa: F401
from pulseboard.schemas.news import (  # noqa: F401
    NEWS_CATEGORIES,
    NewsArticle,
    NewsPage,
    NewsQuery,
)
from pulseboard.schemas.state import AppState, Theme  # noqa: F401
from pulseboard.schemas.user import User, ViewerContext  # noqa: F401

"""The closed set of actions accepted by the reducer.

Each action is a frozen pydantic model tagged by a ``type`` literal, so a raw
payload such as ``{"type": "TOGGLE_LIKE", "postId": "1", "userId": "u1"}`` can
be validated into the matching class with :func:`parse_action`.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter

from pulseboard.schemas.analytics import AnalyticsData
from pulseboard.schemas.base import PulseboardModel
from pulseboard.schemas.blog import BlogPost, Comment
from pulseboard.schemas.bookmark import Bookmark
from pulseboard.schemas.news import NewsArticle
from pulseboard.schemas.state import Theme
from pulseboard.schemas.user import User


class SetUser(PulseboardModel):
    type: Literal["SET_USER"] = "SET_USER"
    user: User | None = None


class Logout(PulseboardModel):
    type: Literal["LOGOUT"] = "LOGOUT"


class SetTheme(PulseboardModel):
    type: Literal["SET_THEME"] = "SET_THEME"
    theme: Theme


class AddBlogPost(PulseboardModel):
    type: Literal["ADD_BLOG_POST"] = "ADD_BLOG_POST"
    post: BlogPost


class UpdateBlogPost(PulseboardModel):
    """Replace the editable fields of the post sharing ``post.id``."""

    type: Literal["UPDATE_BLOG_POST"] = "UPDATE_BLOG_POST"
    post: BlogPost


class DeleteBlogPost(PulseboardModel):
    type: Literal["DELETE_BLOG_POST"] = "DELETE_BLOG_POST"
    post_id: str


class AddBookmark(PulseboardModel):
    """Append a bookmark; callers check for an existing one to emulate a toggle."""

    type: Literal["ADD_BOOKMARK"] = "ADD_BOOKMARK"
    bookmark: Bookmark


class RemoveBookmark(PulseboardModel):
    type: Literal["REMOVE_BOOKMARK"] = "REMOVE_BOOKMARK"
    bookmark_id: str


class IncrementViews(PulseboardModel):
    type: Literal["INCREMENT_VIEWS"] = "INCREMENT_VIEWS"
    post_id: str


class ToggleLike(PulseboardModel):
    type: Literal["TOGGLE_LIKE"] = "TOGGLE_LIKE"
    post_id: str
    user_id: str = Field(..., min_length=1)


class ToggleBlogBookmark(PulseboardModel):
    type: Literal["TOGGLE_BLOG_BOOKMARK"] = "TOGGLE_BLOG_BOOKMARK"
    post_id: str
    user_id: str = Field(..., min_length=1)


class AddComment(PulseboardModel):
    type: Literal["ADD_COMMENT"] = "ADD_COMMENT"
    post_id: str
    comment: Comment


class UpdateAnalytics(PulseboardModel):
    type: Literal["UPDATE_ANALYTICS"] = "UPDATE_ANALYTICS"
    analytics: AnalyticsData


class SetNewsArticles(PulseboardModel):
    type: Literal["SET_NEWS_ARTICLES"] = "SET_NEWS_ARTICLES"
    articles: list[NewsArticle] = Field(default_factory=list)


class UpdateNewsAnalytics(PulseboardModel):
    type: Literal["UPDATE_NEWS_ANALYTICS"] = "UPDATE_NEWS_ANALYTICS"
    analytics: AnalyticsData


AnyAction = Union[
    SetUser,
    Logout,
    SetTheme,
    AddBlogPost,
    UpdateBlogPost,
    DeleteBlogPost,
    AddBookmark,
    RemoveBookmark,
    IncrementViews,
    ToggleLike,
    ToggleBlogBookmark,
    AddComment,
    UpdateAnalytics,
    SetNewsArticles,
    UpdateNewsAnalytics,
]

Action = Annotated[AnyAction, Field(discriminator="type")]

_ACTION_ADAPTER: TypeAdapter[AnyAction] = TypeAdapter(Action)


def parse_action(payload: dict[str, Any]) -> AnyAction:
    """Validate a raw mapping into the matching action class.

    Raises :class:`pydantic.ValidationError` for unknown ``type`` tags or
    malformed payloads.
    """

    return _ACTION_ADAPTER.validate_python(payload)


__all__ = [
    "Action",
    "AddBlogPost",
    "AddBookmark",
    "AddComment",
    "AnyAction",
    "DeleteBlogPost",
    "IncrementViews",
    "Logout",
    "RemoveBookmark",
    "SetNewsArticles",
    "SetTheme",
    "SetUser",
    "ToggleBlogBookmark",
    "ToggleLike",
    "UpdateAnalytics",
    "UpdateBlogPost",
    "UpdateNewsAnalytics",
    "parse_action",
]

"""Action-driven application store.

* ``actions`` - the closed union of actions and :func:`parse_action`.
* ``reducer`` - the pure ``reduce(state, action)`` transition function.
* ``store`` - :class:`Store`, the single writer that persists and notifies.
"""

from .actions import (
    Action,
    AddBlogPost,
    AddBookmark,
    AddComment,
    AnyAction,
    DeleteBlogPost,
    IncrementViews,
    Logout,
    RemoveBookmark,
    SetNewsArticles,
    SetTheme,
    SetUser,
    ToggleBlogBookmark,
    ToggleLike,
    UpdateAnalytics,
    UpdateBlogPost,
    UpdateNewsAnalytics,
    parse_action,
)
from .reducer import reduce
from .store import Listener, Store

__all__ = [
    "Action",
    "AddBlogPost",
    "AddBookmark",
    "AddComment",
    "AnyAction",
    "DeleteBlogPost",
    "IncrementViews",
    "Listener",
    "Logout",
    "RemoveBookmark",
    "SetNewsArticles",
    "SetTheme",
    "SetUser",
    "Store",
    "ToggleBlogBookmark",
    "ToggleLike",
    "UpdateAnalytics",
    "UpdateBlogPost",
    "UpdateNewsAnalytics",
    "parse_action",
    "reduce",
]

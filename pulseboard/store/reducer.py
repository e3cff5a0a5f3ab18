"""Pure state transitions for the application store.

``reduce`` never raises and never mutates its input: references to unknown
post or bookmark ids fall through as no-ops and the original snapshot object
is returned, which lets the store detect "nothing changed" by identity.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, get_args

from pulseboard.schemas.blog import BlogPost
from pulseboard.schemas.state import AppState
from pulseboard.store.actions import (
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
)

A = TypeVar("A")
Handler = Callable[[AppState, Any], AppState]

_HANDLERS: dict[type, Handler] = {}

# Fields an UpdateBlogPost may change; everything else comes from the stored post.
_EDITABLE_POST_FIELDS: tuple[str, ...] = ("title", "content", "excerpt", "tags", "updated_at")


def _handles(action_type: type[A]) -> Callable[[Callable[[AppState, A], AppState]], Handler]:
    def register(func: Callable[[AppState, A], AppState]) -> Handler:
        _HANDLERS[action_type] = func
        return func

    return register


def _replace_post(
    state: AppState,
    post_id: str,
    transform: Callable[[BlogPost], BlogPost],
) -> AppState:
    """Apply ``transform`` to the post with ``post_id``; no-op when it is absent."""

    for index, post in enumerate(state.blog_posts):
        if post.id == post_id:
            updated = transform(post)
            if updated is post:
                return state
            posts = list(state.blog_posts)
            posts[index] = updated
            return state.model_copy(update={"blog_posts": posts})
    return state


def _toggle_member(members: list[str], member: str) -> list[str]:
    if member in members:
        return [existing for existing in members if existing != member]
    return [*members, member]


@_handles(SetUser)
def _set_user(state: AppState, action: SetUser) -> AppState:
    return state.model_copy(update={"user": action.user})


@_handles(Logout)
def _logout(state: AppState, action: Logout) -> AppState:
    return state.model_copy(update={"user": None})


@_handles(SetTheme)
def _set_theme(state: AppState, action: SetTheme) -> AppState:
    return state.model_copy(update={"theme": action.theme})


@_handles(AddBlogPost)
def _add_blog_post(state: AppState, action: AddBlogPost) -> AppState:
    return state.model_copy(update={"blog_posts": [*state.blog_posts, action.post]})


@_handles(UpdateBlogPost)
def _update_blog_post(state: AppState, action: UpdateBlogPost) -> AppState:
    changes = {field: getattr(action.post, field) for field in _EDITABLE_POST_FIELDS}
    return _replace_post(state, action.post.id, lambda post: post.model_copy(update=changes))


@_handles(DeleteBlogPost)
def _delete_blog_post(state: AppState, action: DeleteBlogPost) -> AppState:
    remaining = [post for post in state.blog_posts if post.id != action.post_id]
    if len(remaining) == len(state.blog_posts):
        return state
    return state.model_copy(update={"blog_posts": remaining})


@_handles(AddBookmark)
def _add_bookmark(state: AppState, action: AddBookmark) -> AppState:
    return state.model_copy(update={"bookmarks": [*state.bookmarks, action.bookmark]})


@_handles(RemoveBookmark)
def _remove_bookmark(state: AppState, action: RemoveBookmark) -> AppState:
    remaining = [bookmark for bookmark in state.bookmarks if bookmark.id != action.bookmark_id]
    if len(remaining) == len(state.bookmarks):
        return state
    return state.model_copy(update={"bookmarks": remaining})


@_handles(IncrementViews)
def _increment_views(state: AppState, action: IncrementViews) -> AppState:
    return _replace_post(
        state,
        action.post_id,
        lambda post: post.model_copy(update={"views": post.views + 1}),
    )


@_handles(ToggleLike)
def _toggle_like(state: AppState, action: ToggleLike) -> AppState:
    # ``likes`` is derived from ``user_likes`` so toggling membership keeps both in step.
    return _replace_post(
        state,
        action.post_id,
        lambda post: post.model_copy(
            update={"user_likes": _toggle_member(post.user_likes, action.user_id)}
        ),
    )


@_handles(ToggleBlogBookmark)
def _toggle_blog_bookmark(state: AppState, action: ToggleBlogBookmark) -> AppState:
    return _replace_post(
        state,
        action.post_id,
        lambda post: post.model_copy(
            update={"user_bookmarks": _toggle_member(post.user_bookmarks, action.user_id)}
        ),
    )


@_handles(AddComment)
def _add_comment(state: AppState, action: AddComment) -> AppState:
    def append(post: BlogPost) -> BlogPost:
        if any(comment.id == action.comment.id for comment in post.comments):
            return post
        return post.model_copy(update={"comments": [*post.comments, action.comment]})

    return _replace_post(state, action.post_id, append)


@_handles(UpdateAnalytics)
def _update_analytics(state: AppState, action: UpdateAnalytics) -> AppState:
    return state.model_copy(update={"analytics": action.analytics})


@_handles(SetNewsArticles)
def _set_news_articles(state: AppState, action: SetNewsArticles) -> AppState:
    return state.model_copy(update={"news_articles": list(action.articles)})


@_handles(UpdateNewsAnalytics)
def _update_news_analytics(state: AppState, action: UpdateNewsAnalytics) -> AppState:
    return state.model_copy(update={"news_analytics": action.analytics})


def reduce(state: AppState, action: AnyAction | object) -> AppState:
    """Return the snapshot that results from applying ``action`` to ``state``.

    Unknown action objects leave the state untouched.
    """

    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)


_UNHANDLED = set(get_args(AnyAction)) - set(_HANDLERS)
if _UNHANDLED:  # pragma: no cover - guards against forgetting a handler
    raise RuntimeError(
        "Reducer is missing handlers for: "
        + ", ".join(sorted(action.__name__ for action in _UNHANDLED))
    )

__all__ = ["reduce"]

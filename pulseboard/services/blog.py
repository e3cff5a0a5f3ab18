"""Blog workflows: validate input, build records, dispatch actions.

The reducer performs no validation, so everything that can be rejected is
rejected here before an action is created.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pulseboard.errors import AuthenticationRequiredError, ValidationFailedError
from pulseboard.schemas.blog import BlogPost, Comment, Draft
from pulseboard.schemas.user import ViewerContext
from pulseboard.store.actions import (
    AddBlogPost,
    AddComment,
    DeleteBlogPost,
    IncrementViews,
    ToggleBlogBookmark,
    ToggleLike,
    UpdateBlogPost,
)
from pulseboard.store.store import Store
from pulseboard.utils.ids import TimeBasedIdFactory
from pulseboard.utils.time import Clock, utcnow

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 150


def parse_tags(raw: str) -> list[str]:
    """Split comma-separated tag input, dropping blanks."""

    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def default_excerpt(content: str) -> str:
    return f"{content[:EXCERPT_LENGTH]}..."


def validate_draft(draft: Draft) -> None:
    """Reject drafts without a title or content."""

    errors: dict[str, str] = {}
    if not draft.title.strip():
        errors["title"] = "Title is required"
    if not draft.content.strip():
        errors["content"] = "Content is required"
    if errors:
        raise ValidationFailedError(errors)


class BlogService:
    """Coordinate post creation, editing, engagement and comments."""

    def __init__(
        self,
        store: Store,
        *,
        clock: Clock = utcnow,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._new_id = id_factory or TimeBasedIdFactory(clock)

    def list_posts(self, viewer: ViewerContext | None = None, *, mine: bool = False) -> list[BlogPost]:
        posts = self._store.state.blog_posts
        if mine and viewer is not None and viewer.username:
            return [post for post in posts if post.author == viewer.username]
        return list(posts)

    def get_post(self, post_id: str) -> BlogPost | None:
        return self._store.state.find_post(post_id)

    def create_post(self, viewer: ViewerContext, draft: Draft) -> BlogPost:
        validate_draft(draft)
        now = self._clock()
        post = BlogPost(
            id=self._new_id(),
            title=draft.title,
            content=draft.content,
            excerpt=draft.excerpt or default_excerpt(draft.content),
            author=viewer.display_name,
            created_at=now,
            updated_at=now,
            tags=parse_tags(draft.tags),
        )
        self._store.dispatch(AddBlogPost(post=post))
        logger.info("Created post %s (%r)", post.id, post.title)
        return post

    def update_post(self, post_id: str, draft: Draft) -> BlogPost | None:
        """Apply an edited draft; returns ``None`` when the post no longer exists."""

        validate_draft(draft)
        existing = self.get_post(post_id)
        if existing is None:
            return None
        edited = existing.model_copy(
            update={
                "title": draft.title,
                "content": draft.content,
                "excerpt": draft.excerpt or default_excerpt(draft.content),
                "tags": parse_tags(draft.tags),
                "updated_at": self._clock(),
            }
        )
        self._store.dispatch(UpdateBlogPost(post=edited))
        return self.get_post(post_id)

    def delete_post(self, post_id: str) -> bool:
        """Remove a post; returns whether anything was deleted."""

        before = len(self._store.state.blog_posts)
        self._store.dispatch(DeleteBlogPost(post_id=post_id))
        return len(self._store.state.blog_posts) < before

    def view_post(self, post_id: str) -> BlogPost | None:
        """Record a view and return the refreshed post."""

        self._store.dispatch(IncrementViews(post_id=post_id))
        return self.get_post(post_id)

    def toggle_like(self, viewer: ViewerContext, post_id: str) -> bool:
        """Like or unlike a post; returns ``True`` when the post is now liked."""

        if viewer.user_id is None:
            raise AuthenticationRequiredError("Please sign in to like a post.")
        self._store.dispatch(ToggleLike(post_id=post_id, user_id=viewer.user_id))
        post = self.get_post(post_id)
        return post is not None and viewer.user_id in post.user_likes

    def toggle_post_bookmark(self, viewer: ViewerContext, post_id: str) -> bool:
        """Save or unsave a post for the viewer; returns the new saved flag."""

        if viewer.user_id is None:
            raise AuthenticationRequiredError("Please sign in to bookmark a post.")
        self._store.dispatch(ToggleBlogBookmark(post_id=post_id, user_id=viewer.user_id))
        post = self.get_post(post_id)
        return post is not None and viewer.user_id in post.user_bookmarks

    def add_comment(self, viewer: ViewerContext, post_id: str, text: str) -> Comment | None:
        """Append a comment; returns ``None`` when the post does not exist."""

        if not text.strip():
            raise ValidationFailedError({"content": "Comment cannot be empty"})
        if self.get_post(post_id) is None:
            return None
        comment = Comment(
            id=self._new_id(),
            post_id=post_id,
            author=viewer.display_name,
            content=text,
            created_at=self._clock(),
        )
        self._store.dispatch(AddComment(post_id=post_id, comment=comment))
        return comment


__all__ = [
    "BlogService",
    "EXCERPT_LENGTH",
    "default_excerpt",
    "parse_tags",
    "validate_draft",
]

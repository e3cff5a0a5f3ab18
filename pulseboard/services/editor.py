"""Post editor session tying the blog service to draft autosave."""

from __future__ import annotations

import logging
from typing import Literal

from pulseboard.schemas.blog import BlogPost, Draft
from pulseboard.schemas.user import ViewerContext
from pulseboard.services.autosave import DraftAutosaver
from pulseboard.services.blog import BlogService

logger = logging.getLogger(__name__)

EditorMode = Literal["create", "edit"]


def draft_from_post(post: BlogPost) -> Draft:
    return Draft(
        title=post.title,
        content=post.content,
        excerpt=post.excerpt,
        tags=", ".join(post.tags),
    )


class EditorSession:
    """One open editor: either composing a new post or editing an existing one.

    Opening in create mode restores the autosaved draft. Submitting clears the
    saved draft; cancelling only stops the pending timer so the last saved
    draft survives for the next session.
    """

    def __init__(self, blog: BlogService, autosaver: DraftAutosaver) -> None:
        self._blog = blog
        self._autosaver = autosaver
        self.mode: EditorMode = "create"
        self.post_id: str | None = None
        self.draft = Draft()

    def open_create(self) -> Draft:
        self.mode = "create"
        self.post_id = None
        self.draft = self._autosaver.restore() or Draft()
        return self.draft

    def open_edit(self, post: BlogPost) -> Draft:
        self.mode = "edit"
        self.post_id = post.id
        self.draft = draft_from_post(post)
        return self.draft

    def change(self, **fields: str) -> Draft:
        """Apply field edits (title, content, excerpt, tags) and reschedule autosave."""

        unknown = set(fields) - set(Draft.model_fields)
        if unknown:
            raise TypeError(f"Unknown draft fields: {', '.join(sorted(unknown))}")
        self.draft = self.draft.model_copy(update=fields)
        self._autosaver.edit(self.draft)
        return self.draft

    def submit(self, viewer: ViewerContext) -> BlogPost | None:
        """Create or update the post; validation errors leave the session open."""

        if self.mode == "edit" and self.post_id is not None:
            post = self._blog.update_post(self.post_id, self.draft)
        else:
            post = self._blog.create_post(viewer, self.draft)
        self._autosaver.submit()
        self.draft = Draft()
        return post

    def reset(self) -> None:
        self._autosaver.reset()
        self.draft = Draft()

    def cancel(self) -> None:
        self._autosaver.cancel()
        logger.debug("Editor closed without submitting")


__all__ = ["EditorMode", "EditorSession", "draft_from_post"]

"""Bookmark toggling for news articles.

The reducer appends bookmarks blindly; uniqueness per article is enforced
here by checking for an existing bookmark before dispatching.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from pulseboard.schemas.bookmark import Bookmark
from pulseboard.schemas.news import NewsArticle
from pulseboard.schemas.user import ANONYMOUS_USER_ID, ViewerContext
from pulseboard.store.actions import AddBookmark, RemoveBookmark
from pulseboard.store.store import Store
from pulseboard.utils.ids import TimeBasedIdFactory
from pulseboard.utils.time import Clock, utcnow


class BookmarkService:
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

    @property
    def bookmarks(self) -> list[Bookmark]:
        return list(self._store.state.bookmarks)

    def is_bookmarked(self, article_id: str) -> bool:
        return self._store.state.find_bookmark_for_article(article_id) is not None

    def toggle(self, viewer: ViewerContext, article_id: str) -> Bookmark | None:
        """Bookmark ``article_id`` or remove its bookmark.

        Returns the new bookmark, or ``None`` when an existing one was removed.
        """

        existing = self._store.state.find_bookmark_for_article(article_id)
        if existing is not None:
            self._store.dispatch(RemoveBookmark(bookmark_id=existing.id))
            return None

        bookmark = Bookmark(
            id=self._new_id(),
            article_id=article_id,
            user_id=viewer.user_id or ANONYMOUS_USER_ID,
            created_at=self._clock(),
        )
        self._store.dispatch(AddBookmark(bookmark=bookmark))
        return bookmark

    def remove_for_article(self, article_id: str) -> bool:
        existing = self._store.state.find_bookmark_for_article(article_id)
        if existing is None:
            return False
        self._store.dispatch(RemoveBookmark(bookmark_id=existing.id))
        return True

    def bookmarked_articles(self, articles: Iterable[NewsArticle]) -> list[NewsArticle]:
        """Return the subset of ``articles`` that are bookmarked, in input order."""

        saved = {bookmark.article_id for bookmark in self._store.state.bookmarks}
        return [article for article in articles if article.id in saved]


__all__ = ["BookmarkService"]

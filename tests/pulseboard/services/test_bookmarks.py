"""Tests for per-article bookmark toggling."""

from __future__ import annotations

import pytest

from pulseboard.schemas.news import NewsArticle
from pulseboard.schemas.user import ViewerContext
from pulseboard.services.bookmarks import BookmarkService
from pulseboard.store.store import Store
from tests.pulseboard.support.doubles import FIXED_NOW, Counter


@pytest.fixture
def bookmarks(store: Store, clock, ids: Counter) -> BookmarkService:
    return BookmarkService(store, clock=clock, id_factory=ids)


def test_toggle_adds_then_removes(bookmarks: BookmarkService, viewer: ViewerContext) -> None:
    created = bookmarks.toggle(viewer, "a1")

    assert created is not None
    assert created.article_id == "a1"
    assert created.user_id == "u1"
    assert created.created_at == FIXED_NOW
    assert bookmarks.is_bookmarked("a1")

    assert bookmarks.toggle(viewer, "a1") is None
    assert not bookmarks.is_bookmarked("a1")
    assert bookmarks.bookmarks == []


def test_bookmarks_are_unique_per_article(
    bookmarks: BookmarkService, viewer: ViewerContext, anonymous: ViewerContext
) -> None:
    bookmarks.toggle(viewer, "a1")
    bookmarks.toggle(viewer, "a2")
    # A second toggle from anyone removes the article's single bookmark.
    bookmarks.toggle(anonymous, "a1")

    assert [bookmark.article_id for bookmark in bookmarks.bookmarks] == ["a2"]


def test_anonymous_bookmarks_use_placeholder_user(
    bookmarks: BookmarkService, anonymous: ViewerContext
) -> None:
    created = bookmarks.toggle(anonymous, "a1")

    assert created is not None and created.user_id == "anonymous"


def test_remove_for_article(bookmarks: BookmarkService, viewer: ViewerContext) -> None:
    bookmarks.toggle(viewer, "a1")

    assert bookmarks.remove_for_article("a1") is True
    assert bookmarks.remove_for_article("a1") is False


def test_bookmarked_articles_keeps_input_order(
    bookmarks: BookmarkService, viewer: ViewerContext
) -> None:
    articles = [
        NewsArticle(id=f"a{index}", title=f"Story {index}", url=f"https://example.com/{index}")
        for index in range(1, 4)
    ]
    bookmarks.toggle(viewer, "a3")
    bookmarks.toggle(viewer, "a1")

    assert [article.id for article in bookmarks.bookmarked_articles(articles)] == ["a1", "a3"]

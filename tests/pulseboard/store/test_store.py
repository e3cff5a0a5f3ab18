"""Tests for the store: analytics refresh, slice mirroring and subscriptions."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime

from pulseboard.persistence.snapshot import (
    BOOKMARKS_KEY,
    POSTS_KEY,
    THEME_KEY,
    USER_KEY,
    StatePersistence,
)
from pulseboard.persistence.storage import MemoryStorage
from pulseboard.schemas.bookmark import Bookmark
from pulseboard.schemas.state import AppState
from pulseboard.schemas.user import User
from pulseboard.store.actions import (
    AddBlogPost,
    AddBookmark,
    DeleteBlogPost,
    IncrementViews,
    Logout,
    SetTheme,
    SetUser,
)
from pulseboard.store.store import Store
from tests.pulseboard.support.doubles import FIXED_NOW, make_post


class RecordingStorage(MemoryStorage):
    def __init__(self) -> None:
        super().__init__()
        self.writes: list[str] = []

    def save(self, key: str, value: str) -> None:
        self.writes.append(key)
        super().save(key, value)


def _recording_store(clock: Callable[[], datetime]) -> tuple[Store, RecordingStorage]:
    storage = RecordingStorage()
    return Store(persistence=StatePersistence(storage), clock=clock), storage


def test_initial_state_carries_a_full_empty_window(store: Store) -> None:
    analytics = store.state.analytics

    assert len(analytics.post_views) == 30
    assert analytics.post_views[-1].date == FIXED_NOW.date().isoformat()
    assert analytics.top_posts == []


def test_adding_a_post_recomputes_analytics(store: Store) -> None:
    store.dispatch(AddBlogPost(post=make_post("p1", views=10, user_likes=["a", "b", "c"])))

    analytics = store.state.analytics
    assert analytics.post_views[-1].views == 10
    assert analytics.post_likes[-1].likes == 3
    assert [entry.title for entry in analytics.top_posts] == ["Hello"]


def test_analytics_follow_the_signed_in_user(store: Store) -> None:
    store.dispatch(AddBlogPost(post=make_post("p1", author="alice", views=4)))
    store.dispatch(AddBlogPost(post=make_post("p2", author="bob", views=6)))
    assert sum(point.views for point in store.state.analytics.post_views) == 10

    store.dispatch(SetUser(user=User(id="u2", username="bob", email="bob@example.com")))
    assert sum(point.views for point in store.state.analytics.post_views) == 6

    store.dispatch(Logout())
    assert sum(point.views for point in store.state.analytics.post_views) == 10


def test_dispatch_mirrors_only_changed_slices(clock: Callable[[], datetime]) -> None:
    store, storage = _recording_store(clock)

    store.dispatch(AddBlogPost(post=make_post("p1")))
    assert storage.writes == [POSTS_KEY]

    store.dispatch(
        AddBookmark(
            bookmark=Bookmark(id="b1", article_id="a1", user_id="u1", created_at=FIXED_NOW)
        )
    )
    assert storage.writes == [POSTS_KEY, BOOKMARKS_KEY]

    store.dispatch(SetTheme(theme="dark"))
    assert storage.writes[-1] == THEME_KEY
    assert storage.values[THEME_KEY] == "dark"


def test_no_op_actions_do_not_write_or_notify(clock: Callable[[], datetime]) -> None:
    store, storage = _recording_store(clock)
    seen: list[AppState] = []
    store.subscribe(seen.append)
    before = store.state

    after = store.dispatch(DeleteBlogPost(post_id="missing"))
    store.dispatch(IncrementViews(post_id="missing"))

    assert after is before
    assert storage.writes == []
    assert seen == []


def test_logout_persists_an_empty_user(store: Store, storage: MemoryStorage, alice: User) -> None:
    store.dispatch(SetUser(user=alice))
    assert json.loads(storage.values[USER_KEY])["username"] == "alice"

    store.dispatch(Logout())
    assert json.loads(storage.values[USER_KEY]) is None


def test_posts_are_stored_with_camel_case_keys(store: Store, storage: MemoryStorage) -> None:
    store.dispatch(AddBlogPost(post=make_post("p1", user_likes=["u1"])))

    stored = json.loads(storage.values[POSTS_KEY])
    assert stored[0]["userLikes"] == ["u1"]
    assert stored[0]["likes"] == 1
    assert "createdAt" in stored[0]


def test_subscribers_receive_snapshots_until_unsubscribed(store: Store) -> None:
    seen: list[AppState] = []
    unsubscribe = store.subscribe(seen.append)

    store.dispatch(AddBlogPost(post=make_post("p1")))
    unsubscribe()
    store.dispatch(IncrementViews(post_id="p1"))

    assert len(seen) == 1
    assert seen[0].blog_posts[0].id == "p1"
    unsubscribe()


def test_from_persistence_restores_saved_slices(
    store: Store, persistence: StatePersistence, alice: User, clock: Callable[[], datetime]
) -> None:
    store.dispatch(SetUser(user=alice))
    store.dispatch(AddBlogPost(post=make_post("p1", views=3)))
    store.dispatch(SetTheme(theme="dark"))

    restored = Store.from_persistence(persistence, clock=clock)

    assert restored.state.user == alice
    assert restored.state.theme == "dark"
    assert [post.id for post in restored.state.blog_posts] == ["p1"]
    assert restored.state.analytics == store.state.analytics


def test_refresh_analytics_uses_the_current_clock(persistence: StatePersistence) -> None:
    moments = iter([FIXED_NOW, datetime(2024, 3, 16, 1, 0, tzinfo=FIXED_NOW.tzinfo)])
    store = Store(
        AppState(blog_posts=[make_post("p1", views=2)]),
        persistence=persistence,
        clock=lambda: next(moments),
    )
    assert store.state.analytics.post_views[-1].date == "2024-03-15"

    store.refresh_analytics()

    assert store.state.analytics.post_views[-1].date == "2024-03-16"

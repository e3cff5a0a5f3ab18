"""Tests for the editor session combining blog workflows and autosave."""

from __future__ import annotations

import pytest

from pulseboard.errors import ValidationFailedError
from pulseboard.persistence.snapshot import StatePersistence
from pulseboard.schemas.blog import Draft
from pulseboard.schemas.user import ViewerContext
from pulseboard.services.autosave import DraftAutosaver
from pulseboard.services.blog import BlogService
from pulseboard.services.editor import EditorSession, draft_from_post
from pulseboard.store.store import Store
from tests.pulseboard.support.doubles import Counter, FakeScheduler


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def blog(store: Store, clock, ids: Counter) -> BlogService:
    return BlogService(store, clock=clock, id_factory=ids)


@pytest.fixture
def session(
    blog: BlogService, persistence: StatePersistence, scheduler: FakeScheduler
) -> EditorSession:
    return EditorSession(blog, DraftAutosaver(persistence, delay=5, scheduler=scheduler))


def test_open_create_restores_saved_draft(
    session: EditorSession, persistence: StatePersistence
) -> None:
    persistence.save_draft(Draft(title="Left over"))

    assert session.open_create() == Draft(title="Left over")
    assert session.mode == "create"


def test_open_create_without_saved_draft_is_blank(session: EditorSession) -> None:
    assert session.open_create() == Draft()


def test_changes_are_autosaved(
    session: EditorSession, scheduler: FakeScheduler, persistence: StatePersistence
) -> None:
    session.open_create()
    session.change(title="Draft title")
    session.change(content="Some content")
    scheduler.advance(5)

    assert persistence.load_draft() == Draft(title="Draft title", content="Some content")


def test_change_rejects_unknown_fields(session: EditorSession) -> None:
    with pytest.raises(TypeError):
        session.change(subtitle="nope")


def test_submit_creates_post_and_clears_draft(
    session: EditorSession,
    scheduler: FakeScheduler,
    persistence: StatePersistence,
    store: Store,
    viewer: ViewerContext,
) -> None:
    session.open_create()
    session.change(title="Title", content="Body", tags="a,b")

    post = session.submit(viewer)
    scheduler.advance(10)

    assert post is not None and post.tags == ["a", "b"]
    assert store.state.blog_posts == [post]
    assert persistence.load_draft() is None
    assert session.draft == Draft()


def test_invalid_submit_keeps_the_draft(
    session: EditorSession, persistence: StatePersistence, viewer: ViewerContext
) -> None:
    session.open_create()
    session.change(title="Only a title")

    with pytest.raises(ValidationFailedError):
        session.submit(viewer)

    assert session.draft == Draft(title="Only a title")


def test_edit_mode_updates_existing_post(
    session: EditorSession, blog: BlogService, viewer: ViewerContext
) -> None:
    original = blog.create_post(viewer, Draft(title="Old", content="Body", tags="x, y"))

    draft = session.open_edit(original)
    assert draft == draft_from_post(original)
    assert draft.tags == "x, y"

    session.change(title="New")
    updated = session.submit(viewer)

    assert updated is not None and updated.id == original.id
    assert updated.title == "New"
    assert len(blog.list_posts()) == 1


def test_cancel_keeps_last_saved_draft_but_reset_clears_it(
    session: EditorSession, scheduler: FakeScheduler, persistence: StatePersistence
) -> None:
    session.open_create()
    session.change(title="Keep me")
    scheduler.advance(5)
    session.change(title="Pending")

    session.cancel()
    scheduler.advance(5)
    assert persistence.load_draft() == Draft(title="Keep me")

    session.reset()
    assert persistence.load_draft() is None

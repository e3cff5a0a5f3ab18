"""Tests for application bootstrap and logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

import pulseboard.main as pulseboard_main
from pulseboard.persistence.storage import JsonFileStorage, MemoryStorage
from pulseboard.settings import AppSettings
from pulseboard.store.actions import AddBlogPost
from tests.pulseboard.support.doubles import make_post


def test_bootstrap_restores_state_from_file(tmp_path: Path) -> None:
    configured = AppSettings(
        _env_file=None,
        PULSEBOARD_STORAGE="file",
        PULSEBOARD_STORAGE_PATH=str(tmp_path / "state.json"),
    )

    first = pulseboard_main.bootstrap(configured)
    assert isinstance(first.storage, JsonFileStorage)
    first.store.dispatch(AddBlogPost(post=make_post("p1", views=2)))

    second = pulseboard_main.bootstrap(configured)
    assert [post.id for post in second.store.state.blog_posts] == ["p1"]


def test_bootstrap_applies_analytics_settings() -> None:
    configured = AppSettings(_env_file=None, ANALYTICS_WINDOW_DAYS=7, TOP_POSTS_LIMIT=1)

    app = pulseboard_main.bootstrap(configured, storage=MemoryStorage())
    app.store.dispatch(AddBlogPost(post=make_post("p1", views=1)))
    app.store.dispatch(AddBlogPost(post=make_post("p2", views=5)))

    assert len(app.store.state.analytics.post_views) == 7
    assert [entry.views for entry in app.store.state.analytics.top_posts] == [5]


def test_configure_logging_uses_settings_level(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    pulseboard_main.configure_logging(AppSettings(_env_file=None, LOG_LEVEL="WARNING"))

    assert captured["level"] == logging.WARNING
    assert captured["format"] == pulseboard_main.LOG_FORMAT

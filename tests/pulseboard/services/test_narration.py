"""Tests for the single-utterance narration queue."""

from __future__ import annotations

import pytest

from pulseboard.schemas.news import NewsArticle
from pulseboard.services.narration import NarrationQueue, article_script
from tests.pulseboard.support.doubles import FakeSpeechBackend


@pytest.fixture
def backend() -> FakeSpeechBackend:
    return FakeSpeechBackend()


@pytest.fixture
def queue(backend: FakeSpeechBackend) -> NarrationQueue:
    return NarrationQueue(backend)


def test_play_speaks_text(queue: NarrationQueue, backend: FakeSpeechBackend) -> None:
    queue.play("a1", "Hello")

    assert backend.calls == [("speak", "Hello")]
    assert queue.current == "a1"
    assert queue.speaking


def test_starting_new_utterance_cancels_the_current_one(
    queue: NarrationQueue, backend: FakeSpeechBackend
) -> None:
    queue.play("a1", "First")
    queue.play("a2", "Second")

    assert backend.calls == [("speak", "First"), ("cancel", None), ("speak", "Second")]
    assert queue.current == "a2"


def test_stale_completion_does_not_clear_new_utterance(
    queue: NarrationQueue, backend: FakeSpeechBackend
) -> None:
    queue.play("a1", "First")
    queue.play("a2", "Second")

    backend.finish(0)
    assert queue.current == "a2"

    backend.finish(1)
    assert queue.current is None
    assert not queue.speaking


def test_toggle_pause_does_not_cancel(queue: NarrationQueue, backend: FakeSpeechBackend) -> None:
    queue.play("a1", "Text")

    assert queue.toggle_pause() is True
    assert queue.toggle_pause() is False

    assert backend.calls == [("speak", "Text"), ("pause", None), ("resume", None)]
    assert queue.current == "a1"


def test_toggle_pause_without_utterance_is_a_no_op(
    queue: NarrationQueue, backend: FakeSpeechBackend
) -> None:
    assert queue.toggle_pause() is False
    assert backend.calls == []


def test_stop_cancels_and_ignores_late_completion(
    queue: NarrationQueue, backend: FakeSpeechBackend
) -> None:
    queue.play("a1", "Text")
    queue.toggle_pause()

    queue.stop()
    queue.stop()
    backend.finish()

    assert queue.current is None
    assert queue.paused is False
    assert backend.calls.count(("cancel", None)) == 1


def test_play_article_reads_title_and_description(
    queue: NarrationQueue, backend: FakeSpeechBackend
) -> None:
    article = NewsArticle(
        id="a1", title="Headline", description="Details here", url="https://example.com/1"
    )

    queue.play_article(article)

    assert backend.calls == [("speak", "Headline. Details here")]
    assert article_script(article.model_copy(update={"description": ""})) == "Headline"

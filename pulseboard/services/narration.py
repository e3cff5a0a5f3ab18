"""Text-to-speech narration with a single active utterance."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from pulseboard.schemas.news import NewsArticle

logger = logging.getLogger(__name__)


class SpeechBackend(Protocol):
    """Platform speech engine.

    ``speak`` must call ``on_done`` once the utterance finishes on its own;
    ``cancel`` stops it without calling ``on_done``.
    """

    def speak(self, text: str, on_done: Callable[[], None]) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def cancel(self) -> None: ...


def article_script(article: NewsArticle) -> str:
    """Text read aloud for an article."""

    parts = [article.title.strip()]
    if article.description.strip():
        parts.append(article.description.strip())
    return ". ".join(parts)


class NarrationQueue:
    """Play one utterance at a time.

    Starting a new utterance cancels the current one. Each utterance gets a
    generation number, so a completion callback from a cancelled utterance
    cannot clear the state of its replacement.
    """

    def __init__(self, backend: SpeechBackend) -> None:
        self._backend = backend
        self._generation = 0
        self.current: str | None = None
        self.paused = False

    @property
    def speaking(self) -> bool:
        return self.current is not None

    def play(self, key: str, text: str) -> None:
        """Narrate ``text``, identified by ``key`` (usually an article id)."""

        if self.current is not None:
            self._backend.cancel()
        self._generation += 1
        generation = self._generation
        self.current = key
        self.paused = False
        logger.debug("Narrating %s", key)
        self._backend.speak(text, lambda: self._finished(generation))

    def play_article(self, article: NewsArticle) -> None:
        self.play(article.id, article_script(article))

    def toggle_pause(self) -> bool:
        """Pause or resume the current utterance; returns the new paused flag."""

        if self.current is None:
            return False
        if self.paused:
            self._backend.resume()
        else:
            self._backend.pause()
        self.paused = not self.paused
        return self.paused

    def stop(self) -> None:
        if self.current is None:
            return
        self._backend.cancel()
        self._generation += 1
        self.current = None
        self.paused = False

    def _finished(self, generation: int) -> None:
        if generation != self._generation:
            return
        self.current = None
        self.paused = False


__all__ = ["NarrationQueue", "SpeechBackend", "article_script"]

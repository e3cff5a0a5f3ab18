"""Time-based identifier generation for posts, comments, bookmarks and users."""

from __future__ import annotations

from pulseboard.utils.time import Clock, utcnow


class TimeBasedIdFactory:
    """Produce millisecond-timestamp identifiers that never repeat.

    Two calls inside the same millisecond would collide on a plain timestamp,
    so the factory bumps the value past the last one it handed out.
    """

    def __init__(self, clock: Clock = utcnow) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> str:
        candidate = int(self._clock().timestamp() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


__all__ = ["TimeBasedIdFactory"]

"""Clock helpers kept tiny so tests can monkeypatch or inject them."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return a timezone-aware timestamp in UTC."""

    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive timestamps as UTC and convert aware ones to UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


__all__ = ["Clock", "ensure_utc", "utcnow"]

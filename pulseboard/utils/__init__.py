"""Small shared helpers (clock, identifiers)."""

from pulseboard.utils.ids import TimeBasedIdFactory
from pulseboard.utils.time import Clock, ensure_utc, utcnow

__all__ = ["Clock", "TimeBasedIdFactory", "ensure_utc", "utcnow"]

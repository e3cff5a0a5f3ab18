"""Key-value storage backends behind the load/save persistence contract.

Every backend stores opaque strings (JSON snapshots) under short keys and
follows last-write-wins semantics. Three implementations are provided:

* :class:`MemoryStorage` - process-local dictionary, used by tests and the
  ``memory`` backend.
* :class:`JsonFileStorage` - a single JSON document on disk, the default.
* :class:`RedisStorage` - a Redis instance; connection failures degrade to
  "nothing stored" instead of crashing the caller.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from redis import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from pulseboard.errors import StorageError

if TYPE_CHECKING:
    from pulseboard.settings import AppSettings

logger = logging.getLogger(__name__)

_DEFAULT_REDIS_PREFIX = "pulseboard"


class KeyValueStorage(Protocol):
    """Minimal persistence contract consumed by :mod:`pulseboard.persistence.snapshot`."""

    def load(self, key: str) -> str | None: ...

    def save(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Dictionary-backed storage that lives for the duration of the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self.values.get(key)

    def save(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


class JsonFileStorage:
    """Persist every key inside one JSON object on disk.

    Writes go to a temporary file that replaces the target atomically so a
    crash mid-write leaves the previous document intact. An unreadable
    document is treated as empty and overwritten on the next save.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(f"Unable to read {self._path}: {exc}") from exc

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring corrupt storage file %s: %s", self._path, exc)
            return {}

        if not isinstance(document, dict):
            logger.warning("Ignoring storage file %s: expected a JSON object", self._path)
            return {}
        return {str(key): value for key, value in document.items() if isinstance(value, str)}

    def _write_all(self, document: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            raise StorageError(f"Unable to write {self._path}: {exc}") from exc

    def load(self, key: str) -> str | None:
        return self._read_all().get(key)

    def save(self, key: str, value: str) -> None:
        document = self._read_all()
        document[key] = value
        self._write_all(document)

    def remove(self, key: str) -> None:
        document = self._read_all()
        if document.pop(key, None) is not None:
            self._write_all(document)


def _is_redis_connection_error(exc: BaseException) -> bool:
    """Return ``True`` when ``exc`` represents a Redis connection failure."""

    return isinstance(exc, (RedisConnectionError, RedisTimeoutError))


class RedisStorage:
    """Store snapshot strings in Redis under a namespaced key."""

    def __init__(self, client: Any, *, prefix: str = _DEFAULT_REDIS_PREFIX) -> None:
        self._client = client
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str, *, prefix: str = _DEFAULT_REDIS_PREFIX) -> RedisStorage:
        client = Redis.from_url(url, decode_responses=True, encoding="utf-8")
        return cls(client, prefix=prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def load(self, key: str) -> str | None:
        try:
            value = self._client.get(self._key(key))
        except Exception as exc:  # type: ignore[broad-except]
            if _is_redis_connection_error(exc):
                logger.warning(f"Redis get failed for key {key}: {exc}")
                return None
            raise
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def save(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), value)
        except Exception as exc:  # type: ignore[broad-except]
            if _is_redis_connection_error(exc):
                logger.warning(f"Redis set failed for key {key}: {exc}")
                return
            raise

    def remove(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except Exception as exc:  # type: ignore[broad-except]
            if _is_redis_connection_error(exc):
                logger.warning(f"Redis delete failed for key {key}: {exc}")
                return
            raise


def build_storage(active_settings: AppSettings) -> KeyValueStorage:
    """Instantiate the backend selected by configuration."""

    backend = active_settings.resolved_storage_backend
    if backend == "memory":
        return MemoryStorage()
    if backend == "redis" and active_settings.redis_url:
        logger.info("Using Redis storage at %s", active_settings.redis_url)
        return RedisStorage.from_url(active_settings.redis_url)
    logger.info("Using JSON file storage at %s", active_settings.storage_path)
    return JsonFileStorage(active_settings.storage_path)


__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "RedisStorage",
    "build_storage",
]

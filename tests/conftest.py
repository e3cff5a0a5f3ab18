"""Pytest configuration and shared fixtures for the Pulseboard test suite.

The repository root is put on ``sys.path`` by pytest's ``pythonpath`` setting.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest

from pulseboard.persistence.snapshot import StatePersistence
from pulseboard.persistence.storage import MemoryStorage
from pulseboard.schemas.state import AppState
from pulseboard.schemas.user import User, ViewerContext
from pulseboard.store.actions import SetUser
from pulseboard.store.store import Store
from tests.pulseboard.support.doubles import FIXED_NOW, Counter


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def ids() -> Counter:
    return Counter()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def persistence(storage: MemoryStorage) -> StatePersistence:
    return StatePersistence(storage)


@pytest.fixture
def alice() -> User:
    return User(id="u1", username="alice", email="alice@example.com")


@pytest.fixture
def viewer(alice: User) -> ViewerContext:
    return ViewerContext(user=alice)


@pytest.fixture
def anonymous() -> ViewerContext:
    return ViewerContext()


@pytest.fixture
def store(persistence: StatePersistence, clock: Callable[[], datetime]) -> Store:
    """Empty store wired to memory storage and the frozen clock."""

    return Store(AppState(), persistence=persistence, clock=clock)


@pytest.fixture
def signed_in_store(store: Store, alice: User) -> Store:
    store.dispatch(SetUser(user=alice))
    return store

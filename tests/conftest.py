"""Shared pytest fixtures for Math Rush tests."""

from __future__ import annotations

import pytest

from mathrush.core.event_bus import EventBus
from mathrush.core.models.config import MathRushConfig
from mathrush.core.score_store import ScoreStore
from mathrush.storage.memory_storage import InMemoryStorage


@pytest.fixture
async def event_bus():
    """Provide a started EventBus that is stopped after the test."""
    bus = EventBus(queue_size=100)
    await bus.start()
    yield bus
    await bus.stop()


@pytest.fixture(scope="session")
def mathrush_config() -> MathRushConfig:
    """Session-scoped default config (no file I/O)."""
    return MathRushConfig()


@pytest.fixture
def storage() -> InMemoryStorage:
    """Fresh, empty in-memory key-value storage."""
    return InMemoryStorage()


@pytest.fixture
def score_store(storage: InMemoryStorage) -> ScoreStore:
    return ScoreStore(storage)

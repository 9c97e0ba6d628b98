"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fakes for the repository collaborators.
"""

from __future__ import annotations

import logging

import pytest

from repochain.core.models import Entity, Identity


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, ports, repositories, chain")
    config.addinivalue_line("markers", "store: Store adapters (s3, filesystem)")
    config.addinivalue_line("markers", "cache: Cache adapters")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


class SpyCache:
    """Dict-backed CachePort that records every call."""

    def __init__(self) -> None:
        self.entries: dict[str, Entity] = {}
        self.lookups: list[str] = []
        self.stores: list[tuple[str, Entity]] = []

    def lookup(self, key: str) -> Entity | None:
        self.lookups.append(key)
        return self.entries.get(key)

    def store(self, key: str, entity: Entity) -> None:
        self.stores.append((key, entity))
        self.entries[key] = entity

    def clear(self) -> int:
        count = len(self.entries)
        self.entries.clear()
        return count


class CountingRepository:
    """RepositoryPort wrapper counting calls to the wrapped repository."""

    def __init__(self, inner) -> None:
        self._inner = inner
        self.get_calls: list[Identity] = []
        self.add_calls: list[Entity] = []

    def get(self, identity: Identity) -> Entity:
        self.get_calls.append(identity)
        return self._inner.get(identity)

    def add(self, entity: Entity) -> None:
        self.add_calls.append(entity)
        self._inner.add(entity)


class DictStore:
    """StorePort holding entities in a dict; persist overwrites."""

    def __init__(self) -> None:
        self.entities: dict[Identity, Entity] = {}

    def find_by_id(self, identity: Identity) -> Entity | None:
        return self.entities.get(identity)

    def persist(self, entity: Entity) -> None:
        self.entities[entity.id] = entity


class FailingRepository:
    """RepositoryPort whose calls always raise the given error."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    def get(self, identity: Identity) -> Entity:
        raise self.error

    def add(self, entity: Entity) -> None:
        raise self.error


@pytest.fixture(autouse=True)
def _restore_repochain_logger():
    """Undo handlers and levels set by configure_logging() during a test."""
    logger = logging.getLogger("repochain")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def widget() -> Entity:
    """The entity used throughout the repository scenarios."""
    return Entity(id=1, attributes={"name": "Widget"})


@pytest.fixture
def spy_cache() -> SpyCache:
    """Cache recording lookups and stores."""
    return SpyCache()


@pytest.fixture
def dict_store() -> DictStore:
    """In-memory durable store fake."""
    return DictStore()


@pytest.fixture
def counting() -> type[CountingRepository]:
    """Wrap a repository to count the calls that reach it."""
    return CountingRepository


@pytest.fixture
def failing() -> type[FailingRepository]:
    """Build a repository that raises the given error on every call."""
    return FailingRepository

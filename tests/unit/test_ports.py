"""Unit tests for port interfaces."""

import pytest

from repochain import (
    CacheMaintenancePort,
    CachePort,
    FileCache,
    FilesystemStore,
    InMemoryRepository,
    MemoryCache,
    RepositoryPort,
    StorePort,
    StoreRepository,
)
from repochain.core.decorators import CachingRepository, LoggingRepository


@pytest.mark.core
@pytest.mark.tra("Port.RepositoryPort")
@pytest.mark.tier(0)
class TestRepositoryPort:
    """Every implementation and decorator satisfies the same contract."""

    def test_port_has_get_and_add(self) -> None:
        assert hasattr(RepositoryPort, "get")
        assert hasattr(RepositoryPort, "add")

    def test_in_memory_repository_satisfies_port(self) -> None:
        assert isinstance(InMemoryRepository(), RepositoryPort)

    def test_store_repository_satisfies_port(self, dict_store) -> None:
        assert isinstance(StoreRepository(dict_store), RepositoryPort)

    def test_decorators_satisfy_port(self, spy_cache) -> None:
        inner = InMemoryRepository()

        assert isinstance(CachingRepository(inner, spy_cache), RepositoryPort)
        assert isinstance(LoggingRepository(inner), RepositoryPort)

    def test_object_without_add_does_not_satisfy_port(self) -> None:
        class ReadOnly:
            def get(self, identity):
                return None

        assert not isinstance(ReadOnly(), RepositoryPort)


@pytest.mark.core
@pytest.mark.tra("Port.StorePort")
@pytest.mark.tier(0)
def test_stores_satisfy_store_port(dict_store, tmp_path) -> None:
    """Store adapters and fakes satisfy StorePort via isinstance."""
    assert isinstance(dict_store, StorePort)
    assert isinstance(FilesystemStore(tmp_path), StorePort)


@pytest.mark.core
@pytest.mark.tra("Port.CachePort")
@pytest.mark.tier(0)
class TestCachePorts:
    """Cache adapters satisfy both cache ports."""

    def test_spy_cache_satisfies_cache_port(self, spy_cache) -> None:
        assert isinstance(spy_cache, CachePort)

    def test_spy_cache_is_not_maintainable(self, spy_cache) -> None:
        """The maintenance port is separate from the lookup/store contract."""
        assert not isinstance(spy_cache, CacheMaintenancePort)

    def test_memory_cache_satisfies_both_ports(self) -> None:
        cache = MemoryCache()
        assert isinstance(cache, CachePort)
        assert isinstance(cache, CacheMaintenancePort)

    def test_file_cache_satisfies_both_ports(self, tmp_path) -> None:
        cache = FileCache(tmp_path)
        assert isinstance(cache, CachePort)
        assert isinstance(cache, CacheMaintenancePort)

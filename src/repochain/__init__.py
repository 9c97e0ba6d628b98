"""repochain - Decorating repositories with transparent caching.

This library provides one repository contract (get/add) shared by a
store-backed repository, an in-memory test double, and decorators such as
a read-through cache, plus a composition root that wires them into a chain.

Example:
    >>> from pathlib import Path
    >>> from repochain import ChainSpec, DecoratorSpec, Entity, FilesystemStore
    >>> from repochain import MemoryCache, build_repository
    >>> products = build_repository(
    ...     ChainSpec(
    ...         base="store",
    ...         store=FilesystemStore(Path("./data/products")),
    ...         decorators=[DecoratorSpec("cache", {"cache": MemoryCache()})],
    ...     )
    ... )
    >>> products.add(Entity(id=1, attributes={"name": "Widget"}))
    >>> products.get(1)["name"]
    'Widget'
"""

from repochain.adapters.cache import FileCache, MemoryCache
from repochain.adapters.store import FilesystemStore, S3Store
from repochain.config import find_project_root
from repochain.core.chain import (
    ChainSpec,
    DecoratorSpec,
    RepositoryBuilder,
    build_repository,
    describe_chain,
)
from repochain.core.decorators import (
    CachingRepository,
    LoggingRepository,
    RepositoryDecorator,
)
from repochain.core.exceptions import (
    CacheCorruptError,
    CacheError,
    ChainCycleError,
    ChainLoadError,
    ConfigurationError,
    EntityNotFoundError,
    RepochainError,
    StoreAccessError,
    StoreCorruptError,
    StoreError,
)
from repochain.core.keys import cache_key
from repochain.core.models import Entity, Identity
from repochain.core.ports import (
    CacheMaintenancePort,
    CachePort,
    RepositoryPort,
    StorePort,
)
from repochain.core.repositories import InMemoryRepository, StoreRepository
from repochain.discovery import discover_chains, load_chain
from repochain.logging_config import configure_logging


__version__ = "0.1.0"

__all__ = [
    "CacheCorruptError",
    "CacheError",
    "CacheMaintenancePort",
    "CachePort",
    "CachingRepository",
    "ChainCycleError",
    "ChainLoadError",
    "ChainSpec",
    "ConfigurationError",
    "DecoratorSpec",
    "Entity",
    "EntityNotFoundError",
    "FileCache",
    "FilesystemStore",
    "Identity",
    "InMemoryRepository",
    "LoggingRepository",
    "MemoryCache",
    "RepochainError",
    "RepositoryBuilder",
    "RepositoryDecorator",
    "RepositoryPort",
    "S3Store",
    "StoreAccessError",
    "StoreCorruptError",
    "StoreError",
    "StorePort",
    "StoreRepository",
    "__version__",
    "build_repository",
    "cache_key",
    "configure_logging",
    "describe_chain",
    "discover_chains",
    "find_project_root",
    "load_chain",
]

"""Core domain module for repochain.

This module contains the entity model, port definitions, the terminal
repositories, decorators, and the composition root. It has no I/O
dependencies and can be tested in isolation.
"""

from repochain.core.chain import (
    ChainSpec,
    DecoratorSpec,
    RepositoryBuilder,
    build_repository,
)
from repochain.core.decorators import CachingRepository, LoggingRepository
from repochain.core.models import Entity, Identity
from repochain.core.ports import CachePort, RepositoryPort, StorePort
from repochain.core.repositories import InMemoryRepository, StoreRepository


__all__ = [
    "CachePort",
    "CachingRepository",
    "ChainSpec",
    "DecoratorSpec",
    "Entity",
    "Identity",
    "InMemoryRepository",
    "LoggingRepository",
    "RepositoryBuilder",
    "RepositoryPort",
    "StorePort",
    "StoreRepository",
    "build_repository",
]

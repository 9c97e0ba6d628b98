"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. Repositories and
decorators depend only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from repochain.core.models import Entity, Identity


@runtime_checkable
class RepositoryPort(Protocol):
    """The repository contract shared by implementations and decorators."""

    def get(self, identity: Identity) -> Entity:
        """Return the entity with this identity.

        Must not insert anything into stored state. Implementations may
        fill a cache as an optimization.

        Raises:
            EntityNotFoundError: If no entity with that identity exists in
                the effective (possibly cached) view.
        """
        ...

    def add(self, entity: Entity) -> None:
        """Store an entity unconditionally.

        Duplicate-identity handling is defined by each implementation.
        """
        ...


@runtime_checkable
class StorePort(Protocol):
    """Durable store backing a StoreRepository (filesystem, S3)."""

    def find_by_id(self, identity: Identity) -> Entity | None:
        """Return the stored entity, or None if absent."""
        ...

    def persist(self, entity: Entity) -> None:
        """Write an entity to the store."""
        ...


@runtime_checkable
class CachePort(Protocol):
    """Cache handle consulted by CachingRepository."""

    def lookup(self, key: str) -> Entity | None:
        """Return the cached entity, or None on a miss."""
        ...

    def store(self, key: str, entity: Entity) -> None:
        """Store an entity under key."""
        ...


@runtime_checkable
class CacheMaintenancePort(Protocol):
    """Maintenance operations offered by cache adapters.

    Not used by the caching decorator itself; the CLI uses it to inspect
    and clear caches named in a chain.
    """

    def invalidate(self, key: str) -> None:
        """Remove a single entry. Missing keys are ignored."""
        ...

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed.
        """
        ...

    def list_all_keys(self) -> list[str]:
        """List all cache keys."""
        ...

"""Terminal repository implementations.

StoreRepository translates the repository contract into a durable store's
find/persist calls. InMemoryRepository satisfies the same contract with no
external dependencies, for hermetic tests of code that consumes a repository.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from repochain.core.exceptions import EntityNotFoundError


if TYPE_CHECKING:
    from collections.abc import Iterable

    from repochain.core.models import Entity, Identity
    from repochain.core.ports import StorePort


class StoreRepository:
    """Repository backed by a durable store.

    Duplicate identities are not checked here: what add() does with an
    existing identity is up to the store. The bundled stores overwrite.
    """

    def __init__(self, store: StorePort) -> None:
        self._store = store

    def get(self, identity: Identity) -> Entity:
        """Fetch from the store.

        Raises:
            EntityNotFoundError: If the store has no entity with that identity.
        """
        entity = self._store.find_by_id(identity)
        if entity is None:
            raise EntityNotFoundError(identity)
        return entity

    def add(self, entity: Entity) -> None:
        """Persist to the store."""
        self._store.persist(entity)


class InMemoryRepository:
    """Repository holding entities in an ordered list.

    add() appends unconditionally, so the same identity may be stored more
    than once; get() returns the first match.

    Example:
        >>> repo = InMemoryRepository()
        >>> repo.add(Entity(id=1, attributes={"name": "Widget"}))
        >>> repo.get(1)["name"]
        'Widget'
    """

    def __init__(self, entities: Iterable[Entity] = ()) -> None:
        self._entities: list[Entity] = list(entities)

    def __len__(self) -> int:
        return len(self._entities)

    @property
    def entities(self) -> tuple[Entity, ...]:
        """Snapshot of stored entities in insertion order."""
        return tuple(self._entities)

    def get(self, identity: Identity) -> Entity:
        """Return the first entity with a matching identity.

        Raises:
            EntityNotFoundError: If no entity matches.
        """
        for entity in self._entities:
            if entity.id == identity:
                return entity
        raise EntityNotFoundError(identity)

    def add(self, entity: Entity) -> None:
        """Append the entity."""
        self._entities.append(entity)

    def discard(self, identity: Identity) -> int:
        """Remove every entity with this identity, bypassing the contract.

        Lets tests change backing state behind a decorator chain.

        Returns:
            Number of entities removed.
        """
        before = len(self._entities)
        self._entities = [e for e in self._entities if e.id != identity]
        return before - len(self._entities)

"""Repository decorators.

A decorator implements RepositoryPort and wraps exactly one inner
RepositoryPort, fixed at construction. Failures raised by the inner
repository or by a decorator's collaborators reach the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from repochain.core.exceptions import EntityNotFoundError
from repochain.core.keys import cache_key


if TYPE_CHECKING:
    from repochain.core.models import Entity, Identity
    from repochain.core.ports import CachePort, RepositoryPort


logger = logging.getLogger(__name__)


class RepositoryDecorator:
    """Base for decorators: owns the inner link and delegates to it."""

    def __init__(self, inner: RepositoryPort) -> None:
        self._inner = inner

    @property
    def inner(self) -> RepositoryPort:
        """The wrapped repository, one layer closer to the terminal one."""
        return self._inner

    def get(self, identity: Identity) -> Entity:
        return self._inner.get(identity)

    def add(self, entity: Entity) -> None:
        self._inner.add(entity)


class CachingRepository(RepositoryDecorator):
    """Read-through cache in front of another repository.

    get() consults the cache first and fills it after a successful inner
    lookup. A cached entity whose id differs from the requested identity
    (1 versus "1") counts as a miss. Not-found results are never cached.
    add() goes straight to the inner repository and leaves the cache
    untouched, so an entry cached before a later add() of the same
    identity stays stale until the cache drops it.

    Attributes:
        cache: The cache handle this decorator reads and fills.
    """

    def __init__(
        self,
        inner: RepositoryPort,
        cache: CachePort,
        key_prefix: str = "",
    ) -> None:
        super().__init__(inner)
        self.cache = cache
        self._key_prefix = key_prefix
        # Rejects a prefix containing KEY_SEP
        cache_key("", prefix=key_prefix)

    def get(self, identity: Identity) -> Entity:
        """Return the cached entity, or fetch from inner and cache it.

        Raises:
            EntityNotFoundError: If the inner repository has no such entity.
        """
        key = cache_key(identity, prefix=self._key_prefix)

        cached = self.cache.lookup(key)
        # 1 and "1" share a key; an entry for the other form is a miss
        if cached is not None and cached.id == identity:
            logger.debug("Cache HIT: %s", key)
            return cached
        logger.debug("Cache MISS: %s", key)

        entity = self._inner.get(identity)

        self.cache.store(key, entity)
        logger.debug("Cache SET: %s", key)
        return entity


class LoggingRepository(RepositoryDecorator):
    """Logs every call and its outcome, then returns or re-raises as-is."""

    def __init__(
        self,
        inner: RepositoryPort,
        log: logging.Logger | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        super().__init__(inner)
        self._log = log or logger
        self._level = level

    def get(self, identity: Identity) -> Entity:
        try:
            entity = self._inner.get(identity)
        except EntityNotFoundError:
            self._log.log(self._level, "get(%r): not found", identity)
            raise
        except Exception as e:
            self._log.log(self._level, "get(%r): failed with %s", identity, type(e).__name__)
            raise
        self._log.log(self._level, "get(%r): found", identity)
        return entity

    def add(self, entity: Entity) -> None:
        try:
            self._inner.add(entity)
        except Exception as e:
            self._log.log(self._level, "add(%r): failed with %s", entity.id, type(e).__name__)
            raise
        self._log.log(self._level, "add(%r): stored", entity.id)

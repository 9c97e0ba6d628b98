"""Swapping the terminal repository for tests.

Consumers depend on RepositoryPort only, so a test can build the same
decorator chain around an InMemoryRepository instead of a durable store.
"""

from repochain import (
    ChainSpec,
    DecoratorSpec,
    Entity,
    MemoryCache,
    RepositoryPort,
    build_repository,
)


def price_with_tax(repository: RepositoryPort, identity: int, rate: float) -> float:
    """Consumer code: knows nothing about caches or stores."""
    return repository.get(identity)["price"] * (1 + rate)


# Same decorators as production, different base
repository = build_repository(
    ChainSpec(
        base="memory",
        decorators=["logging", DecoratorSpec("cache", {"cache": MemoryCache(ttl_seconds=60)})],
    )
)

repository.add(Entity(id=7, attributes={"name": "Bolt", "price": 0.25}))
print(price_with_tax(repository, 7, rate=0.2))

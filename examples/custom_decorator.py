"""Adding your own decorator to a chain.

Any class that implements get and add can join a chain. Subclass
RepositoryDecorator so the chain can be walked through ``inner``, and
register the class or a factory under a name to use it from a ChainSpec.
"""

from repochain import (
    ChainSpec,
    Entity,
    RepositoryDecorator,
    build_repository,
    describe_chain,
)
from repochain.core.chain import DEFAULT_DECORATORS


class ReadOnlyRepository(RepositoryDecorator):
    """Rejects writes, delegates reads."""

    def add(self, entity: Entity) -> None:
        raise PermissionError(f"Repository is read-only, cannot add {entity.id!r}")


registry = {**DEFAULT_DECORATORS, "read_only": ReadOnlyRepository}

repository = build_repository(
    ChainSpec(base="memory", decorators=["cache", "read_only"]),
    registry=registry,
)

print(describe_chain(repository))
# ['ReadOnlyRepository', 'CachingRepository', 'InMemoryRepository']

"""Basic read-through caching example.

This example shows the simplest usage pattern: put a file cache in front
of a filesystem-backed repository. The first get reads the store and fills
the cache; later gets are served from the cache.
"""

from pathlib import Path

from repochain import (
    CachingRepository,
    Entity,
    FileCache,
    FilesystemStore,
    StoreRepository,
)


# Option 1: Manual wiring (full control over each layer)
repository = CachingRepository(
    StoreRepository(FilesystemStore(Path("./data/entities"))),
    cache=FileCache(Path("./data/cache")),
)

# Option 2: Declarative chain (the same layers, built by the composition root)
# from repochain import ChainSpec, DecoratorSpec, build_repository
# repository = build_repository(
#     ChainSpec(
#         base="store",
#         store=FilesystemStore(Path("./data/entities")),
#         decorators=[DecoratorSpec("cache", {"cache": FileCache(Path("./data/cache"))})],
#     )
# )

# Writes go straight to the store; the cache is not touched
repository.add(Entity(id=1, attributes={"name": "Widget"}))

# Cache miss: read from the store, then cached
widget = repository.get(1)
print(f"Fetched: {widget.to_dict()}")

# Cache hit: the store is not consulted
widget = repository.get(1)

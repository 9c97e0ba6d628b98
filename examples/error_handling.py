"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from pathlib import Path

from repochain import (
    CachingRepository,
    # Exceptions
    CacheCorruptError,
    Entity,
    EntityNotFoundError,
    FileCache,
    FilesystemStore,
    RepochainError,
    StoreAccessError,
    StoreRepository,
)


cache = FileCache(Path("./data/cache"))
repository = CachingRepository(
    StoreRepository(FilesystemStore(Path("./data/entities"))),
    cache=cache,
)


# Pattern 1: Absence is an answer, not a failure
def get_or_none(identity: int | str) -> Entity | None:
    """Fetch an entity, returning None if no layer has it."""
    try:
        return repository.get(identity)
    except EntityNotFoundError as e:
        # Nothing was cached, so a later add is visible immediately
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 2: Handle permission errors from the store
def get_with_access_check(identity: int | str) -> Entity | None:
    """Fetch an entity, handling permission errors gracefully."""
    try:
        return repository.get(identity)
    except StoreAccessError as e:
        print(f"Access denied to: {e.location}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 3: Recover from a damaged cache entry
def get_repairing_cache(identity: int | str) -> Entity:
    """Drop a corrupt cache entry and read through again."""
    try:
        return repository.get(identity)
    except CacheCorruptError as e:
        print(f"Corrupt cache entry: {e.path}")
        cache.invalidate(e.key)
        return repository.get(identity)


# Pattern 4: Catch-all for any library error
def get_safe(identity: int | str) -> Entity | None:
    """Fetch an entity with comprehensive error handling."""
    try:
        return repository.get(identity)
    except EntityNotFoundError:
        return None
    except RepochainError as e:
        print(f"Unexpected error: {e}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Example usage
if __name__ == "__main__":
    print(get_or_none("unknown"))

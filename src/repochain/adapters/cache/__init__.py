"""Cache adapters."""

from repochain.adapters.cache.file_cache import FileCache
from repochain.adapters.cache.memory_cache import MemoryCache


__all__ = ["FileCache", "MemoryCache"]

"""File-based cache adapter implementing CachePort."""

from __future__ import annotations

import contextlib
import json
import tempfile
from datetime import UTC, datetime
from pathlib import Path

from repochain.core.exceptions import CacheCorruptError
from repochain.core.models import Entity


_ENTRY_SUFFIX = ".json"
_META_SUFFIX = ".meta.json"


class FileCache:
    """Local entity cache with JSON metadata sidecars.

    Each entry is stored as <key>.json holding the entity, with a
    <key>.meta.json sidecar recording when it was cached. Entries survive
    process restarts, which lets CLI invocations share one cache.

    Attributes:
        cache_dir: Directory where cache entries are stored.
    """

    def __init__(self, cache_dir: Path) -> None:
        """Initialize the cache with a directory path.

        Args:
            cache_dir: Directory where entries will be stored. Created on
                first write.
        """
        self.cache_dir = cache_dir

    def _entry_path(self, key: str) -> Path:
        """Get the path for a cache entry."""
        if (
            not key
            or "/" in key
            or "\\" in key
            or key.startswith(".")
            or key.endswith(".meta")
        ):
            raise ValueError(f"Invalid cache key for a file cache: {key!r}")
        return self.cache_dir / f"{key}{_ENTRY_SUFFIX}"

    def _meta_path(self, key: str) -> Path:
        """Get the path for a metadata sidecar file."""
        return self.cache_dir / f"{key}{_META_SUFFIX}"

    def lookup(self, key: str) -> Entity | None:
        """Get the cached entity, or None if not cached.

        Raises:
            CacheCorruptError: If the entry exists but cannot be decoded.
        """
        entry_path = self._entry_path(key)
        meta_path = self._meta_path(key)

        if not entry_path.exists() or not meta_path.exists():
            return None

        try:
            with entry_path.open() as f:
                data = json.load(f)
            return Entity.from_dict(data)
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            raise CacheCorruptError(
                f"Cache entry corrupt for '{key}'",
                key=key,
                path=entry_path,
                cause=e,
            ) from e

    def cached_at(self, key: str) -> datetime | None:
        """Return when key was cached, or None if it is not cached."""
        meta_path = self._meta_path(key)
        if not meta_path.exists():
            return None
        try:
            with meta_path.open() as f:
                return datetime.fromisoformat(json.load(f)["cached_at"])
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            raise CacheCorruptError(
                f"Cache metadata corrupt for '{key}'",
                key=key,
                path=meta_path,
                cause=e,
            ) from e

    def store(self, key: str, entity: Entity) -> None:
        """Write an entity and its metadata sidecar.

        Both files are replaced atomically, so a failed write leaves any
        previous entry for key intact.

        Raises:
            TypeError: If the entity has attributes that are not JSON
                serializable. Nothing is written in that case.
        """
        entry_path = self._entry_path(key)
        meta_path = self._meta_path(key)

        entry = json.dumps(entity.to_dict())
        meta = json.dumps({"cached_at": datetime.now(UTC).isoformat()})

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._replace(entry_path, entry)
        # Sidecar last: lookup() treats an entry without one as a miss
        self._replace(meta_path, meta)

    def _replace(self, path: Path, text: str) -> None:
        """Write text to a temporary file in cache_dir, then move it onto path."""
        with tempfile.NamedTemporaryFile(
            delete=False, dir=self.cache_dir, suffix=".tmp"
        ) as tmp_file:
            tmp_path = Path(tmp_file.name)

        try:
            tmp_path.write_text(text)
            tmp_path.replace(path)
        finally:
            tmp_path.unlink(missing_ok=True)

    def invalidate(self, key: str) -> None:
        """Remove an entry. Missing keys are ignored."""
        self._entry_path(key).unlink(missing_ok=True)
        self._meta_path(key).unlink(missing_ok=True)

    def list_all_keys(self) -> list[str]:
        """List all cache keys."""
        if not self.cache_dir.exists():
            return []
        return sorted(
            p.name[: -len(_META_SUFFIX)] for p in self.cache_dir.glob(f"*{_META_SUFFIX}")
        )

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed.
        """
        keys = self.list_all_keys()
        for key in keys:
            self.invalidate(key)
        return len(keys)

    def statistics(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with 'total_size' (bytes, entries and sidecars) and
            'entry_count'.
        """
        if not self.cache_dir.exists():
            return {"total_size": 0, "entry_count": 0}

        total_size = 0
        for file_path in self.cache_dir.glob("*.json"):
            if file_path.is_file():
                with contextlib.suppress(OSError):
                    total_size += file_path.stat().st_size

        return {"total_size": total_size, "entry_count": len(self.list_all_keys())}

"""Filesystem store adapter: one JSON document per entity."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from repochain.core.exceptions import StoreAccessError, StoreCorruptError, StoreError
from repochain.core.models import Entity


if TYPE_CHECKING:
    from repochain.core.models import Identity


class FilesystemStore:
    """Store adapter for a local directory.

    Implements StorePort. Entities are written to <root>/<identity>.json;
    persisting an identity that already exists overwrites it. The int and
    str forms of an id (1 and "1") map to the same document, so persisting
    one replaces the other; find_by_id() only returns a document whose id
    matches the requested form exactly.
    Useful for local development and testing without S3.

    Attributes:
        root: Directory holding the entity documents.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _path(self, identity: Identity) -> Path:
        name = str(identity)
        if "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError(f"Identity {identity!r} cannot be used as a filename")
        return self.root / f"{name}.json"

    def find_by_id(self, identity: Identity) -> Entity | None:
        """Read the entity document, or None if there is none.

        Raises:
            StoreCorruptError: If the document is not a valid entity.
            StoreAccessError: If the document cannot be read.
        """
        path = self._path(identity)
        try:
            text = path.read_text()
        except FileNotFoundError:
            return None
        except PermissionError as e:
            raise StoreAccessError(
                f"Permission denied: {path}", location=str(path), cause=e
            ) from e
        except OSError as e:
            raise StoreError(
                f"Could not read {path}", location=str(path), cause=e
            ) from e

        try:
            entity = Entity.from_dict(json.loads(text))
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            raise StoreCorruptError(
                f"Stored entity is corrupt: {path}", location=str(path), cause=e
            ) from e
        # The document belongs to the other form of this id (1 versus "1")
        if entity.id != identity:
            return None
        return entity

    def persist(self, entity: Entity) -> None:
        """Write the entity document, replacing any existing one.

        Raises:
            StoreAccessError: If the directory is not writable.
        """
        path = self._path(entity.id)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(entity.to_dict()))
        except PermissionError as e:
            raise StoreAccessError(
                f"Permission denied: {path}", location=str(path), cause=e
            ) from e
        except OSError as e:
            raise StoreError(
                f"Could not write {path}", location=str(path), cause=e
            ) from e

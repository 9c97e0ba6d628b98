"""Domain exceptions for repochain.

All library errors inherit from RepochainError, allowing users to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.

EntityNotFoundError is the only domain failure a repository raises on its
own. Store and cache errors come from collaborators and pass through every
decorator unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pathlib import Path

    from repochain.core.models import Identity


class RepochainError(Exception):
    """Base class for all repochain exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class EntityNotFoundError(RepochainError):
    """Raised when get() cannot resolve an identity through the chain.

    Attributes:
        identity: The identity that was not found.
    """

    def __init__(self, identity: Identity) -> None:
        self.identity = identity
        super().__init__(f"Entity '{identity}' not found")

    @property
    def recovery_hint(self) -> str:
        """Suggest adding the entity first."""
        return f"Add an entity with id {self.identity!r} before fetching it"


class StoreError(RepochainError):
    """Base class for durable store errors.

    Attributes:
        location: The path or URI the store was working on.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        location: str,
        cause: Exception | None = None,
    ) -> None:
        self.location = location
        self.cause = cause
        super().__init__(message)


class StoreAccessError(StoreError):
    """Raised when access to the store is denied (permissions, credentials)."""

    @property
    def recovery_hint(self) -> str:
        """Suggest checking permissions."""
        return "Check credentials and bucket/path permissions"


class StoreCorruptError(StoreError):
    """Raised when a stored record cannot be decoded."""

    @property
    def recovery_hint(self) -> str:
        """Suggest inspecting the record."""
        return f"Inspect or re-add the record at {self.location}"


class CacheError(RepochainError):
    """Base class for cache-related errors."""

    pass


class CacheCorruptError(CacheError):
    """Raised when a cache entry is corrupt or unreadable.

    Attributes:
        key: The cache key for the corrupt entry.
        path: The path to the corrupt file.
    """

    def __init__(
        self,
        message: str,
        key: str,
        path: Path,
        cause: Exception | None = None,
    ) -> None:
        self.key = key
        self.path = path
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest deleting the corrupt cache entry."""
        return f"Run 'repochain invalidate {self.key}' or delete {self.path}"


class ConfigurationError(RepochainError):
    """Raised when a chain cannot be built from its description."""

    pass


class ChainCycleError(ConfigurationError):
    """Raised when a repository would appear twice in one decorator chain."""

    @property
    def recovery_hint(self) -> str:
        """Suggest creating a fresh decorator instance."""
        return "Decorator factories must return a new repository for each wrap"


class ChainLoadError(RepochainError):
    """Raised when a chain file cannot be loaded.

    Attributes:
        chain_path: Path to the chain file that failed to load.
        line: Line number where the error occurred (if available).
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        chain_path: Path,
        line: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.chain_path = chain_path
        self.line = line
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the chain file at the specific line."""
        if self.line:
            return f"Check {self.chain_path.name} at line {self.line}"
        return f"Check {self.chain_path.name} for syntax or import errors"

"""Cache key builders. Single place for key format.

Prefixes must not contain KEY_SEP to avoid ambiguous or colliding keys.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from repochain.core.models import Identity


KEY_SEP = ":"


def cache_key(identity: Identity, prefix: str = "") -> str:
    """Derive the cache key for an identity.

    Args:
        identity: Entity identity.
        prefix: Optional namespace, for several chains sharing one cache.

    Returns:
        str(identity) when prefix is empty, otherwise "prefix:identity".

    Raises:
        ValueError: If prefix contains KEY_SEP.

    Example:
        >>> cache_key(1)
        '1'
        >>> cache_key(1, prefix="products")
        'products:1'
    """
    if not prefix:
        return str(identity)
    if KEY_SEP in prefix:
        raise ValueError(f"Cache key prefix {prefix!r} must not contain {KEY_SEP!r}")
    return f"{prefix}{KEY_SEP}{identity}"

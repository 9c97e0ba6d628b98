"""Composition root: wires a terminal repository and its decorators.

Consumers receive only the outermost RepositoryPort. Swapping the terminal
repository or adding and removing decorators changes the ChainSpec (or the
builder calls), never the consumer.

Example:
    >>> from repochain import ChainSpec, DecoratorSpec, MemoryCache, build_repository
    >>> repo = build_repository(
    ...     ChainSpec(
    ...         base="memory",
    ...         decorators=["logging", DecoratorSpec("cache", {"cache": MemoryCache()})],
    ...     )
    ... )
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self

from repochain.core.decorators import CachingRepository, LoggingRepository
from repochain.core.exceptions import ChainCycleError, ConfigurationError
from repochain.core.ports import CachePort, RepositoryPort
from repochain.core.repositories import InMemoryRepository, StoreRepository


if TYPE_CHECKING:
    from repochain.core.ports import StorePort


DecoratorFactory = Callable[..., RepositoryPort]

BASES = ("memory", "store")


def iter_layers(repository: RepositoryPort) -> Iterator[RepositoryPort]:
    """Yield each layer of a chain from outermost to innermost.

    Layers are followed through the ``inner`` property that
    RepositoryDecorator provides. A decorator without ``inner`` ends the
    walk: the layers beneath it are neither yielded nor checked for cycles.

    Raises:
        ChainCycleError: If a layer is reached twice.
    """
    seen: set[int] = set()
    current: RepositoryPort | None = repository
    while current is not None:
        if id(current) in seen:
            raise ChainCycleError(f"{type(current).__name__} wraps itself")
        seen.add(id(current))
        yield current
        current = getattr(current, "inner", None)


def describe_chain(repository: RepositoryPort) -> list[str]:
    """Class names of each layer, outermost first."""
    return [type(layer).__name__ for layer in iter_layers(repository)]


class RepositoryBuilder:
    """Builds a decorator chain around one terminal repository.

    Example:
        >>> repo = (
        ...     RepositoryBuilder(InMemoryRepository())
        ...     .wrap(lambda inner: CachingRepository(inner, MemoryCache()))
        ...     .build()
        ... )
    """

    def __init__(self, base: RepositoryPort) -> None:
        if not isinstance(base, RepositoryPort):
            raise TypeError(f"{type(base).__name__} does not implement RepositoryPort")
        self._outermost = base

    def wrap(self, factory: Callable[[RepositoryPort], RepositoryPort]) -> Self:
        """Wrap the current chain in the decorator returned by factory.

        Raises:
            ChainCycleError: If factory returns a repository already in the chain.
            TypeError: If factory returns something that is not a RepositoryPort.
        """
        decorated = factory(self._outermost)
        if not isinstance(decorated, RepositoryPort):
            raise TypeError(
                f"{type(decorated).__name__} does not implement RepositoryPort"
            )
        existing = {id(layer) for layer in iter_layers(self._outermost)}
        if id(decorated) in existing:
            raise ChainCycleError(
                f"{type(decorated).__name__} is already part of this chain"
            )
        self._outermost = decorated
        return self

    def build(self) -> RepositoryPort:
        """Return the outermost repository."""
        return self._outermost


def _cache_factory(
    inner: RepositoryPort, cache: CachePort | None = None, key_prefix: str = ""
) -> RepositoryPort:
    if cache is None:
        from repochain.adapters.cache import MemoryCache

        cache = MemoryCache()
    return CachingRepository(inner, cache=cache, key_prefix=key_prefix)


DEFAULT_DECORATORS: Mapping[str, DecoratorFactory] = MappingProxyType(
    {
        "cache": _cache_factory,
        "logging": LoggingRepository,
    }
)


@dataclass(frozen=True, slots=True)
class DecoratorSpec:
    """A named decorator and the options passed to its factory.

    Attributes:
        name: Key in the decorator registry (e.g., "cache", "logging").
        options: Keyword arguments for the factory, after the inner repository.
    """

    name: str
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Decorator name cannot be empty")


@dataclass(frozen=True, slots=True)
class ChainSpec:
    """Declarative description of a repository chain.

    Attributes:
        base: "memory" for InMemoryRepository, "store" for StoreRepository.
        store: Durable store, required when base is "store".
        decorators: Decorators applied innermost-first. Plain strings are
            decorators without options.

    Example:
        >>> spec = ChainSpec(
        ...     base="store",
        ...     store=FilesystemStore(Path("data/entities")),
        ...     decorators=[DecoratorSpec("cache", {"cache": FileCache(Path("data/cache"))})],
        ... )
    """

    base: str = "memory"
    store: StorePort | None = None
    decorators: Sequence[DecoratorSpec | str] = ()

    def __post_init__(self) -> None:
        if self.base not in BASES:
            raise ConfigurationError(
                f"Unknown base '{self.base}', expected one of: {', '.join(BASES)}"
            )
        if self.base == "store" and self.store is None:
            raise ConfigurationError("Chain base 'store' requires a store")
        normalized = tuple(
            d if isinstance(d, DecoratorSpec) else DecoratorSpec(d)
            for d in self.decorators
        )
        object.__setattr__(self, "decorators", normalized)

    def decorator_names(self) -> list[str]:
        """Decorator names, innermost first."""
        return [d.name for d in self.decorators]  # type: ignore[union-attr]

    def caches(self) -> list[tuple[CachePort, str]]:
        """Caches passed explicitly to "cache" decorators, with their key prefix."""
        return [
            (d.options["cache"], d.options.get("key_prefix", ""))
            for d in self.decorators
            if isinstance(d, DecoratorSpec)
            and d.name == "cache"
            and d.options.get("cache") is not None
        ]


def build_repository(
    spec: ChainSpec,
    registry: Mapping[str, DecoratorFactory] | None = None,
) -> RepositoryPort:
    """Build the repository chain described by spec.

    Args:
        spec: The chain description.
        registry: Decorator factories by name. Defaults to DEFAULT_DECORATORS.

    Returns:
        The outermost repository of the chain.

    Raises:
        ConfigurationError: For unknown decorator names or bad options.
    """
    factories = DEFAULT_DECORATORS if registry is None else registry

    if spec.base == "store":
        assert spec.store is not None  # Validated by ChainSpec
        base: RepositoryPort = StoreRepository(spec.store)
    else:
        base = InMemoryRepository()

    builder = RepositoryBuilder(base)
    for decorator in spec.decorators:
        assert isinstance(decorator, DecoratorSpec)  # Normalized by ChainSpec
        try:
            factory = factories[decorator.name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown decorator '{decorator.name}'. "
                f"Available decorators: {', '.join(sorted(factories))}"
            ) from None
        options = dict(decorator.options)
        # Errors raised inside the factory itself propagate unchanged
        try:
            inspect.signature(factory).bind(base, **options)
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid options for decorator '{decorator.name}': {e}"
            ) from e
        builder.wrap(lambda inner, f=factory, o=options: f(inner, **o))

    return builder.build()

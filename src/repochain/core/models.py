"""Core domain models for repochain.

These models are pure Python dataclasses with no I/O dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Self


Identity = int | str


def validate_identity(identity: object) -> None:
    """Raise ValueError unless identity is an int (not bool) or a non-empty str."""
    if isinstance(identity, bool) or not isinstance(identity, int | str):
        raise ValueError(
            f"Entity id must be an int or str, got {type(identity).__name__}"
        )
    if isinstance(identity, str) and not identity:
        raise ValueError("Entity id cannot be empty")


@dataclass(frozen=True, slots=True)
class Entity:
    """A plain data record with a stable identity.

    Attributes:
        id: Identity used for lookup. Immutable after creation.
        attributes: Any additional fields of the record.

    Example:
        >>> widget = Entity(id=1, attributes={"name": "Widget"})
        >>> widget.to_dict()
        {'id': 1, 'name': 'Widget'}
    """

    id: Identity
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the identity and freeze the attribute mapping."""
        validate_identity(self.id)
        for name in self.attributes:
            if not isinstance(name, str):
                raise ValueError(f"Attribute names must be strings, got {name!r}")
            if name == "id":
                raise ValueError("'id' is reserved for the entity identity")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __getitem__(self, name: str) -> Any:
        return self.attributes[name]

    def same_record(self, other: Entity) -> bool:
        """Return True if other has the same identity as this entity."""
        return self.id == other.id

    def with_attributes(self, **changes: Any) -> Self:
        """Return a new Entity with the given attributes merged in."""
        return type(self)(id=self.id, attributes={**self.attributes, **changes})

    def to_dict(self) -> dict[str, Any]:
        """Flatten to a JSON-compatible dict with the identity under "id"."""
        return {"id": self.id, **self.attributes}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build an Entity from the shape produced by to_dict().

        Raises:
            ValueError: If data has no "id" key or the id is invalid.
        """
        if "id" not in data:
            raise ValueError("Entity data is missing 'id'")
        attributes = {k: v for k, v in data.items() if k != "id"}
        return cls(id=data["id"], attributes=attributes)

"""Shared parsing and formatting helpers for CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text


if TYPE_CHECKING:
    from repochain.core.models import Entity, Identity


def parse_identity(raw: str) -> Identity:
    """Treat an all-digit (ASCII) command line id as an int, anything else as a str."""
    return int(raw) if raw.isascii() and raw.isdigit() else raw


def parse_attribute(raw: str) -> tuple[str, Any]:
    """Parse a key=value pair, decoding the value as JSON when possible.

    Raises:
        ValueError: If raw has no '=' or an empty key.
    """
    name, sep, value = raw.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"Expected key=value, got '{raw}'")
    try:
        return name, json.loads(value)
    except json.JSONDecodeError:
        return name, value


def entity_table(entity: Entity) -> Table:
    """Render an entity as a two-column Field/Value table."""
    table = Table()
    table.add_column("Field")
    table.add_column("Value")
    table.add_row(Text("id", style="bold"), str(entity.id))
    for name, value in entity.attributes.items():
        rendered = value if isinstance(value, str) else json.dumps(value)
        table.add_row(name, rendered)
    return table


def format_size(size_bytes: int) -> str:
    """Format byte size in human-readable form."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"

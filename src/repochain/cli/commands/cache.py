"""Cache maintenance commands for CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from repochain.cli.formatting import format_size, parse_identity
from repochain.cli.main import fail, app, chain_option, load_chain_spec
from repochain.core.keys import KEY_SEP, cache_key
from repochain.core.ports import CacheMaintenancePort


if TYPE_CHECKING:
    from repochain.core.chain import ChainSpec


def _maintainable_caches(
    name: str, spec: ChainSpec
) -> list[tuple[CacheMaintenancePort, str]]:
    """Caches in the chain that support maintenance, with their key prefix.

    Raises:
        typer.Exit: If the chain has no such cache.
    """
    caches = [
        (cache, prefix)
        for cache, prefix in spec.caches()
        if isinstance(cache, CacheMaintenancePort)
    ]
    if not caches:
        typer.echo(f"Chain '{name}' has no maintainable cache configured.")
        raise typer.Exit(1)
    return caches


@app.command()
def invalidate(
    identity: str = typer.Argument(help="Id of the entity to drop from the cache."),
    chain: str | None = chain_option,
) -> None:
    """Remove one entity from the chain's caches, forcing a re-read on next get."""
    name, spec = load_chain_spec(chain)

    for cache, prefix in _maintainable_caches(name, spec):
        try:
            cache.invalidate(cache_key(parse_identity(identity), prefix=prefix))
        except ValueError as e:
            raise fail(e) from None

    typer.echo(f"Invalidated '{identity}'.")


@app.command()
def clean(chain: str | None = chain_option) -> None:
    """Remove every entry from the chain's caches."""
    name, spec = load_chain_spec(chain)

    removed = 0
    for cache, prefix in _maintainable_caches(name, spec):
        if not prefix:
            removed += cache.clear()
            continue
        # A prefixed cache may be shared with other chains
        for key in cache.list_all_keys():
            if key.startswith(f"{prefix}{KEY_SEP}"):
                cache.invalidate(key)
                removed += 1

    typer.echo(f"Removed {removed} cache entries.")


@app.command("cache-stats")
def cache_stats(chain: str | None = chain_option) -> None:
    """Show entry counts and sizes of the chain's caches."""
    name, spec = load_chain_spec(chain)

    table = Table()
    table.add_column("Cache")
    table.add_column("Entries", justify="right")
    table.add_column("Size", justify="right")

    for cache, prefix in _maintainable_caches(name, spec):
        label = type(cache).__name__ + (f" [{prefix}]" if prefix else "")
        statistics = getattr(cache, "statistics", None)
        size = format_size(statistics()["total_size"]) if statistics else "-"
        table.add_row(label, str(len(cache.list_all_keys())), size)

    # Force terminal output to ensure tables render correctly in all environments
    Console(force_terminal=True).print(table)

"""List command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from repochain.cli.main import app
from repochain.core.exceptions import ChainLoadError


@app.command(name="list")
def list_chains() -> None:
    """List all chains with their base and decorators."""
    from repochain.config import find_project_root
    from repochain.discovery import discover_chains, load_chain

    root = find_project_root()
    chains = discover_chains(root)

    if not chains:
        typer.echo("No chains found. Run 'repochain init' to get started.")
        return

    table = Table()
    table.add_column("Name")
    table.add_column("Base")
    table.add_column("Decorators (innermost first)")

    for name, path in sorted(chains.items()):
        try:
            spec = load_chain(path)
        except ChainLoadError as e:
            typer.echo(f"Error: {e}", err=True)
            if e.recovery_hint:
                typer.echo(f"Hint: {e.recovery_hint}", err=True)
            raise typer.Exit(1) from None
        base = spec.base if spec.store is None else f"{spec.base} ({type(spec.store).__name__})"
        table.add_row(name, base, ", ".join(spec.decorator_names()) or "-")

    # Force terminal output to ensure tables render correctly in all environments
    console = Console(force_terminal=True)
    console.print(table)

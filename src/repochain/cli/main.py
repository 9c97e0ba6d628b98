"""CLI commands for repochain."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console

from repochain.cli.formatting import entity_table, parse_attribute, parse_identity
from repochain.core.exceptions import (
    ChainLoadError,
    ConfigurationError,
    EntityNotFoundError,
    RepochainError,
)


if TYPE_CHECKING:
    from repochain.core.chain import ChainSpec
    from repochain.core.ports import RepositoryPort


app = typer.Typer(
    name="repochain",
    help="Inspect and use repository chains defined in .repochain/chains/.",
    no_args_is_help=True,
)

DEFAULT_CHAIN = "default"

DEFAULT_CHAIN_TEMPLATE = '''\
"""Default repository chain.

Entities are stored as JSON files under data/entities and read through a
file cache under data/cache. Decorators are listed innermost first.
"""

from pathlib import Path

from repochain import ChainSpec, DecoratorSpec, FileCache, FilesystemStore

ROOT = Path(__file__).resolve().parents[2]

chain = ChainSpec(
    base="store",
    store=FilesystemStore(ROOT / "data" / "entities"),
    decorators=[
        "logging",
        DecoratorSpec("cache", {"cache": FileCache(ROOT / "data" / "cache")}),
    ],
)
'''

chain_option = typer.Option(
    None,
    "--chain",
    "-c",
    help="Chain to use. Defaults to 'default', or the only chain defined.",
)


def fail(error: Exception | str) -> typer.Exit:
    """Print an error (and its recovery hint) and return an Exit to raise."""
    typer.echo(f"Error: {error}", err=True)
    if isinstance(error, RepochainError) and error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    return typer.Exit(1)


def load_chain_spec(chain_name: str | None = None) -> tuple[str, ChainSpec]:
    """Find and load the chain a command should use.

    Args:
        chain_name: Optional chain name. Without one, 'default' is used if it
            exists, otherwise the only chain found.

    Returns:
        Tuple of (chain name, ChainSpec).

    Raises:
        typer.Exit: If no chain can be selected or the chain fails to load.
    """
    from repochain.config import find_project_root
    from repochain.discovery import discover_chains, load_chain

    root = find_project_root()
    chains = discover_chains(root)

    if not chains:
        typer.echo("No chains found. Run 'repochain init' to get started.")
        raise typer.Exit(1)

    if chain_name is None:
        if DEFAULT_CHAIN in chains:
            chain_name = DEFAULT_CHAIN
        elif len(chains) == 1:
            chain_name = next(iter(chains))
        else:
            typer.echo("Multiple chains found. Select one with --chain.")
            typer.echo(f"Available chains: {', '.join(sorted(chains))}")
            raise typer.Exit(1)
    elif chain_name not in chains:
        typer.echo(f"Chain '{chain_name}' not found.")
        typer.echo(f"Available chains: {', '.join(sorted(chains))}")
        raise typer.Exit(1)

    try:
        spec = load_chain(chains[chain_name])
    except ChainLoadError as e:
        raise fail(e) from None

    return chain_name, spec


def load_repository(chain_name: str | None = None) -> RepositoryPort:
    """Load a chain and build its repository.

    Raises:
        typer.Exit: If the chain cannot be loaded or built.
    """
    from repochain.core.chain import build_repository

    _name, spec = load_chain_spec(chain_name)
    try:
        return build_repository(spec)
    except ConfigurationError as e:
        raise fail(e) from None


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log repository calls and cache hits/misses to stderr.",
    ),
) -> None:
    """Repository chains with transparent caching."""
    from repochain.logging_config import configure_logging

    configure_logging(verbose)


@app.command()
def init(
    directory: str | None = typer.Argument(
        None,
        help="Directory to initialize. Defaults to current directory.",
    ),
) -> None:
    """Initialize a new repochain project structure."""
    from repochain.config import chains_dir

    target = Path(directory) if directory else Path.cwd()
    target = target.resolve()

    directory_path = chains_dir(target)
    if not directory_path.exists():
        directory_path.mkdir(parents=True)
        typer.echo(f"Created {directory_path.relative_to(target)}/")

    default_py = directory_path / f"{DEFAULT_CHAIN}.py"
    if not default_py.exists():
        default_py.write_text(DEFAULT_CHAIN_TEMPLATE)
        typer.echo(f"Created {default_py.relative_to(target)}")

    data_dir = target / "data"
    if not data_dir.exists():
        data_dir.mkdir(parents=True)
        typer.echo(f"Created {data_dir.relative_to(target)}/")


@app.command()
def get(
    identity: str = typer.Argument(help="Id of the entity to fetch."),
    chain: str | None = chain_option,
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the entity as a JSON object.",
    ),
) -> None:
    """Fetch an entity through the chain."""
    repository = load_repository(chain)

    try:
        entity = repository.get(parse_identity(identity))
    except EntityNotFoundError as e:
        typer.echo(f"Entity '{identity}' not found.")
        typer.echo(f"Hint: {e.recovery_hint}")
        raise typer.Exit(1) from None
    except (RepochainError, ValueError) as e:
        raise fail(e) from None

    if as_json:
        typer.echo(json.dumps(entity.to_dict()))
    else:
        # Force terminal output to ensure tables render correctly in all environments
        Console(force_terminal=True).print(entity_table(entity))


@app.command()
def add(
    identity: str = typer.Argument(help="Id of the entity to add."),
    attributes: list[str] = typer.Option(
        [],
        "--attr",
        "-a",
        help="Attribute as key=value. Repeat for more. Values are parsed as JSON when possible.",
    ),
    chain: str | None = chain_option,
) -> None:
    """Add an entity through the chain."""
    from repochain.core.models import Entity

    try:
        entity = Entity(
            id=parse_identity(identity),
            attributes=dict(parse_attribute(raw) for raw in attributes),
        )
    except ValueError as e:
        raise fail(str(e)) from None

    repository = load_repository(chain)
    try:
        repository.add(entity)
    except (RepochainError, ValueError) as e:
        raise fail(e) from None

    typer.echo(f"Added entity '{entity.id}'.")


@app.command()
def info(chain: str | None = chain_option) -> None:
    """Show the layers of a chain, outermost first."""
    from rich.table import Table

    from repochain.core.chain import describe_chain

    repository = load_repository(chain)

    table = Table()
    table.add_column("#", justify="right")
    table.add_column("Layer")
    for position, name in enumerate(describe_chain(repository), 1):
        table.add_row(str(position), name)

    Console(force_terminal=True).print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()

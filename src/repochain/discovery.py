"""Chain discovery utilities.

Discovers and loads chain definition files from .repochain/chains/.
A chain file is a Python module defining a module-level ``chain``::

    from repochain import ChainSpec, DecoratorSpec, FileCache, FilesystemStore

    chain = ChainSpec(
        base="store",
        store=FilesystemStore(ROOT / "data" / "entities"),
        decorators=[DecoratorSpec("cache", {"cache": FileCache(ROOT / "data" / "cache")})],
    )
"""

from __future__ import annotations

import importlib.util
import sys
from typing import TYPE_CHECKING

from repochain.config import chains_dir
from repochain.core.chain import ChainSpec
from repochain.core.exceptions import ChainLoadError


if TYPE_CHECKING:
    from pathlib import Path


def discover_chains(root: Path) -> dict[str, Path]:
    """Find all chain files under .repochain/chains/.

    Args:
        root: Project root directory to search from.

    Returns:
        Dict mapping chain names to their file paths.
        Names are derived from filenames (e.g., 'products.py' -> 'products').
    """
    directory = chains_dir(root)
    if not directory.exists():
        return {}

    return {
        p.stem: p
        for p in sorted(directory.glob("*.py"))
        if not p.name.startswith("_")
    }


def load_chain(path: Path) -> ChainSpec:
    """Load a chain file and return its ChainSpec.

    Args:
        path: Path to the chain Python file.

    Returns:
        The ChainSpec bound to ``chain`` in the module.

    Raises:
        ChainLoadError: If the file cannot be imported, raises while
            executing, or does not define a ChainSpec named ``chain``.
    """
    # Generate a unique module name to avoid conflicts
    module_name = f"_repochain_chain_{path.stem}_{id(path)}"

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ChainLoadError(f"Could not load chain from {path}", chain_path=path)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module

    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        raise ChainLoadError(
            f"Syntax error in {path.name}: {e.msg}",
            chain_path=path,
            line=e.lineno,
            cause=e,
        ) from e
    except Exception as e:
        raise ChainLoadError(
            f"Error loading {path.name}: {e}",
            chain_path=path,
            line=_traceback_line(e, path),
            cause=e,
        ) from e
    finally:
        # Clean up to avoid polluting sys.modules
        sys.modules.pop(module_name, None)

    chain = getattr(module, "chain", None)
    if chain is None:
        raise ChainLoadError(f"{path.name} does not define 'chain'", chain_path=path)
    if not isinstance(chain, ChainSpec):
        raise ChainLoadError(
            f"'chain' in {path.name} must be a ChainSpec, got {type(chain).__name__}",
            chain_path=path,
        )

    return chain


def _traceback_line(error: BaseException, path: Path) -> int | None:
    """Line number of the deepest traceback frame inside path, if any."""
    line = None
    tb = error.__traceback__
    while tb is not None:
        if tb.tb_frame.f_code.co_filename == str(path):
            line = tb.tb_lineno
        tb = tb.tb_next
    return line

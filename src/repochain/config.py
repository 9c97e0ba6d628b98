"""Project root and chain directory resolution."""

from __future__ import annotations

from pathlib import Path


PROJECT_MARKERS = (".repochain", "pyproject.toml", ".git")


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from start to the nearest directory holding a project marker.

    Each directory is checked for .repochain, then pyproject.toml, then .git.
    The first directory with any of them wins, so a nested .repochain
    project shadows an enclosing git checkout.

    Args:
        start: Where to begin. Defaults to the current working directory.

    Returns:
        The project root, or the resolved start directory when no
        marker exists anywhere above it.

    Example:
        >>> from repochain.config import chains_dir, find_project_root
        >>> chains_dir(find_project_root())
    """
    origin = (start or Path.cwd()).resolve()

    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate

    return origin


def chains_dir(root: Path) -> Path:
    """Directory holding chain definition files for a project root."""
    return root / ".repochain" / "chains"

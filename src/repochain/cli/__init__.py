"""CLI for repochain."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from repochain.cli.commands import cache as _cache_module  # noqa: F401
from repochain.cli.commands import list as _list_module  # noqa: F401
from repochain.cli.main import app, main


__all__ = ["app", "main"]

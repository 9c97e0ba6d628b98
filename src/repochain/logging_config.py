"""Logging configuration for repochain.

Library modules log through logging.getLogger(__name__) and never configure
handlers themselves. Applications (and the CLI) call configure_logging().
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "repochain"


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Send repochain log records to a Rich handler on stderr.

    Level is DEBUG when verbose is True, otherwise WARNING. Calling this
    again replaces the handler installed by a previous call.

    Args:
        verbose: Log cache hits, misses, and repository calls.
        console: Optional Rich console to write to.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

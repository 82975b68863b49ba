"""Logging setup: records go to stderr through rich, stdout belongs to git."""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_ENV_VAR = 'GLIMPSE_LOG'

DEFAULT_LEVEL = logging.INFO

err_console = Console(stderr=True)


def level_from_env(value: Optional[str]) -> Optional[int]:
    """Translate a level name like ``debug`` into a logging level."""
    if not value:
        return None
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else None


def setup_logging(verbosity: int = 0) -> None:
    """Configure the ``gitglimpse`` logger.

    Args:
        verbosity: Number of ``-v`` flags; any positive value means DEBUG
    """
    if verbosity > 0:
        level = logging.DEBUG
    else:
        level = level_from_env(os.environ.get(LOG_ENV_VAR)) or DEFAULT_LEVEL

    logger = logging.getLogger('gitglimpse')
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=err_console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(handler)

"""Logging utilities for rigwatch.

Standard Logger Initialization Pattern
--------------------------------------
Modules use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

Handlers are attached once, by the CLI entry point, through
``setup_cli_logging``. Everything goes to stderr so that ``--json`` output
on stdout stays parseable.
"""

import logging
import sys
from typing import Optional

from ..config.settings import get_env_var

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_HANDLER_NAME = "rigwatch-stderr"


def resolve_log_level(verbose: bool = False, quiet: bool = False) -> int:
    """Pick the log level from CLI flags, falling back to RIGWATCH_LOG_LEVEL."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR

    try:
        level_name: Optional[str] = get_env_var("RIGWATCH_LOG_LEVEL")
    except ValueError:
        level_name = None
    return getattr(logging, (level_name or "WARNING").upper(), logging.WARNING)


def setup_cli_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure the ``rigwatch`` logger for a CLI run.

    Safe to call more than once: the stderr handler is only attached the
    first time, later calls rebind it to the current stderr and adjust
    the level.

    Returns:
        The configured package logger
    """
    level = resolve_log_level(verbose, quiet)
    logger = logging.getLogger("rigwatch")

    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
    else:
        # Follow stderr redirection between invocations (e.g. test runners)
        handler.setStream(sys.stderr)

    handler.setLevel(level)
    logger.setLevel(level)
    return logger

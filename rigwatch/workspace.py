"""
Town workspace discovery.

A town root is any directory containing ``mayor/town.json``.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config.constants import TOWN_MARKER
from .config.settings import get_env_var
from .exceptions import WorkspaceNotFoundError

logger = logging.getLogger(__name__)


def is_town_root(path: Union[str, Path]) -> bool:
    """Check whether a directory is a town root."""
    return (Path(path) / TOWN_MARKER).is_file()


def find_town_root(start: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Find the town root containing a path.

    Args:
        start: Directory to start from. If None, uses the current directory.

    Returns:
        The nearest ancestor (or start itself) that is a town root, None otherwise.
    """
    current = Path(start) if start is not None else Path.cwd()
    current = current.resolve()

    for candidate in (current, *current.parents):
        if is_town_root(candidate):
            return candidate
    return None


def find_from_cwd_or_error() -> Path:
    """
    Resolve the town root for this invocation.

    RIGWATCH_TOWN_ROOT takes precedence over searching upward from the cwd.

    Raises:
        WorkspaceNotFoundError: If no town root can be found.
    """
    override = get_env_var("RIGWATCH_TOWN_ROOT")
    if override:
        root = Path(override).expanduser().resolve()
        if not is_town_root(root):
            raise WorkspaceNotFoundError(
                f"RIGWATCH_TOWN_ROOT is not a town root (missing {TOWN_MARKER})",
                start=str(root),
            )
        logger.debug(f"Using town root from RIGWATCH_TOWN_ROOT: {root}")
        return root

    cwd = Path.cwd()
    root = find_town_root(cwd)
    if root is None:
        raise WorkspaceNotFoundError(start=str(cwd))
    logger.debug(f"Found town root: {root}")
    return root

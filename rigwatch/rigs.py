"""
Rig configuration and discovery.

Rigs are registered in ``mayor/rigs.json`` under the town root:

    {"version": 1, "rigs": {"gastown": {"git_url": "..."}}}

Discovery also picks up unregistered rig directories, so a town with a
missing or broken config still reports on every rig that has a store.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from .config.constants import (
    BEADS_DIR,
    MAYOR_DIR,
    RIG_MAYOR_BEADS_DIR,
    RIGS_CONFIG_PATH,
    TOWN_SOURCE_NAME,
)
from .exceptions import ConfigurationError, RigDiscoveryError

logger = logging.getLogger(__name__)


@dataclass
class RigEntry:
    """A registered rig's configuration."""

    name: str
    git_url: str = ""
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "RigEntry":
        data = dict(data or {})
        git_url = data.pop("git_url", "") or ""
        return cls(name=name, git_url=git_url, extra=data)


@dataclass
class RigsConfig:
    """The town's rig registry."""

    version: int = 1
    rigs: Dict[str, RigEntry] = field(default_factory=dict)


@dataclass
class Rig:
    """A project-level workspace with its own bead store."""

    name: str
    path: Path

    @property
    def beads_path(self) -> Path:
        """The rig's beads directory, preferring the mayor's clone."""
        mayor_beads = self.path / RIG_MAYOR_BEADS_DIR
        if mayor_beads.is_dir():
            return mayor_beads
        return self.path / BEADS_DIR


def rigs_config_path(town_root: Union[str, Path]) -> Path:
    return Path(town_root) / RIGS_CONFIG_PATH


def load_rigs_config(path: Union[str, Path]) -> RigsConfig:
    """
    Load a rigs.json registry.

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError("cannot read rigs config", setting=str(path)) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"invalid rigs config: {e.msg}", setting=str(path)) from e

    if not isinstance(data, dict) or not isinstance(data.get("rigs") or {}, dict):
        raise ConfigurationError("rigs config must map rig names to entries", setting=str(path))

    rigs = {
        name: RigEntry.from_dict(name, entry if isinstance(entry, dict) else {})
        for name, entry in (data.get("rigs") or {}).items()
    }
    return RigsConfig(version=data.get("version", 1), rigs=rigs)


class RigManager:
    """Enumerates the rigs of a town."""

    def __init__(self, town_root: Union[str, Path], config: RigsConfig):
        self.town_root = Path(town_root)
        self.config = config

    def discover_rigs(self) -> List[Rig]:
        """
        Find every rig in the town.

        Returns:
            Registered rigs whose directory exists, plus unregistered top-level
            directories that hold a beads store, sorted by name. A rig named
            "town" is skipped since that name belongs to the town store.

        Raises:
            RigDiscoveryError: If the town root cannot be listed.
        """
        rigs: Dict[str, Rig] = {}

        for name in self.config.rigs:
            if name == TOWN_SOURCE_NAME:
                logger.warning(f"Skipping rig {name!r}: the name is reserved for the town store")
                continue
            rig_path = self.town_root / name
            if not rig_path.is_dir():
                logger.warning(f"Registered rig {name!r} has no directory at {rig_path}")
                continue
            rigs[name] = Rig(name=name, path=rig_path)

        try:
            entries = sorted(self.town_root.iterdir())
        except OSError as e:
            raise RigDiscoveryError(str(e), town_root=str(self.town_root)) from e

        for entry in entries:
            if entry.name in rigs or entry.name.startswith(".") or entry.name == MAYOR_DIR:
                continue
            if entry.name == TOWN_SOURCE_NAME:
                logger.debug(f"Skipping directory {entry.name!r}: the name is reserved for the town store")
                continue
            if entry.is_dir() and (entry / BEADS_DIR).is_dir():
                logger.debug(f"Discovered unregistered rig {entry.name!r}")
                rigs[entry.name] = Rig(name=entry.name, path=entry)

        return [rigs[name] for name in sorted(rigs)]

"""
Read-only access to a bead store.

Blocked issues come from the ``bd`` CLI (``bd blocked --json``). Formula
names and wisp ids are read straight from the store directory.
"""

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import List, Protocol, Set, Union

from ..blocked.models import BlockedIssue
from ..config.constants import (
    BEADS_DIR,
    DEFAULT_BD_BIN,
    FORMULA_SUFFIXES,
    FORMULAS_DIR,
    ISSUES_JSONL,
)
from ..exceptions import BeadsQueryError

logger = logging.getLogger(__name__)


class BlockedStore(Protocol):
    """What the report needs from a bead store."""

    def blocked(self) -> List[BlockedIssue]:
        ...

    def formula_names(self) -> Set[str]:
        ...

    def wisp_ids(self) -> Set[str]:
        ...


def town_beads_path(town_root: Union[str, Path]) -> Path:
    """Get the town-level beads directory."""
    return Path(town_root) / BEADS_DIR


class BeadsStore:
    """A bead store rooted at a ``.beads`` directory."""

    def __init__(self, beads_path: Union[str, Path], bd_bin: str = DEFAULT_BD_BIN):
        self.beads_path = Path(beads_path)
        self.bd_bin = bd_bin

    def __repr__(self) -> str:
        return f"BeadsStore({str(self.beads_path)!r})"

    def _run_bd(self, *args: str) -> str:
        """Run a bd subcommand against this store and return its stdout."""
        env = dict(os.environ)
        env["BEADS_DIR"] = str(self.beads_path)
        cwd = self.beads_path.parent if self.beads_path.parent.is_dir() else None

        try:
            result = subprocess.run(
                [self.bd_bin, *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=cwd,
                env=env,
            )
        except FileNotFoundError as e:
            raise BeadsQueryError(
                f"{self.bd_bin} not found", path=str(self.beads_path)
            ) from e
        except subprocess.CalledProcessError as e:
            raise BeadsQueryError(
                f"bd {' '.join(args)} failed",
                path=str(self.beads_path),
                exit_code=e.returncode,
                stderr=e.stderr,
            ) from e

        return result.stdout

    def blocked(self) -> List[BlockedIssue]:
        """Get the store's blocked issues."""
        output = self._run_bd("blocked", "--json").strip()
        if not output:
            return []

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise BeadsQueryError(
                f"invalid JSON from bd blocked: {e.msg}", path=str(self.beads_path)
            ) from e

        if isinstance(data, dict):
            if "issues" not in data:
                raise BeadsQueryError(
                    "unexpected bd blocked output", path=str(self.beads_path)
                )
            data = data["issues"]
        if data is None:
            return []
        if not isinstance(data, list):
            raise BeadsQueryError(
                "unexpected bd blocked output", path=str(self.beads_path)
            )

        try:
            return [BlockedIssue.from_dict(record) for record in data]
        except (KeyError, TypeError, ValueError) as e:
            raise BeadsQueryError(
                f"malformed issue in bd blocked output: {e}", path=str(self.beads_path)
            ) from e

    def formula_names(self) -> Set[str]:
        """Names of the formulas defined in this store."""
        formulas_dir = self.beads_path / FORMULAS_DIR
        if not formulas_dir.is_dir():
            return set()

        try:
            entries = list(formulas_dir.iterdir())
        except OSError as e:
            logger.debug(f"Cannot list formulas in {formulas_dir}: {e}")
            return set()

        names = set()
        for entry in entries:
            for suffix in FORMULA_SUFFIXES:
                if entry.name.endswith(suffix) and len(entry.name) > len(suffix):
                    names.add(entry.name[: -len(suffix)])
                    break
        return names

    def wisp_ids(self) -> Set[str]:
        """IDs of issues flagged as wisps in the store's issue export."""
        issues_file = self.beads_path / ISSUES_JSONL
        if not issues_file.is_file():
            return set()

        try:
            raw_lines = issues_file.read_bytes().splitlines()
        except OSError as e:
            logger.debug(f"Cannot read {issues_file}: {e}")
            return set()

        ids = set()
        for line_no, raw in enumerate(raw_lines, start=1):
            try:
                line = raw.decode("utf-8").strip()
                if not line:
                    continue
                record = json.loads(line)
            except (UnicodeDecodeError, json.JSONDecodeError):
                logger.debug(f"Skipping undecodable line {line_no} in {issues_file}")
                continue
            if not isinstance(record, dict) or "id" not in record:
                continue
            if record.get("wisp") or record.get("ephemeral"):
                ids.add(str(record["id"]))
        return ids

"""Shared pytest fixtures for rigwatch tests."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest

from rigwatch.blocked.models import BlockedIssue


# =============================================================================
# FAKE STORES
# =============================================================================


class FakeStore:
    """In-memory stand-in for BeadsStore."""

    def __init__(
        self,
        issues: Optional[List[BlockedIssue]] = None,
        formulas: Optional[Set[str]] = None,
        wisps: Optional[Set[str]] = None,
        error: Optional[Exception] = None,
    ):
        self.issues = issues or []
        self.formulas = formulas or set()
        self.wisps = wisps or set()
        self.error = error
        self.calls = 0

    def blocked(self) -> List[BlockedIssue]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.issues)

    def formula_names(self) -> Set[str]:
        return set(self.formulas)

    def wisp_ids(self) -> Set[str]:
        return set(self.wisps)


class FakeStoreRegistry:
    """Maps beads paths to fake stores; callable as a store factory."""

    def __init__(self):
        self.stores: Dict[Path, FakeStore] = {}
        self.opened: List[Path] = []

    def add(self, beads_path: Path, store: FakeStore) -> FakeStore:
        self.stores[Path(beads_path)] = store
        return store

    def __call__(self, beads_path: Path) -> FakeStore:
        beads_path = Path(beads_path)
        self.opened.append(beads_path)
        if beads_path not in self.stores:
            raise FileNotFoundError(f"no store at {beads_path}")
        return self.stores[beads_path]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def make_issue():
    """Factory for BlockedIssue instances."""

    def _make(
        id: str = "gt-test01",
        title: str = "Test issue",
        priority: int = 2,
        blocked_by: Optional[List[str]] = None,
    ) -> BlockedIssue:
        return BlockedIssue(id=id, title=title, priority=priority, blocked_by=blocked_by or [])

    return _make


@pytest.fixture
def fake_stores():
    """A registry of fake stores usable as a store factory."""
    return FakeStoreRegistry()


@pytest.fixture
def fake_store_cls():
    return FakeStore


@pytest.fixture
def town(tmp_path: Path) -> Path:
    """A town root with a town store and two registered rigs."""
    root = tmp_path / "town"
    (root / "mayor").mkdir(parents=True)
    (root / "mayor" / "town.json").write_text(json.dumps({"name": "test-town"}))
    (root / ".beads").mkdir()

    for name in ("alpha", "beta"):
        (root / name / ".beads").mkdir(parents=True)

    (root / "mayor" / "rigs.json").write_text(
        json.dumps(
            {
                "version": 1,
                "rigs": {
                    "alpha": {"git_url": "https://example.com/alpha.git"},
                    "beta": {"git_url": "https://example.com/beta.git"},
                },
            }
        )
    )
    return root


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the caller's environment from leaking into tests."""
    for name in ("RIGWATCH_TOWN_ROOT", "RIGWATCH_BD_BIN", "RIGWATCH_LOG_LEVEL", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def quiet_rigwatch_logging():
    """Detach CLI log handlers so captured stdout/stderr stay clean between tests."""
    logger = logging.getLogger("rigwatch")
    saved_handlers, saved_level = logger.handlers[:], logger.level
    logger.handlers = [logging.NullHandler()]
    yield
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)

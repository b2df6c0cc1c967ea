"""Tests for the rigwatch exception hierarchy."""

import pytest

from rigwatch.exceptions import (
    BeadsError,
    BeadsQueryError,
    ConfigurationError,
    RigDiscoveryError,
    RigError,
    RigNotFoundError,
    RigwatchError,
    WorkspaceError,
    WorkspaceNotFoundError,
)


class TestRigwatchError:
    """Test the base error."""

    def test_message_only(self):
        error = RigwatchError("something broke")
        assert str(error) == "something broke"
        assert error.context == {}
        assert not error.retryable

    def test_context_in_message(self):
        error = RigwatchError("query failed", path="/town/.beads", retryable=True)
        assert str(error) == "query failed (path='/town/.beads')"
        assert error.retryable


@pytest.mark.parametrize(
    "error, parent",
    [
        (WorkspaceNotFoundError(), WorkspaceError),
        (RigNotFoundError("x"), RigError),
        (RigDiscoveryError(), RigError),
        (BeadsQueryError(), BeadsError),
        (ConfigurationError(), RigwatchError),
    ],
)
def test_hierarchy(error, parent):
    assert isinstance(error, parent)
    assert isinstance(error, RigwatchError)


class TestSpecializedErrors:
    """Test the per-domain constructors."""

    def test_workspace_not_found_default(self):
        assert str(WorkspaceNotFoundError()) == "not in a town workspace"

    def test_workspace_not_found_start(self):
        error = WorkspaceNotFoundError(start="/tmp/x")
        assert error.context == {"start": "/tmp/x"}

    def test_rig_not_found(self):
        error = RigNotFoundError("gastown")
        assert str(error) == "rig not found: gastown"
        assert error.rig_name == "gastown"

    def test_rig_discovery_town_root(self):
        error = RigDiscoveryError("cannot list", town_root="/town")
        assert error.context == {"town_root": "/town"}

    def test_beads_query_stderr_trimmed(self):
        error = BeadsQueryError("bd failed", exit_code=2, stderr="  " + "e" * 250 + "\n")
        assert error.context["exit_code"] == 2
        assert error.context["stderr"] == "e" * 200 + "..."

    def test_beads_query_zero_exit_code_kept(self):
        assert BeadsQueryError(exit_code=0).context == {"exit_code": 0}

    def test_configuration_setting(self):
        error = ConfigurationError("bad value", setting="rigs")
        assert error.context == {"setting": "rigs"}

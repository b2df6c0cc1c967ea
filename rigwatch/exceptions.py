"""Custom exception hierarchy for rigwatch.

Exception Hierarchy:
    RigwatchError (base)
    ├── WorkspaceError - town root resolution
    │   └── WorkspaceNotFoundError
    ├── RigError - rig selection and discovery
    │   ├── RigNotFoundError
    │   └── RigDiscoveryError
    ├── BeadsError - bead store queries
    │   └── BeadsQueryError
    └── ConfigurationError - settings/configuration issues

Workspace and rig errors are fatal for a report and are raised before any
store is queried. Bead store errors are contained per source by the fan-out
executor and end up in that source's ``error`` field.

Usage:
    from rigwatch.exceptions import BeadsQueryError

    try:
        result = subprocess.run(...)
    except subprocess.CalledProcessError as e:
        raise BeadsQueryError("bd blocked failed", path=str(beads_path)) from e
"""

from typing import Any, Optional


class RigwatchError(Exception):
    """Base exception for all rigwatch errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., paths, rig names)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Workspace Errors
# =============================================================================


class WorkspaceError(RigwatchError):
    """Base exception for workspace resolution."""

    pass


class WorkspaceNotFoundError(WorkspaceError):
    """No town root could be found from the starting directory."""

    def __init__(
        self,
        message: str = "not in a town workspace",
        *,
        start: Optional[str] = None,
        **context: Any,
    ) -> None:
        if start:
            context["start"] = start
        super().__init__(message, **context)


# =============================================================================
# Rig Errors
# =============================================================================


class RigError(RigwatchError):
    """Base exception for rig selection and discovery."""

    pass


class RigNotFoundError(RigError):
    """A rig filter named a rig that does not exist."""

    def __init__(self, rig_name: str, **context: Any) -> None:
        self.rig_name = rig_name
        super().__init__(f"rig not found: {rig_name}", **context)


class RigDiscoveryError(RigError):
    """The town's rigs could not be enumerated."""

    def __init__(
        self,
        message: str = "discovering rigs failed",
        *,
        town_root: Optional[str] = None,
        **context: Any,
    ) -> None:
        if town_root:
            context["town_root"] = town_root
        super().__init__(message, **context)


# =============================================================================
# Bead Store Errors
# =============================================================================


class BeadsError(RigwatchError):
    """Base exception for bead store operations."""

    pass


class BeadsQueryError(BeadsError):
    """A bead store query failed or returned unusable data."""

    def __init__(
        self,
        message: str = "bead query failed",
        *,
        path: Optional[str] = None,
        exit_code: Optional[int] = None,
        stderr: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        if exit_code is not None:
            context["exit_code"] = exit_code
        if stderr:
            stderr = stderr.strip()
            context["stderr"] = stderr[:200] + "..." if len(stderr) > 200 else stderr
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(RigwatchError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)

"""Configuration utilities for rigwatch."""

import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import DEFAULT_BD_BIN, ENV_VAR_DEFINITIONS


@dataclass(frozen=True)
class ReportConfig:
    """Options for one blocked-work report.

    Built once per command invocation and passed down to every stage of the
    pipeline; nothing downstream reads flags from module state.
    """

    rig: Optional[str] = None
    json_output: bool = False
    color: bool = True
    bd_bin: str = DEFAULT_BD_BIN

    @classmethod
    def from_options(
        cls,
        rig: Optional[str] = None,
        json_output: bool = False,
        no_color: bool = False,
    ) -> "ReportConfig":
        """Build a config from CLI options, filling the rest from the environment."""
        color = not no_color and not get_env_var("NO_COLOR")
        return cls(
            rig=rig or None,
            json_output=json_output,
            color=color,
            bd_bin=get_env_var("RIGWATCH_BD_BIN") or DEFAULT_BD_BIN,
        )


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None  # Unknown vars are always valid

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")

    if value is None or valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all rigwatch environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Args:
        name: The environment variable name.
        validate: Whether to validate the value against known definitions.

    Returns:
        The environment variable value, its default, or None if neither is set.

    Raises:
        ValueError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ValueError(error)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value

"""
Blocked command - show blocked work across the town and all rigs.

Aggregates blocked issues from:
- Town beads (hq-* items: convoys, cross-rig coordination)
- Each rig's beads (project-level issues, MRs)
"""

import logging
from typing import NoReturn, Optional

import typer
from rich.markup import escape

from ..blocked.render import format_json, get_renderer, print_human
from ..blocked.service import build_report
from ..config.settings import ReportConfig
from ..exceptions import ConfigurationError, RigError, WorkspaceError
from ..rigs import RigManager, RigsConfig, load_rigs_config, rigs_config_path
from ..utils.output import console, plain_console
from ..workspace import find_from_cwd_or_error

logger = logging.getLogger(__name__)


def _fail(message: str, color: bool = True) -> NoReturn:
    if color:
        console.print(f"[red]Error:[/red] {escape(message)}", markup=True, highlight=False)
    else:
        plain_console.print(f"Error: {message}", soft_wrap=True)
    raise typer.Exit(1)


def blocked(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    rig: Optional[str] = typer.Option(None, "--rig", "-r", help="Filter to a specific rig"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """
    Show blocked work across town.

    Blocked items have unresolved dependencies preventing them from being
    worked. Sources are listed town first, then rigs by name; items within a
    source are sorted by priority (highest first).

    Examples:
        rigwatch blocked
        rigwatch blocked --json
        rigwatch blocked --rig gastown
    """
    config = ReportConfig.from_options(rig=rig, json_output=json_output, no_color=no_color)

    try:
        town_root = find_from_cwd_or_error()
    except WorkspaceError as e:
        _fail(str(e), config.color)

    try:
        rigs_config = load_rigs_config(rigs_config_path(town_root))
    except ConfigurationError as e:
        logger.debug(f"Using empty rigs config: {e}")
        rigs_config = RigsConfig()

    try:
        rigs = RigManager(town_root, rigs_config).discover_rigs()
        report = build_report(config, town_root, rigs)
    except RigError as e:
        _fail(str(e), config.color)

    if config.json_output:
        print(format_json(report))
        return

    print_human(report, get_renderer(config.color))


# Typer app for test invocation
app = typer.Typer(help="Show blocked work across town")
app.command()(blocked)

#!/usr/bin/env python3
"""
Main CLI entry point for rigwatch
"""

import typer

from rigwatch import __build_id__, __version__
from rigwatch.commands.blocked import blocked
from rigwatch.config.settings import validate_all_env_vars
from rigwatch.utils.logging_utils import setup_cli_logging


# Version command
def version():
    """Show rigwatch version"""
    typer.echo(f"rigwatch version {__version__}")
    typer.echo(f"Build ID: {__build_id__}")
    typer.echo("Blocked work reporting across town")


# Callback for global options
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    rigwatch - consolidated views of work across a town and its rigs

    [bold]Examples:[/bold]

    Show blocked work everywhere:
        [cyan]rigwatch blocked[/cyan]

    Machine-readable report:
        [cyan]rigwatch blocked --json[/cyan]

    One rig only:
        [cyan]rigwatch blocked --rig gastown[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    logger = setup_cli_logging(verbose=verbose, quiet=quiet)
    for error in validate_all_env_vars():
        logger.warning(error)


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(rich_markup_mode="rich", no_args_is_help=True)
    app.callback()(main)
    app.command("blocked")(blocked)
    app.command("version")(version)
    return app


# Create the app instance
app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()

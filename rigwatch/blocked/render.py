"""
Presenters for the blocked work report.

Two output modes share one ``AggregateReport``:

- ``format_json`` - the structured document printed by ``--json``
- ``format_human`` - the grouped, priority-tagged report for terminals

Styling in human mode goes through a ``Renderer`` so the formatting code
does not care whether the output is decorated.
"""

import json
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from ..utils.output import console as rich_console
from ..utils.output import plain_console
from ..utils.text_formatting import truncate_title
from .models import AggregateReport, BlockedIssue, SourceResult

NO_BLOCKED_MESSAGE = "No blocked work across town."
REPORT_HEADER_ICON = "\U0001F6AB"


class Renderer:
    """Styling capability used by the human presenter.

    The base implementation is undecorated text.
    """

    markup = False

    def text(self, value: str) -> str:
        """Unstyled user text."""
        return value

    def bold(self, value: str) -> str:
        return value

    def dim(self, value: str) -> str:
        return value

    def error(self, value: str) -> str:
        return value

    def warning(self, value: str) -> str:
        return value


class PlainRenderer(Renderer):
    """Undecorated text, for pipes and --no-color."""


class RichRenderer(Renderer):
    """Rich console markup."""

    markup = True

    def _styled(self, style: str, value: str) -> str:
        return f"[{style}]{escape(value)}[/{style}]"

    def text(self, value: str) -> str:
        return escape(value)

    def bold(self, value: str) -> str:
        return self._styled("bold", value)

    def dim(self, value: str) -> str:
        return self._styled("dim", value)

    def error(self, value: str) -> str:
        return self._styled("bold red", value)

    def warning(self, value: str) -> str:
        return self._styled("yellow", value)


def get_renderer(color: bool) -> Renderer:
    """Pick the renderer for human output."""
    return RichRenderer() if color else PlainRenderer()


# =============================================================================
# STRUCTURED OUTPUT
# =============================================================================


def format_json(report: AggregateReport) -> str:
    """Serialize the report as indented JSON."""
    return json.dumps(report.to_dict(), indent=2)


# =============================================================================
# HUMAN OUTPUT
# =============================================================================


def _priority_tag(issue: BlockedIssue, renderer: Renderer) -> str:
    label = issue.priority_label
    if issue.priority in (0, 1):
        return renderer.error(label)
    if issue.priority == 2:
        return renderer.warning(label)
    return renderer.dim(label)


def format_issue_line(issue: BlockedIssue, renderer: Renderer) -> str:
    """One report line: priority tag, id, title and blockers."""
    blocked_by = ""
    if issue.blocked_by:
        blocked_by = " " + renderer.dim(f"(blocked by: {', '.join(issue.blocked_by)})")

    # "[" followed by markup is not itself a tag, so it stays literal
    return (
        f"  [{_priority_tag(issue, renderer)}] "
        f"{renderer.dim(issue.id)} "
        f"{renderer.text(truncate_title(issue.title))}"
        f"{blocked_by}"
    )


def format_source(source: SourceResult, renderer: Renderer) -> List[str]:
    """Lines for one source; empty when the source has nothing to show."""
    if source.failed:
        return [f"{renderer.dim(source.name + '/')} {renderer.warning(f'(error: {source.error})')}"]

    count = source.issue_count
    if count == 0:
        return []

    item_word = "item" if count == 1 else "items"
    lines = [f"{renderer.bold(source.name + '/')} ({count} {item_word})"]
    lines.extend(format_issue_line(issue, renderer) for issue in source.issues)
    lines.append("")
    return lines


def format_totals(report: AggregateReport) -> str:
    """Grand total line, listing only the non-empty priority buckets."""
    summary = report.summary
    parts = [f"{count} {label}" for label, count in summary.bucket_counts()]
    if parts:
        return f"Total: {summary.total} items blocked ({', '.join(parts)})"
    return f"Total: {summary.total} items blocked"


def format_human(report: AggregateReport, renderer: Optional[Renderer] = None) -> List[str]:
    """Render the report as lines of text (markup included for RichRenderer)."""
    renderer = renderer or PlainRenderer()

    if report.summary.total == 0:
        return [NO_BLOCKED_MESSAGE]

    lines = [f"{renderer.bold(REPORT_HEADER_ICON)} Blocked work across town:", ""]
    for source in report.sources:
        lines.extend(format_source(source, renderer))
    lines.append(format_totals(report))
    return lines


def print_human(
    report: AggregateReport,
    renderer: Optional[Renderer] = None,
    console: Optional[Console] = None,
) -> None:
    """Print the human-readable report."""
    renderer = renderer or PlainRenderer()
    if console is None:
        console = rich_console if renderer.markup else plain_console

    for line in format_human(report, renderer):
        console.print(line, markup=renderer.markup, emoji=False, soft_wrap=True)

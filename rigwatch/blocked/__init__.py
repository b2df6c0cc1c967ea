"""
Blocked work reporting for rigwatch.

This package aggregates blocked issues across a town:
- Data models for issues, per-source results and the aggregated report
- Filters that drop formula scaffolds and wisps
- A fan-out service that queries every store concurrently (``service``)
- Structured and human-readable presenters (``render``)
"""

from .filters import apply_filters
from .models import AggregateReport, BlockedIssue, BlockedSummary, SourceResult

__all__ = [
    "AggregateReport",
    "BlockedIssue",
    "BlockedSummary",
    "SourceResult",
    "apply_filters",
]

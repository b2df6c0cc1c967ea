"""
Filters that drop noise from a source's blocked issue list.

Applied per source, in this order:

1. ``filter_formula_scaffolds`` - placeholder issues generated from formulas
2. ``filter_wisps`` - issues the store lists as wisps
3. ``filter_wisps_by_id`` - any remaining issue whose id carries the wisp marker

Step 3 overlaps with step 2: ``bd blocked`` does not guarantee
that wisps are excluded server-side, and the wisp listing can lag behind it.
Each step keeps the relative order of the issues it lets through.
"""

from typing import AbstractSet, List

from ..config.constants import FORMULA_STEP_SEPARATOR, WISP_MARKER
from .models import BlockedIssue


def is_formula_scaffold(issue_id: str, formula_names: AbstractSet[str]) -> bool:
    """Check whether an issue id is a formula or one of its step placeholders."""
    if issue_id in formula_names:
        return True
    prefix, sep, _ = issue_id.partition(FORMULA_STEP_SEPARATOR)
    return bool(sep and prefix and prefix in formula_names)


def filter_formula_scaffolds(
    issues: List[BlockedIssue], formula_names: AbstractSet[str]
) -> List[BlockedIssue]:
    """Remove scaffold placeholder issues belonging to known formulas."""
    if not formula_names:
        return list(issues)
    return [i for i in issues if not is_formula_scaffold(i.id, formula_names)]


def filter_wisps(issues: List[BlockedIssue], wisp_ids: AbstractSet[str]) -> List[BlockedIssue]:
    """Remove issues whose id is a known wisp."""
    if not wisp_ids:
        return list(issues)
    return [i for i in issues if i.id not in wisp_ids]


def filter_wisps_by_id(issues: List[BlockedIssue]) -> List[BlockedIssue]:
    """Remove issues whose id contains the wisp marker."""
    return [i for i in issues if WISP_MARKER not in i.id]


def apply_filters(
    issues: List[BlockedIssue],
    formula_names: AbstractSet[str],
    wisp_ids: AbstractSet[str],
) -> List[BlockedIssue]:
    """Run the full filter pipeline over one source's raw issues."""
    filtered = filter_formula_scaffolds(issues, formula_names)
    filtered = filter_wisps(filtered, wisp_ids)
    return filter_wisps_by_id(filtered)

"""
Data models for the blocked work report.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..config.constants import DEFAULT_ISSUE_PRIORITY, PRIORITY_LEVELS


@dataclass
class BlockedIssue:
    """An issue whose progress is gated by unresolved dependencies."""

    id: str  # Bead ID like "gt-a3f2dd"
    title: str
    priority: int = DEFAULT_ISSUE_PRIORITY  # 0=critical .. 4=backlog
    blocked_by: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlockedIssue":
        """Create from a bead store JSON record."""
        priority = data.get("priority")
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            priority=DEFAULT_ISSUE_PRIORITY if priority is None else int(priority),
            blocked_by=[str(dep) for dep in data.get("blocked_by") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "priority": self.priority,
        }
        if self.blocked_by:
            data["blocked_by"] = list(self.blocked_by)
        return data

    @property
    def priority_label(self) -> str:
        """Short priority tag, e.g. "P0"."""
        return f"P{self.priority}"


@dataclass
class SourceResult:
    """Blocked issues from a single source (the town or one rig).

    ``issues`` is None when the query failed; ``error`` then holds the reason.
    """

    name: str
    issues: Optional[List[BlockedIssue]] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def issue_count(self) -> int:
        return len(self.issues) if self.issues else 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SourceResult":
        issues = data.get("issues")
        return cls(
            name=data["name"],
            issues=None if issues is None else [BlockedIssue.from_dict(i) for i in issues],
            error=data.get("error") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "issues": None if self.issues is None else [i.to_dict() for i in self.issues],
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class BlockedSummary:
    """Counts for the blocked report.

    Priority buckets only count issues with priority 0-4, so the bucket
    counts can add up to less than ``total``.
    """

    total: int = 0
    by_source: Dict[str, int] = field(default_factory=dict)
    p0_count: int = 0
    p1_count: int = 0
    p2_count: int = 0
    p3_count: int = 0
    p4_count: int = 0

    def bucket(self, priority: int) -> int:
        """Count for priority bucket P<priority>."""
        if not 0 <= priority < PRIORITY_LEVELS:
            raise ValueError(f"No bucket for priority {priority}")
        return getattr(self, f"p{priority}_count")

    def add_to_bucket(self, priority: int) -> None:
        """Count one issue in its bucket; out-of-range priorities are ignored."""
        if 0 <= priority < PRIORITY_LEVELS:
            attr = f"p{priority}_count"
            setattr(self, attr, getattr(self, attr) + 1)

    def bucket_counts(self) -> List[Tuple[str, int]]:
        """Non-zero buckets as (label, count), lowest priority number first."""
        return [
            (f"P{p}", self.bucket(p))
            for p in range(PRIORITY_LEVELS)
            if self.bucket(p) > 0
        ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlockedSummary":
        return cls(
            total=data.get("total", 0),
            by_source=dict(data.get("by_source") or {}),
            **{f"p{p}_count": data.get(f"p{p}_count", 0) for p in range(PRIORITY_LEVELS)},
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "total": self.total,
            "by_source": dict(self.by_source),
        }
        for p in range(PRIORITY_LEVELS):
            data[f"p{p}_count"] = self.bucket(p)
        return data


@dataclass
class AggregateReport:
    """The aggregated result of one blocked-work report."""

    sources: List[SourceResult]
    summary: BlockedSummary
    town_root: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregateReport":
        return cls(
            sources=[SourceResult.from_dict(s) for s in data.get("sources") or []],
            summary=BlockedSummary.from_dict(data.get("summary") or {}),
            town_root=data.get("town_root", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "sources": [s.to_dict() for s in self.sources],
            "summary": self.summary.to_dict(),
        }
        if self.town_root:
            data["town_root"] = self.town_root
        return data

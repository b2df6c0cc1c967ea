"""Tests for blocked report data models."""

import json

import pytest

from rigwatch.blocked.models import (
    AggregateReport,
    BlockedIssue,
    BlockedSummary,
    SourceResult,
)


class TestBlockedIssue:
    """Tests for the BlockedIssue dataclass."""

    def test_from_dict_full(self):
        issue = BlockedIssue.from_dict(
            {
                "id": "gt-abc123",
                "title": "Wire up the refinery",
                "priority": 1,
                "blocked_by": ["gt-def456", "gt-789abc"],
                "status": "open",
            }
        )
        assert issue.id == "gt-abc123"
        assert issue.title == "Wire up the refinery"
        assert issue.priority == 1
        assert issue.blocked_by == ["gt-def456", "gt-789abc"]

    def test_from_dict_defaults(self):
        issue = BlockedIssue.from_dict({"id": "gt-1", "blocked_by": None})
        assert issue.title == ""
        assert issue.priority == 2
        assert issue.blocked_by == []

    def test_from_dict_requires_id(self):
        with pytest.raises(KeyError):
            BlockedIssue.from_dict({"title": "No id"})

    def test_to_dict_omits_empty_blocked_by(self):
        issue = BlockedIssue(id="gt-1", title="T", priority=0)
        assert issue.to_dict() == {"id": "gt-1", "title": "T", "priority": 0}

    def test_to_dict_includes_blocked_by(self):
        issue = BlockedIssue(id="gt-1", title="T", priority=0, blocked_by=["gt-2"])
        assert issue.to_dict()["blocked_by"] == ["gt-2"]

    def test_priority_label(self):
        assert BlockedIssue(id="x", title="", priority=3).priority_label == "P3"


class TestSourceResult:
    """Tests for the SourceResult dataclass."""

    def test_issue_count(self, make_issue):
        source = SourceResult(name="alpha", issues=[make_issue(), make_issue(id="gt-2")])
        assert source.issue_count == 2
        assert not source.failed

    def test_failed_source_counts_zero(self):
        source = SourceResult(name="alpha", error="boom")
        assert source.failed
        assert source.issue_count == 0

    def test_to_dict_failed_source(self):
        data = SourceResult(name="alpha", error="boom").to_dict()
        assert data == {"name": "alpha", "issues": None, "error": "boom"}

    def test_to_dict_empty_source(self):
        data = SourceResult(name="alpha", issues=[]).to_dict()
        assert data == {"name": "alpha", "issues": []}

    def test_from_dict_failed_source(self):
        source = SourceResult.from_dict({"name": "alpha", "issues": None, "error": "boom"})
        assert source.issues is None
        assert source.error == "boom"


class TestBlockedSummary:
    """Tests for the BlockedSummary dataclass."""

    def test_add_to_bucket(self):
        summary = BlockedSummary()
        for priority in (0, 0, 2, 4):
            summary.add_to_bucket(priority)
        assert summary.p0_count == 2
        assert summary.p1_count == 0
        assert summary.p2_count == 1
        assert summary.p4_count == 1

    def test_out_of_range_priority_has_no_bucket(self):
        summary = BlockedSummary()
        summary.add_to_bucket(5)
        summary.add_to_bucket(-1)
        assert [summary.bucket(p) for p in range(5)] == [0, 0, 0, 0, 0]

    def test_bucket_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            BlockedSummary().bucket(7)

    def test_bucket_counts_skips_empty(self):
        summary = BlockedSummary(p1_count=2, p3_count=1)
        assert summary.bucket_counts() == [("P1", 2), ("P3", 1)]

    def test_to_dict_field_names(self):
        data = BlockedSummary(total=3, by_source={"town": 3}, p0_count=3).to_dict()
        assert data == {
            "total": 3,
            "by_source": {"town": 3},
            "p0_count": 3,
            "p1_count": 0,
            "p2_count": 0,
            "p3_count": 0,
            "p4_count": 0,
        }


class TestAggregateReport:
    """Tests for AggregateReport serialization."""

    def test_round_trip_through_json(self, make_issue):
        report = AggregateReport(
            sources=[
                SourceResult(
                    name="town",
                    issues=[make_issue(id="hq-1", priority=0, blocked_by=["hq-2"])],
                ),
                SourceResult(name="alpha", issues=[]),
                SourceResult(name="beta", error="bd: database locked"),
            ],
            summary=BlockedSummary(
                total=1, by_source={"town": 1, "alpha": 0, "beta": 0}, p0_count=1
            ),
            town_root="/srv/town",
        )

        restored = AggregateReport.from_dict(json.loads(json.dumps(report.to_dict())))

        assert restored == report

    def test_to_dict_omits_empty_town_root(self):
        report = AggregateReport(sources=[], summary=BlockedSummary())
        assert "town_root" not in report.to_dict()

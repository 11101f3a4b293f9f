"""Tests for issue grouping."""

from __future__ import annotations

from a11y_score.aggregator import IssueGroup, group_issues, groups_by_severity, severity_counts
from a11y_score.issues import IssueRecord


def test_group_issues_counts_per_type() -> None:
    issues = [
        IssueRecord("Empty Link", "error", "a.nav", "a11y-1"),
        IssueRecord("Missing H1", "warning"),
        IssueRecord("Empty Link", "error", "a.footer", "a11y-2"),
        IssueRecord("Empty Link", "error"),
    ]
    groups = group_issues(issues)

    assert groups == {
        "Empty Link": IssueGroup("Empty Link", "error", 3),
        "Missing H1": IssueGroup("Missing H1", "warning", 1),
    }


def test_group_issues_takes_first_severity() -> None:
    groups = group_issues(
        [IssueRecord("Empty Link", "warning"), IssueRecord("Empty Link", "error")]
    )
    assert groups["Empty Link"].severity == "warning"
    assert groups["Empty Link"].count == 2


def test_group_issues_empty() -> None:
    assert group_issues([]) == {}


def test_severity_counts_ignores_unknown_severities() -> None:
    issues = [
        IssueRecord("Empty Link", "error"),
        IssueRecord("Empty Link", "error"),
        IssueRecord("Missing H1", "warning"),
        IssueRecord("Missing Main Landmark", "info"),
        IssueRecord("Positive Tabindex", "serious"),
    ]
    assert severity_counts(issues) == {"error": 2, "warning": 1, "info": 1}


def test_groups_by_severity_orders_errors_first() -> None:
    groups = [
        IssueGroup("Missing Main Landmark", "info", 1),
        IssueGroup("Zoom Disabled", "serious", 1),
        IssueGroup("Skipped Heading Level", "warning", 2),
        IssueGroup("Missing Alt Text", "error", 4),
        IssueGroup("Empty Link", "error", 1),
    ]
    ordered = [group.type for group in groups_by_severity(groups)]
    assert ordered == [
        "Empty Link",
        "Missing Alt Text",
        "Skipped Heading Level",
        "Missing Main Landmark",
        "Zoom Disabled",
    ]

"""Issue grouping by type."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from a11y_score.issues import SEVERITIES, IssueRecord

_SEVERITY_ORDER = {severity: index for index, severity in enumerate(SEVERITIES)}


@dataclass(frozen=True, slots=True)
class IssueGroup:
    """All records of one issue type."""

    type: str
    severity: str
    count: int


def group_issues(issues: Iterable[IssueRecord]) -> dict[str, IssueGroup]:
    """Group records by type; severity comes from the first record of each type."""
    first_severity: dict[str, str] = {}
    counts: dict[str, int] = {}
    for issue in issues:
        if issue.type not in counts:
            first_severity[issue.type] = issue.severity
            counts[issue.type] = 0
        counts[issue.type] += 1

    return {
        issue_type: IssueGroup(
            type=issue_type,
            severity=first_severity[issue_type],
            count=count,
        )
        for issue_type, count in counts.items()
    }


def severity_counts(issues: Iterable[IssueRecord]) -> dict[str, int]:
    """Count records per known severity."""
    tallies = {severity: 0 for severity in SEVERITIES}
    for issue in issues:
        if issue.severity in tallies:
            tallies[issue.severity] += 1
    return tallies


def groups_by_severity(groups: Iterable[IssueGroup]) -> list[IssueGroup]:
    """Order groups error, warning, info, then anything else; type name breaks ties."""
    unknown_rank = len(_SEVERITY_ORDER)
    return sorted(
        groups,
        key=lambda group: (_SEVERITY_ORDER.get(group.severity, unknown_rank), group.type),
    )

"""Output rendering."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import click

from a11y_score import __version__
from a11y_score.aggregator import group_issues, groups_by_severity, severity_counts
from a11y_score.breakdown import Breakdown
from a11y_score.catalogue import DEFAULT_CATALOGUE, RuleMeta
from a11y_score.fixes import fix_for
from a11y_score.issues import ScanResult
from a11y_score.scoring import ScoreResult

LEVEL_LABELS = {
    "AA": "likely AA conformant",
    "AA*": "AA with advisory caveats",
    "A": "level A only",
    "Failing": "not conforming",
}


def render_human(result: ScoreResult, breakdown: Breakdown) -> str:
    """Render a compact colorized summary."""
    color = _grade_color(result.grade)
    level_label = LEVEL_LABELS.get(result.level, result.level)
    lines: list[str] = [
        click.style(
            f"Accessibility score: {result.score}/100 (grade {result.grade})",
            fg=color,
            bold=True,
        ),
        f"WCAG level: {result.level} ({level_label})",
    ]

    if breakdown.rows:
        lines.append(click.style("Score breakdown:", bold=True))
        for row in breakdown.rows:
            shown = row.display()
            lines.append(
                f"- {row.type} ({row.level} {row.severity}) x{row.count}: "
                f"-{shown['base']} base, -{shown['bonus']} volume, -{shown['total']} total"
            )
    lines.append(breakdown.summary_line())
    return "\n".join(lines)


def render_json(
    result: ScoreResult,
    breakdown: Breakdown,
    scan: ScanResult,
    *,
    input_source: str,
    catalogue: Mapping[str, RuleMeta] | None = None,
) -> str:
    """Render stable JSON output for CI and automation."""
    payload = build_json_payload(
        result,
        breakdown,
        scan,
        input_source=input_source,
        catalogue=catalogue,
    )
    return json.dumps(payload, sort_keys=True)


def build_json_payload(
    result: ScoreResult,
    breakdown: Breakdown,
    scan: ScanResult,
    *,
    input_source: str,
    catalogue: Mapping[str, RuleMeta] | None = None,
) -> dict[str, Any]:
    """Build stable JSON payload for export."""
    active_catalogue = DEFAULT_CATALOGUE if catalogue is None else catalogue
    meta: dict[str, Any] = {
        "generated_at": datetime.now(tz=UTC)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z"),
        "input_source": input_source,
        "page_title": scan.page_title,
        "element_counts": scan.element_counts.to_dict(),
        "version": __version__,
    }

    return {
        **result.to_dict(),
        "raw_score": result.raw_score,
        "ceiling": result.ceiling,
        "tallies": result.tallies.to_dict(),
        "severity_counts": severity_counts(scan.issues),
        "breakdown": breakdown.to_dict(),
        "issue_groups": _serialize_groups(scan, active_catalogue),
        "meta": meta,
    }


def _serialize_groups(
    scan: ScanResult,
    catalogue: Mapping[str, RuleMeta],
) -> list[dict[str, Any]]:
    serialized: list[dict[str, Any]] = []
    for group in groups_by_severity(group_issues(scan.issues).values()):
        meta = catalogue.get(group.type)
        fix = fix_for(group.type)
        serialized.append(
            {
                "type": group.type,
                "severity": group.severity,
                "count": group.count,
                "criterion": meta.criterion if meta is not None else None,
                "level": meta.level if meta is not None else None,
                "fix": fix.to_dict() if fix is not None else None,
            }
        )
    return serialized


def _grade_color(grade: str) -> str:
    if grade.startswith("A"):
        return "green"
    if grade.startswith("B") or grade.startswith("C"):
        return "yellow"
    return "red"

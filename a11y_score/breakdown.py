"""Per-type deduction breakdown for export."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from a11y_score.aggregator import group_issues
from a11y_score.catalogue import DEFAULT_CATALOGUE, RuleMeta
from a11y_score.deductions import Deduction, deductions_for, sum_deductions
from a11y_score.issues import IssueRecord
from a11y_score.scoring import PERFECT_SCORE, ScoreResult, score_issues

MAX_DISPLAY_DEDUCTION = 100.0


@dataclass(frozen=True, slots=True)
class BreakdownRow:
    """One breakdown table row."""

    type: str
    count: int
    severity: str
    level: str
    criterion: str
    base: float
    bonus: float
    total: float

    def display(self) -> dict[str, object]:
        """Row with numeric fields formatted to one decimal."""
        return {
            "type": self.type,
            "count": self.count,
            "severity": self.severity,
            "level": self.level,
            "criterion": self.criterion,
            "base": _fmt(self.base),
            "bonus": _fmt(self.bonus),
            "total": _fmt(self.total),
        }


@dataclass(frozen=True, slots=True)
class Breakdown:
    """Breakdown rows plus the totals line."""

    rows: tuple[BreakdownRow, ...]
    total_deduction: float
    final_score: int

    @property
    def capped_total_deduction(self) -> float:
        return min(MAX_DISPLAY_DEDUCTION, self.total_deduction)

    def summary_line(self) -> str:
        return (
            f"Total deduction: -{_fmt(self.capped_total_deduction)} "
            f"→ final score {self.final_score}/{PERFECT_SCORE}"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "rows": [row.display() for row in self.rows],
            "total_deduction": _fmt(self.capped_total_deduction),
            "final_score": self.final_score,
        }


def build_breakdown(
    issues: Sequence[IssueRecord],
    *,
    catalogue: Mapping[str, RuleMeta] | None = None,
    result: ScoreResult | None = None,
) -> Breakdown:
    """Build breakdown rows sorted by descending deduction.

    Pass ``result`` when the issues were already scored with the same
    catalogue; otherwise the reducer is run here.
    """
    active_catalogue = DEFAULT_CATALOGUE if catalogue is None else catalogue
    deductions = deductions_for(group_issues(issues), active_catalogue)
    if result is None:
        result = score_issues(issues, catalogue=active_catalogue)

    rows = [_row(item) for item in deductions]
    # Deductions arrive ordered by type; the stable sort keeps that for ties.
    rows.sort(key=lambda row: row.total, reverse=True)
    return Breakdown(
        rows=tuple(rows),
        total_deduction=sum_deductions(deductions),
        final_score=result.score,
    )


def _row(deduction: Deduction) -> BreakdownRow:
    return BreakdownRow(
        type=deduction.type,
        count=deduction.count,
        severity=deduction.severity,
        level=deduction.level,
        criterion=deduction.criterion,
        base=deduction.base,
        bonus=deduction.bonus,
        total=deduction.total,
    )


def _fmt(value: float) -> str:
    return f"{value:.1f}"

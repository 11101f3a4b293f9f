"""Score reduction: deductions, ceilings, and conformance level."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from a11y_score.aggregator import group_issues
from a11y_score.catalogue import DEFAULT_CATALOGUE, RuleMeta
from a11y_score.deductions import deductions_for, sum_deductions
from a11y_score.grades import grade_for_score
from a11y_score.issues import SEVERITIES, ElementCounts, IssueRecord, ScanResult

_LOG = logging.getLogger(__name__)

PERFECT_SCORE = 100

# (minimum level-A error count, ceiling), checked top-down.
LEVEL_A_CEILINGS: tuple[tuple[int, int], ...] = (
    (10, 69),
    (4, 79),
    (2, 84),
    (1, 91),
)
LEVEL_AA_CEILING = 94


class ScoringError(ValueError):
    """Input rejected by strict scoring."""


class UnknownIssueTypeError(ScoringError):
    """Issue type has no catalogue entry."""


class InvalidSeverityError(ScoringError):
    """Issue severity is outside the supported set."""


@dataclass(frozen=True, slots=True)
class LevelTallies:
    """Record counts driving the conformance level and ceiling."""

    level_a_errors: int = 0
    level_aa_errors: int = 0
    level_a_advisory: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "level_a_errors": self.level_a_errors,
            "level_aa_errors": self.level_aa_errors,
            "level_a_advisory": self.level_a_advisory,
        }


@dataclass(slots=True)
class ScoreResult:
    """Final score, grade, and conformance level for one scan."""

    score: int
    grade: str
    level: str
    total_deduction: float = 0.0
    raw_score: int = PERFECT_SCORE
    ceiling: int | None = None
    tallies: LevelTallies = field(default_factory=LevelTallies)

    def to_dict(self) -> dict[str, object]:
        return {"score": self.score, "grade": self.grade, "level": self.level}


def score_issues(
    issues: Sequence[IssueRecord],
    element_counts: ElementCounts | None = None,
    *,
    catalogue: Mapping[str, RuleMeta] | None = None,
    strict: bool = False,
) -> ScoreResult:
    """Reduce issue records to a score, grade, and conformance level.

    ``element_counts`` is accepted for callers that still pass it; the
    deduction model does not normalize by page size.
    """
    active_catalogue = DEFAULT_CATALOGUE if catalogue is None else catalogue
    if element_counts is not None:
        _LOG.debug("element counts ignored by deduction model: %s", element_counts.to_dict())

    if not issues:
        return ScoreResult(score=PERFECT_SCORE, grade="A+", level="AA")

    if strict:
        validate_issues(issues, active_catalogue)

    groups = group_issues(issues)
    unknown_types = sorted(
        issue_type for issue_type in groups if issue_type not in active_catalogue
    )
    if unknown_types:
        _LOG.debug("skipping issue types without catalogue entry: %s", ", ".join(unknown_types))

    total_deduction = sum_deductions(deductions_for(groups, active_catalogue))
    raw_score = max(0, _round_half_up(PERFECT_SCORE - total_deduction))

    tallies = tally_levels(issues, active_catalogue)
    level = conformance_level(tallies)
    ceiling = score_ceiling(tallies)
    final_score = raw_score if ceiling is None else min(raw_score, ceiling)
    if ceiling is not None and final_score < raw_score:
        _LOG.debug("score %d capped at %d by ceiling policy", raw_score, ceiling)

    return ScoreResult(
        score=final_score,
        grade=grade_for_score(final_score),
        level=level,
        total_deduction=total_deduction,
        raw_score=raw_score,
        ceiling=ceiling,
        tallies=tallies,
    )


def score_scan(
    scan: ScanResult,
    *,
    catalogue: Mapping[str, RuleMeta] | None = None,
    strict: bool = False,
) -> ScoreResult:
    """Score a full scan payload."""
    return score_issues(
        scan.issues,
        scan.element_counts,
        catalogue=catalogue,
        strict=strict,
    )


def tally_levels(
    issues: Sequence[IssueRecord],
    catalogue: Mapping[str, RuleMeta],
) -> LevelTallies:
    """Count error/advisory records per conformance level.

    Types without a catalogue entry have no level and are never tallied.
    """
    level_a_errors = 0
    level_aa_errors = 0
    level_a_advisory = 0
    for issue in issues:
        meta = catalogue.get(issue.type)
        if meta is None:
            continue
        if issue.severity == "error":
            if meta.level == "A":
                level_a_errors += 1
            elif meta.level == "AA":
                level_aa_errors += 1
        elif meta.level == "A":
            level_a_advisory += 1
    return LevelTallies(
        level_a_errors=level_a_errors,
        level_aa_errors=level_aa_errors,
        level_a_advisory=level_a_advisory,
    )


def conformance_level(tallies: LevelTallies) -> str:
    """Estimate the conformance level met."""
    if tallies.level_a_errors == 0 and tallies.level_aa_errors == 0:
        return "AA" if tallies.level_a_advisory == 0 else "AA*"
    if tallies.level_a_errors == 0:
        return "A"
    return "Failing"


def score_ceiling(tallies: LevelTallies) -> int | None:
    """Upper bound on the score implied by error tallies, if any."""
    for minimum, ceiling in LEVEL_A_CEILINGS:
        if tallies.level_a_errors >= minimum:
            return ceiling
    if tallies.level_aa_errors > 0:
        return LEVEL_AA_CEILING
    return None


def validate_issues(issues: Sequence[IssueRecord], catalogue: Mapping[str, RuleMeta]) -> None:
    """Reject unknown types and severities; used by strict scoring."""
    for index, issue in enumerate(issues):
        if issue.type not in catalogue:
            raise UnknownIssueTypeError(f"issues[{index}]: unknown issue type '{issue.type}'")
        if issue.severity not in SEVERITIES:
            choices = ", ".join(SEVERITIES)
            raise InvalidSeverityError(
                f"issues[{index}]: severity '{issue.severity}' must be one of: {choices}"
            )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)

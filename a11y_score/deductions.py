"""Per-type deduction model with square-root volume dampening.

Every consumer of deduction numbers (the live score and the exported
breakdown) goes through ``compute_deduction`` and ``sum_deductions`` so the
two can never disagree.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from a11y_score.aggregator import IssueGroup
from a11y_score.catalogue import RuleMeta

# Tuning note:
# - base coefficients set how much a violated criterion costs at all.
# - VOLUME_FACTOR scales the instance penalty; sqrt keeps 64 instances at
#   4x the cost of 4 instances rather than 16x.
# Quick reference for weight=10, error, level A:
# count=1 -> 10.2, count=4 -> 12.4, count=16 -> 16.8, count=64 -> 25.6
BASE_COEFFICIENTS: dict[tuple[str, str], tuple[float, float]] = {
    ("error", "A"): (4.0, 0.4),
    ("error", "AA"): (2.0, 0.3),
    ("warning", "A"): (1.5, 0.2),
    ("warning", "AA"): (1.0, 0.15),
}

FALLBACK_BASE = 0.5
VOLUME_FACTOR = 0.22


@dataclass(frozen=True, slots=True)
class Deduction:
    """Deduction for one matched issue group."""

    type: str
    severity: str
    level: str
    criterion: str
    weight: int
    count: int
    base: float
    bonus: float

    @property
    def total(self) -> float:
        return self.base + self.bonus


def base_deduction(severity: str, level: str, weight: int) -> float:
    """Presence penalty for violating a criterion at all."""
    coefficients = BASE_COEFFICIENTS.get((severity, level))
    if coefficients is None:
        return FALLBACK_BASE
    offset, factor = coefficients
    return offset + weight * factor


def volume_penalty(weight: int, count: int) -> float:
    """Sub-linear instance penalty."""
    return (weight * VOLUME_FACTOR) * math.sqrt(count)


def compute_deduction(group: IssueGroup, meta: RuleMeta) -> Deduction:
    """Compute the deduction for ``group`` under its catalogue entry."""
    return Deduction(
        type=group.type,
        severity=group.severity,
        level=meta.level,
        criterion=meta.criterion,
        weight=meta.weight,
        count=group.count,
        base=base_deduction(group.severity, meta.level, meta.weight),
        bonus=volume_penalty(meta.weight, group.count),
    )


def deductions_for(
    groups: Mapping[str, IssueGroup],
    catalogue: Mapping[str, RuleMeta],
) -> list[Deduction]:
    """Deductions for every group with a catalogue entry, ordered by type name."""
    deductions: list[Deduction] = []
    for issue_type in sorted(groups):
        meta = catalogue.get(issue_type)
        if meta is None:
            continue
        deductions.append(compute_deduction(groups[issue_type], meta))
    return deductions


def sum_deductions(deductions: Iterable[Deduction]) -> float:
    """Exact, order-independent total of deduction values."""
    return math.fsum(item.total for item in deductions)

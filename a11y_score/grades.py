"""Letter grades for final scores."""

from __future__ import annotations

# Inclusive lower bounds, checked top-down.
GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (97, "A+"),
    (93, "A"),
    (90, "A-"),
    (87, "B+"),
    (83, "B"),
    (80, "B-"),
    (77, "C+"),
    (73, "C"),
    (70, "C-"),
    (60, "D"),
)
FAILING_GRADE = "F"


def grade_for_score(score: int) -> str:
    """Map a 0-100 score to its letter grade."""
    for lower_bound, grade in GRADE_THRESHOLDS:
        if score >= lower_bound:
            return grade
    return FAILING_GRADE

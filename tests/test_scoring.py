"""Tests for score reduction, ceilings, and conformance levels."""

from __future__ import annotations

import logging
import random

import pytest

from a11y_score.catalogue import build_catalogue
from a11y_score.issues import ElementCounts, IssueRecord, ScanResult
from a11y_score.scoring import (
    InvalidSeverityError,
    LevelTallies,
    ScoringError,
    UnknownIssueTypeError,
    conformance_level,
    score_ceiling,
    score_issues,
    score_scan,
    tally_levels,
)


def test_empty_issue_list_is_perfect() -> None:
    result = score_issues([])
    assert (result.score, result.grade, result.level) == (100, "A+", "AA")
    assert result.total_deduction == 0.0
    assert result.ceiling is None


def test_single_level_a_error_is_capped_at_91() -> None:
    result = score_issues([_issue("Missing Alt Text", "error")])
    assert result.total_deduction == pytest.approx(10.2)
    assert result.raw_score == 90
    assert result.ceiling == 91
    assert result.score == 90
    assert result.score <= 91
    assert result.grade == "A-"
    assert result.level == "Failing"


def test_ceiling_lowers_a_high_raw_score() -> None:
    result = score_issues([_issue("Multiple H1s", "error")])
    assert result.raw_score == 93
    assert result.score == 91
    assert result.grade == "A-"


def test_ceiling_is_an_upper_bound_not_a_floor() -> None:
    issues = [_issue("Missing Alt Text", "error")] + _many("Low Color Contrast", "warning", 100)
    result = score_issues(issues)
    assert result.total_deduction == pytest.approx(30.0)
    assert result.ceiling == 91
    assert result.raw_score == 70
    assert result.score == 70
    assert result.grade == "C-"


@pytest.mark.parametrize(
    ("count", "expected_ceiling", "expected_score"),
    [
        (2, 84, 84),
        (3, 84, 84),
        (4, 79, 79),
        (9, 79, 79),
        (10, 69, 69),
    ],
)
def test_graduated_level_a_ceilings(
    count: int, expected_ceiling: int, expected_score: int
) -> None:
    result = score_issues(_many("Multiple H1s", "error", count))
    assert result.raw_score > expected_ceiling
    assert result.ceiling == expected_ceiling
    assert result.score == expected_score
    assert result.level == "Failing"


def test_level_aa_error_caps_at_94() -> None:
    result = score_issues([_issue("Missing H1", "error")])
    assert result.raw_score == 95
    assert result.ceiling == 94
    assert result.score == 94
    assert result.grade == "A"
    assert result.level == "A"


def test_single_level_a_warning_is_aa_star() -> None:
    result = score_issues([_issue("Skipped Heading Level", "warning")])
    assert result.tallies == LevelTallies(level_a_errors=0, level_aa_errors=0, level_a_advisory=1)
    assert result.level == "AA*"
    assert result.ceiling is None
    assert result.score == 96


def test_info_on_level_aa_does_not_affect_level() -> None:
    result = score_issues([_issue("Missing Main Landmark", "info")])
    assert result.total_deduction == pytest.approx(1.82)
    assert result.score == 98
    assert result.level == "AA"


def test_unknown_type_only_is_ignored() -> None:
    result = score_issues([_issue("Blinking Marquee", "error")])
    assert result.total_deduction == 0.0
    assert result.raw_score == 100
    assert (result.score, result.grade, result.level) == (100, "A+", "AA")


def test_unknown_type_skip_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="a11y_score.scoring")
    score_issues([_issue("Blinking Marquee", "error"), _issue("Missing H1", "error")])
    assert any("Blinking Marquee" in record.getMessage() for record in caplog.records)


def test_malformed_severity_uses_fallback_base() -> None:
    result = score_issues([_issue("Missing Alt Text", "critical")])
    assert result.total_deduction == pytest.approx(2.7)
    assert result.score == 97
    assert result.level == "AA*"


def test_uppercase_severity_is_not_an_error() -> None:
    result = score_issues([_issue("Missing Alt Text", "ERROR")])
    assert result.tallies == LevelTallies(level_a_advisory=1)
    assert (result.score, result.level) == (97, "AA*")


def test_score_result_to_dict_has_score_grade_level() -> None:
    result = score_issues([_issue("Missing Alt Text", "error")])
    assert result.to_dict() == {"score": 90, "grade": "A-", "level": "Failing"}


def test_score_clamps_to_zero() -> None:
    issues = (
        _many("Missing Alt Text", "error", 100)
        + _many("Input Without Label", "error", 100)
        + _many("Empty Link", "error", 100)
        + _many("Missing Page Title", "error", 100)
    )
    result = score_issues(issues)
    assert result.total_deduction == pytest.approx(114.8)
    assert result.raw_score == 0
    assert result.score == 0
    assert result.grade == "F"


def test_element_counts_do_not_change_score() -> None:
    issues = [_issue("Empty Link", "error"), _issue("Missing H1", "error")]
    baseline = score_issues(issues)
    with_counts = score_issues(issues, ElementCounts(images=400, links=2000, inputs=8, buttons=3))
    assert baseline == with_counts


def test_deterministic_under_permutation() -> None:
    issues = (
        _many("Empty Link", "error", 7)
        + _many("Low Color Contrast", "error", 3)
        + _many("Skipped Heading Level", "warning", 2)
        + [_issue("Unknown Thing", "info")]
    )
    baseline = score_issues(issues)
    shuffled = list(issues)
    random.Random(7).shuffle(shuffled)

    assert score_issues(issues) == baseline
    assert score_issues(shuffled) == baseline


def test_group_severity_comes_from_first_record() -> None:
    error_first = score_issues(
        [_issue("Empty Link", "error"), _issue("Empty Link", "warning")]
    )
    warning_first = score_issues(
        [_issue("Empty Link", "warning"), _issue("Empty Link", "error")]
    )
    assert error_first.total_deduction > warning_first.total_deduction
    # Tallies count each record by its own severity.
    assert error_first.tallies == warning_first.tallies


def test_injected_catalogue_scores_custom_type() -> None:
    catalogue = build_catalogue(
        overrides={
            "Missing Skip Link": {"criterion": "2.4.1 Bypass Blocks", "level": "A", "weight": 6}
        }
    )
    default_result = score_issues([_issue("Missing Skip Link", "error")])
    custom_result = score_issues([_issue("Missing Skip Link", "error")], catalogue=catalogue)

    assert default_result.score == 100
    assert custom_result.total_deduction == pytest.approx(6.4 + 1.32)
    assert custom_result.level == "Failing"


def test_strict_mode_rejects_unknown_type() -> None:
    with pytest.raises(UnknownIssueTypeError, match="Blinking Marquee"):
        score_issues([_issue("Blinking Marquee", "error")], strict=True)


def test_strict_mode_rejects_bad_severity() -> None:
    with pytest.raises(InvalidSeverityError):
        score_issues([_issue("Missing Alt Text", "critical")], strict=True)
    assert issubclass(ScoringError, ValueError)


def test_score_scan_uses_scan_issues() -> None:
    scan = ScanResult(
        issues=[_issue("Missing Language Attribute", "error")],
        element_counts=ElementCounts(images=1),
        page_title="Home",
    )
    assert score_scan(scan) == score_issues(scan.issues)


def test_conformance_level_ladder() -> None:
    assert conformance_level(LevelTallies()) == "AA"
    assert conformance_level(LevelTallies(level_a_advisory=3)) == "AA*"
    assert conformance_level(LevelTallies(level_aa_errors=1, level_a_advisory=2)) == "A"
    assert conformance_level(LevelTallies(level_a_errors=1, level_aa_errors=5)) == "Failing"


def test_score_ceiling_prefers_level_a_errors() -> None:
    assert score_ceiling(LevelTallies()) is None
    assert score_ceiling(LevelTallies(level_a_advisory=4)) is None
    assert score_ceiling(LevelTallies(level_aa_errors=12)) == 94
    assert score_ceiling(LevelTallies(level_a_errors=1, level_aa_errors=12)) == 91


def test_tally_levels_ignores_unknown_types() -> None:
    issues = [
        _issue("Missing Alt Text", "error"),
        _issue("Low Color Contrast", "error"),
        _issue("Positive Tabindex", "warning"),
        _issue("Missing H1", "warning"),
        _issue("Not In Catalogue", "error"),
    ]
    tallies = tally_levels(issues, build_catalogue())
    assert tallies == LevelTallies(level_a_errors=1, level_aa_errors=1, level_a_advisory=1)


def _issue(issue_type: str, severity: str) -> IssueRecord:
    return IssueRecord(type=issue_type, severity=severity, description=f"{issue_type} found")


def _many(issue_type: str, severity: str, count: int) -> list[IssueRecord]:
    return [_issue(issue_type, severity) for _ in range(count)]

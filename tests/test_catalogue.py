"""Tests for the rule catalogue."""

from __future__ import annotations

import pytest

from a11y_score.catalogue import DEFAULT_CATALOGUE, RuleMeta, build_catalogue, list_rule_info


def test_default_catalogue_entries_are_valid() -> None:
    assert len(DEFAULT_CATALOGUE) == 23
    for meta in DEFAULT_CATALOGUE.values():
        assert meta.level in {"A", "AA"}
        assert 5 <= meta.weight <= 10
    assert DEFAULT_CATALOGUE["Missing Alt Text"] == RuleMeta("1.1.1 Non-text Content", "A", 10)
    assert DEFAULT_CATALOGUE["Low Color Contrast"].level == "AA"


def test_default_catalogue_is_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_CATALOGUE["Missing Alt Text"] = RuleMeta("x", "A", 5)  # type: ignore[index]


def test_build_catalogue_patches_fields_without_touching_default() -> None:
    catalogue = build_catalogue(overrides={"Missing H1": {"level": "A", "weight": 7}})
    assert catalogue["Missing H1"] == RuleMeta("2.4.6 Headings and Labels", "A", 7)
    assert DEFAULT_CATALOGUE["Missing H1"].level == "AA"


def test_build_catalogue_adds_new_type() -> None:
    catalogue = build_catalogue(
        overrides={
            "Autoplaying Media": {"criterion": "1.4.2 Audio Control", "level": "A", "weight": 8}
        }
    )
    assert catalogue["Autoplaying Media"].criterion == "1.4.2 Audio Control"
    assert len(catalogue) == 24


def test_build_catalogue_new_type_requires_all_fields() -> None:
    with pytest.raises(ValueError, match="need level, weight"):
        build_catalogue(overrides={"Autoplaying Media": {"criterion": "1.4.2 Audio Control"}})


@pytest.mark.parametrize(
    "fields",
    [{"weight": 4}, {"weight": 11}, {"level": "AAA"}, {"weight": "9"}, {"colour": "red"}],
)
def test_build_catalogue_rejects_invalid_overrides(fields: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        build_catalogue(overrides={"Empty Link": fields})


def test_build_catalogue_disable_removes_type() -> None:
    catalogue = build_catalogue(disabled=["Multiple H1s"])
    assert "Multiple H1s" not in catalogue
    assert len(catalogue) == 22


def test_build_catalogue_rejects_unknown_disabled_type() -> None:
    with pytest.raises(ValueError, match="Blinking Marquee"):
        build_catalogue(disabled=["Blinking Marquee"])


def test_list_rule_info_sorted_by_level_then_weight() -> None:
    rows = list_rule_info()
    assert len(rows) == 23
    assert rows[0].level == "A"
    assert rows[0].weight == 10
    assert [row.issue_type for row in rows[:2]] == ["Input Without Label", "Missing Alt Text"]
    assert rows[-1].level == "AA"
    assert rows[-1].weight == 5

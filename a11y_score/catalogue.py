"""Rule catalogue: issue type to conformance metadata."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

LEVELS: tuple[str, ...] = ("A", "AA")
MIN_WEIGHT = 5
MAX_WEIGHT = 10


@dataclass(frozen=True, slots=True)
class RuleMeta:
    """Conformance metadata for one issue type."""

    criterion: str
    level: str
    weight: int

    def to_dict(self) -> dict[str, Any]:
        return {"criterion": self.criterion, "level": self.level, "weight": self.weight}


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Catalogue row for listing."""

    issue_type: str
    criterion: str
    level: str
    weight: int


Catalogue = Mapping[str, RuleMeta]

_DEFAULT_ENTRIES: dict[str, RuleMeta] = {
    "Missing Alt Text": RuleMeta("1.1.1 Non-text Content", "A", 10),
    "Empty Link": RuleMeta("2.4.4 Link Purpose (In Context)", "A", 9),
    "Misplaced Accessible Name": RuleMeta("4.1.2 Name, Role, Value", "A", 7),
    "Input Without Label": RuleMeta("1.3.1 Info and Relationships", "A", 10),
    "Missing Language Attribute": RuleMeta("3.1.1 Language of Page", "A", 8),
    "Button Without Accessible Name": RuleMeta("4.1.2 Name, Role, Value", "A", 9),
    "Missing H1": RuleMeta("2.4.6 Headings and Labels", "AA", 6),
    "Multiple H1s": RuleMeta("1.3.1 Info and Relationships", "A", 5),
    "Skipped Heading Level": RuleMeta("1.3.1 Info and Relationships", "A", 6),
    "Missing Page Title": RuleMeta("2.4.2 Page Titled", "A", 9),
    "Missing Main Landmark": RuleMeta("1.3.6 Identify Purpose", "AA", 6),
    "Missing Navigation Landmark": RuleMeta("1.3.6 Identify Purpose", "AA", 5),
    "Multiple Main Landmarks": RuleMeta("1.3.6 Identify Purpose", "AA", 5),
    "Positive Tabindex": RuleMeta("2.4.3 Focus Order", "A", 7),
    "Keyboard Inaccessible Element": RuleMeta("2.1.1 Keyboard", "A", 9),
    "Low Color Contrast": RuleMeta("1.4.3 Contrast (Minimum)", "AA", 8),
    "Suspicious Empty Alt Text": RuleMeta("1.1.1 Non-text Content", "A", 7),
    "Focusable Element Removed from Tab Order": RuleMeta("2.1.1 Keyboard", "A", 8),
    "Custom Widget Missing Tabindex": RuleMeta("2.1.1 Keyboard", "A", 8),
    "Missing aria-expanded on Toggle": RuleMeta("4.1.2 Name, Role, Value", "A", 7),
    "Dialog Missing Focus Management": RuleMeta("2.1.2 No Keyboard Trap", "A", 9),
    "Custom Dropdown Missing Keyboard Support": RuleMeta("2.1.1 Keyboard", "A", 8),
    "Missing Keyboard Handler on Interactive Element": RuleMeta("2.1.1 Keyboard", "A", 9),
}

DEFAULT_CATALOGUE: Catalogue = MappingProxyType(_DEFAULT_ENTRIES)


def build_catalogue(
    *,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
    disabled: list[str] | None = None,
    base: Catalogue = DEFAULT_CATALOGUE,
) -> Catalogue:
    """Build a read-only catalogue from ``base`` plus overrides.

    Overrides patch individual fields of known types; an override for a type
    absent from ``base`` must supply ``criterion``, ``level`` and ``weight``.
    Disabled types are removed and therefore score nothing.
    """
    entries = dict(base)

    unknown_disabled = [item for item in disabled or [] if item not in entries]
    if unknown_disabled:
        joined = ", ".join(sorted(set(unknown_disabled)))
        raise ValueError(f"Unknown issue types in disable list: {joined}")

    for issue_type, fields in (overrides or {}).items():
        current = entries.get(issue_type)
        entries[issue_type] = _apply_override(issue_type, current, fields)

    for issue_type in disabled or []:
        entries.pop(issue_type, None)

    for issue_type, meta in entries.items():
        validate_rule_meta(issue_type, meta)
    return MappingProxyType(entries)


def validate_rule_meta(issue_type: str, meta: RuleMeta) -> None:
    """Raise ValueError if ``meta`` is outside the supported level/weight ranges."""
    if meta.level not in LEVELS:
        choices = ", ".join(LEVELS)
        raise ValueError(f"{issue_type}: level must be one of: {choices}")
    if isinstance(meta.weight, bool) or not isinstance(meta.weight, int):
        raise ValueError(f"{issue_type}: weight must be an integer")
    if not MIN_WEIGHT <= meta.weight <= MAX_WEIGHT:
        raise ValueError(
            f"{issue_type}: weight must be between {MIN_WEIGHT} and {MAX_WEIGHT}, "
            f"got {meta.weight}"
        )


def list_rule_info(catalogue: Catalogue | None = None) -> list[RuleInfo]:
    """Return catalogue rows sorted by level, descending weight, then type."""
    active = DEFAULT_CATALOGUE if catalogue is None else catalogue
    rows = [
        RuleInfo(
            issue_type=issue_type,
            criterion=meta.criterion,
            level=meta.level,
            weight=meta.weight,
        )
        for issue_type, meta in active.items()
    ]
    rows.sort(key=lambda row: (row.level, -row.weight, row.issue_type))
    return rows


def _apply_override(
    issue_type: str,
    current: RuleMeta | None,
    fields: Mapping[str, Any],
) -> RuleMeta:
    unknown_keys = sorted(set(fields) - {"criterion", "level", "weight"})
    if unknown_keys:
        raise ValueError(f"{issue_type}: unknown override keys: {', '.join(unknown_keys)}")

    if current is None:
        missing = [key for key in ("criterion", "level", "weight") if key not in fields]
        if missing:
            raise ValueError(
                f"{issue_type}: new catalogue entries need {', '.join(missing)}"
            )
        return RuleMeta(
            criterion=_as_str(fields["criterion"], f"{issue_type}.criterion"),
            level=_as_str(fields["level"], f"{issue_type}.level"),
            weight=fields["weight"],
        )

    patched = current
    if "criterion" in fields:
        criterion = _as_str(fields["criterion"], f"{issue_type}.criterion")
        patched = replace(patched, criterion=criterion)
    if "level" in fields:
        patched = replace(patched, level=_as_str(fields["level"], f"{issue_type}.level"))
    if "weight" in fields:
        patched = replace(patched, weight=fields["weight"])
    return patched


def _as_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value

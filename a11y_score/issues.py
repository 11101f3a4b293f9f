"""Issue records and scan payload parsing."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

SEVERITIES: tuple[str, ...] = ("error", "warning", "info")
ELEMENT_COUNT_KEYS: tuple[str, ...] = ("images", "links", "inputs", "buttons")


@dataclass(frozen=True, slots=True)
class IssueRecord:
    """A single detected defect instance.

    ``severity`` is kept as a plain string: values outside ``SEVERITIES``
    are carried through and scored with the generic base deduction.
    """

    type: str
    severity: str
    description: str = ""
    tag: str | None = None


@dataclass(frozen=True, slots=True)
class ElementCounts:
    """Element totals reported alongside a scan."""

    images: int = 0
    links: int = 0
    inputs: int = 0
    buttons: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "images": self.images,
            "links": self.links,
            "inputs": self.inputs,
            "buttons": self.buttons,
        }


@dataclass(slots=True)
class ScanResult:
    """Materialized output of one document scan."""

    issues: list[IssueRecord] = field(default_factory=list)
    element_counts: ElementCounts = field(default_factory=ElementCounts)
    page_title: str | None = None

    @property
    def total_issues(self) -> int:
        return len(self.issues)


def load_scan_text(text: str) -> ScanResult:
    """Parse JSON scan payload text."""
    try:
        loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid scan JSON: {exc}") from exc
    if isinstance(loaded, list):
        # Bare issue lists are accepted as a scan without element counts.
        loaded = {"issues": loaded}
    if not isinstance(loaded, dict):
        raise ValueError("Scan payload must be a JSON object or a list of issues")
    return parse_scan_payload(loaded)


def parse_scan_payload(mapping: dict[str, Any]) -> ScanResult:
    """Build a ScanResult from a decoded scan payload."""
    raw_issues = mapping.get("issues", [])
    if not isinstance(raw_issues, list):
        raise ValueError("issues must be a list")

    issues = [_parse_issue(item, f"issues[{index}]") for index, item in enumerate(raw_issues)]

    raw_counts = mapping.get("elementCounts", mapping.get("element_counts"))
    element_counts = _parse_element_counts(raw_counts)

    page_title = mapping.get("pageTitle", mapping.get("page_title"))
    if page_title is not None and not isinstance(page_title, str):
        raise ValueError("pageTitle must be a string")

    return ScanResult(issues=issues, element_counts=element_counts, page_title=page_title)


def _parse_issue(value: Any, field_name: str) -> IssueRecord:
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be an object")

    issue_type = value.get("type")
    if not isinstance(issue_type, str) or not issue_type:
        raise ValueError(f"{field_name}.type must be a non-empty string")

    severity = value.get("severity")
    if not isinstance(severity, str):
        raise ValueError(f"{field_name}.severity must be a string")

    description = value.get("description", "")
    if description is None:
        description = ""
    if not isinstance(description, str):
        raise ValueError(f"{field_name}.description must be a string")

    tag = value.get("tag")
    if tag is not None and not isinstance(tag, str):
        raise ValueError(f"{field_name}.tag must be a string")

    return IssueRecord(
        type=issue_type,
        severity=severity,
        description=description,
        tag=tag,
    )


def _parse_element_counts(value: Any) -> ElementCounts:
    if value is None:
        return ElementCounts()
    if not isinstance(value, dict):
        raise ValueError("elementCounts must be an object")

    counts: dict[str, int] = {}
    for key in ELEMENT_COUNT_KEYS:
        raw = value.get(key, 0)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            raise ValueError(f"elementCounts.{key} must be a non-negative integer")
        counts[key] = raw
    return ElementCounts(**counts)

"""Configuration loading for a11y-score."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from a11y_score.catalogue import Catalogue, build_catalogue

CONFIG_FILENAMES = (".a11y-score.toml", "a11y-score.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("a11y_score", "a11y-score")


@dataclass(slots=True)
class RuleOverride:
    """Catalogue override for one issue type."""

    criterion: str | None = None
    level: str | None = None
    weight: int | None = None

    def to_dict(self) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        if self.criterion is not None:
            fields["criterion"] = self.criterion
        if self.level is not None:
            fields["level"] = self.level
        if self.weight is not None:
            fields["weight"] = self.weight
        return fields


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    fail_below: int | None = None
    strict: bool = False
    rule_disable: list[str] = field(default_factory=list)
    rule_overrides: dict[str, RuleOverride] = field(default_factory=dict)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "fail_below": self.fail_below,
            "strict": self.strict,
            "rules": {
                "disable": list(self.rule_disable),
                "overrides": {
                    issue_type: override.to_dict()
                    for issue_type, override in sorted(self.rule_overrides.items())
                },
            },
            "source": self.source,
        }

    def build_catalogue(self) -> Catalogue:
        """Catalogue with this config's overrides and disabled types applied."""
        return build_catalogue(
            overrides={
                issue_type: override.to_dict()
                for issue_type, override in self.rule_overrides.items()
            },
            disabled=self.rule_disable,
        )


def load_app_config(repo: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or repository-local files with precedence."""
    repo = repo.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (repo / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = repo / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = repo / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'format = "human"',
            "fail_below = 80",
            "strict = false",
            "",
            "[rules]",
            '# disable = ["Multiple H1s"]',
            "disable = []",
            "",
            '[rules.overrides."Low Color Contrast"]',
            "weight = 9",
            "",
            '# [rules.overrides."Missing Skip Link"]',
            '# criterion = "2.4.1 Bypass Blocks"',
            '# level = "A"',
            "# weight = 6",
            "",
        ]
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    if source_path.name == PYPROJECT_FILENAME:
        section = _find_pyproject_tool_section(loaded)
        return section if section is not None else {}

    tool_section = _find_pyproject_tool_section(loaded)
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")

    raw_format = mapping.get("format", "human")
    format_value = str(raw_format).lower()
    if format_value not in {"human", "json"}:
        format_value = "human"

    raw_fail = mapping.get("fail_below")
    if raw_fail is None:
        fail_value: int | None = None
    else:
        fail_value = _as_int(raw_fail, "fail_below")
        if not 0 <= fail_value <= 100:
            raise ValueError("fail_below must be between 0 and 100")

    config = AppConfig(
        format=format_value,
        fail_below=fail_value,
        strict=_as_bool(mapping.get("strict", False), "strict"),
        rule_disable=_as_str_list(rules_mapping.get("disable")),
        rule_overrides=_parse_rule_overrides(rules_mapping.get("overrides")),
        source=source,
    )
    # Surface catalogue errors (bad levels, weights, unknown types) at load time.
    config.build_catalogue()
    return config


def _parse_rule_overrides(value: Any) -> dict[str, RuleOverride]:
    table = _as_table(value, "rules.overrides")
    overrides: dict[str, RuleOverride] = {}
    for issue_type, raw in table.items():
        field_name = f"rules.overrides.{issue_type}"
        item = _as_table(raw, field_name)
        unknown_keys = sorted(set(item) - {"criterion", "level", "weight"})
        if unknown_keys:
            raise ValueError(f"{field_name} has unknown keys: {', '.join(unknown_keys)}")
        overrides[issue_type] = RuleOverride(
            criterion=_as_optional_str(item.get("criterion"), f"{field_name}.criterion"),
            level=_as_optional_choice(item.get("level"), {"A", "AA"}, f"{field_name}.level"),
            weight=(
                _as_int(item["weight"], f"{field_name}.weight") if "weight" in item else None
            ),
        )
    return overrides


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("Expected a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("Expected a list of strings")
        items.append(item)
    return items


def _as_optional_str(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value


def _as_optional_choice(raw: Any, allowed: set[str], field_name: str) -> str | None:
    if raw is None:
        return None
    value = str(raw).upper()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value


def _as_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{field_name} must be an integer")
    return raw


def _as_bool(raw: Any, field_name: str) -> bool:
    if not isinstance(raw, bool):
        raise ValueError(f"{field_name} must be a boolean")
    return raw

"""Loading field rules from tabular or YAML rule definitions."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from tablecheck.errors import RuleLoadError, TableReadError
from tablecheck.rules.models import FieldRule, normalize_data_type
from tablecheck.tables import read_table

log = structlog.get_logger(__name__)

# Canonical rule attribute -> header spellings seen in mapping sheets.
RULE_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "field_name": ("fieldName", "field_name", "Field Name", "Target Field Name", "TargetFieldName"),
    "data_type": ("dataType", "data_type", "Data Type", "Target Data Type", "TargetDataType"),
    "required": ("required", "Required"),
    "null_allowed": ("nullAllowed", "null_allowed", "Null Allowed", "NullAllowed"),
    "min_length": ("minLength", "min_length", "Min Length", "MinLength"),
    "max_length": ("maxLength", "max_length", "Max Length", "MaxLength"),
    "pattern": ("pattern", "Pattern"),
    "allowed_values": ("allowedValues", "allowed_values", "Allowed Values", "AllowedValues"),
    "description": ("description", "Description"),
}

TABULAR_SUFFIXES = frozenset({".csv", ".tsv", ".txt", ".psv"})
DOCUMENT_SUFFIXES = frozenset({".yaml", ".yml", ".json"})

_TRUTHY = frozenset({"true", "yes", "y", "1"})


def _is_truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class RuleDefinition(BaseModel):
    """Pydantic schema describing one rule row after alias resolution."""

    field_name: str
    data_type: str | None = None
    required: bool | None = None
    null_allowed: bool | None = None
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    pattern: str | None = None
    allowed_values: Sequence[str] | str | None = None
    description: str | None = None

    @field_validator("field_name")
    @classmethod
    def _strip_field_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("field name must not be blank")
        return stripped

    @field_validator("required", "null_allowed", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool | None:
        value = _blank_to_none(value)
        if value is None:
            return None
        return _is_truthy(value)

    @field_validator("min_length", "max_length", mode="before")
    @classmethod
    def _parse_length(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if isinstance(value, str):
            number = float(value.strip())
            if not number.is_integer() or number < 0:
                raise ValueError(f"length must be a non-negative whole number, got {value!r}")
            return int(number)
        return value

    @field_validator("data_type", "pattern", "description", mode="before")
    @classmethod
    def _blank_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("allowed_values", mode="before")
    @classmethod
    def _blank_allowed(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return value

    def is_required(self) -> bool:
        if self.required is not None:
            return self.required
        if self.null_allowed is not None:
            return not self.null_allowed
        return False

    def allowed_tuple(self) -> tuple[str, ...] | None:
        if self.allowed_values is None:
            return None
        if isinstance(self.allowed_values, str):
            items = self.allowed_values.split(",")
        else:
            items = [str(item) for item in self.allowed_values]
        return tuple(item.strip() for item in items)

    def to_rule(self) -> FieldRule:
        raw_type = self.data_type or "string"
        return FieldRule(
            field_name=self.field_name,
            data_type=normalize_data_type(raw_type),
            original_type_spec=raw_type.strip(),
            required=self.is_required(),
            min_length=self.min_length,
            max_length=self.max_length,
            pattern=self.pattern,
            allowed_values=self.allowed_tuple(),
            description=self.description,
        )


def resolve_aliases(row: Mapping[str, Any]) -> dict[str, Any]:
    """Map a raw rule row onto canonical attribute names.

    The first alias present with a non-blank value wins, matching the way
    mapping sheets are usually filled in.
    """

    resolved: dict[str, Any] = {}
    for canonical, aliases in RULE_COLUMN_ALIASES.items():
        for alias in aliases:
            if alias not in row:
                continue
            value = row[alias]
            if _blank_to_none(value) is None:
                continue
            resolved[canonical] = value
            break
    return resolved


def build_rules(rows: Iterable[Mapping[str, Any] | RuleDefinition]) -> list[FieldRule]:
    """Create :class:`FieldRule` instances, skipping rows that cannot be parsed."""

    rules: list[FieldRule] = []
    for index, row in enumerate(rows, start=1):
        if isinstance(row, RuleDefinition):
            rules.append(row.to_rule())
            continue
        resolved = resolve_aliases(row)
        if "field_name" not in resolved:
            log.warning("rules.row_skipped", row=index, reason="missing field name")
            continue
        try:
            definition = RuleDefinition.model_validate(resolved)
        except ValidationError as exc:
            log.warning(
                "rules.row_skipped",
                row=index,
                field=resolved.get("field_name"),
                reason=str(exc),
            )
            continue
        rules.append(definition.to_rule())
    return rules


def load_rule_rows(path: Path) -> list[Mapping[str, Any]]:
    """Read raw rule rows from a tabular or YAML/JSON rule file."""

    suffix = path.suffix.lower()
    if suffix in TABULAR_SUFFIXES:
        try:
            return list(read_table(path).records)
        except TableReadError as exc:
            raise RuleLoadError(str(exc)) from exc

    if suffix not in DOCUMENT_SUFFIXES:
        raise RuleLoadError(f"Unsupported rule file format: {path.suffix or path.name}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise RuleLoadError(f"Rule file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise RuleLoadError(f"Rule file {path} is not valid YAML/JSON: {exc}") from exc

    if data is None:
        return []
    if isinstance(data, Mapping):
        rules = data.get("rules")
        if isinstance(rules, Sequence) and not isinstance(rules, str):
            return list(rules)
        raise RuleLoadError("rule configuration must contain a 'rules' sequence")
    if isinstance(data, Sequence) and not isinstance(data, str):
        return list(data)
    raise RuleLoadError("unsupported rule configuration format")


def load_rules(path: Path) -> list[FieldRule]:
    """Load and build rules from a rule definition file.

    In a comma-delimited mapping a declaration that itself holds a comma, such
    as ``DECIMAL(18,2)``, must be quoted (``"DECIMAL(18,2)"``) or the row splits
    across columns.
    """

    rows = load_rule_rows(path)
    mappings = [row for row in rows if isinstance(row, Mapping)]
    if len(mappings) != len(rows):
        log.warning(
            "rules.entries_ignored",
            path=str(path),
            ignored=len(rows) - len(mappings),
        )
    rules = build_rules(mappings)
    log.info("rules.load.complete", path=str(path), rules=len(rules), rows=len(rows))
    return rules


__all__ = [
    "RULE_COLUMN_ALIASES",
    "RuleDefinition",
    "build_rules",
    "load_rule_rows",
    "load_rules",
    "resolve_aliases",
]

"""Evaluate a single raw value against a single :class:`FieldRule`."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from tablecheck.rules.models import DataType, FieldRule
from tablecheck.validations.decimal import DecimalCheck, check_decimal

__all__ = [
    "BOOLEAN_LITERALS",
    "DATE_FORMATS",
    "FieldCheck",
    "TypeCheck",
    "check_type",
    "is_empty",
    "is_parseable_date",
    "validate_field",
]

BOOLEAN_LITERALS = frozenset({"true", "false", "yes", "no", "1", "0"})

DATE_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%m.%d.%Y",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%d-%b-%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y %I:%M:%S %p",
    "%Y/%m/%d %H:%M:%S",
    "%a, %d %b %Y %H:%M:%S",
    "%a, %d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S %Z",
)

_INTEGER = re.compile(r"^[+-]?\d+$")


@dataclass
class FieldCheck:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True, slots=True)
class TypeCheck:
    valid: bool
    detail: str | None = None


def is_empty(value: object) -> bool:
    """``None`` and whitespace-only strings count as empty."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def is_parseable_date(value: str) -> bool:
    """Return ``True`` when *value* parses as a real calendar date or timestamp."""

    candidate = value.strip()
    if not candidate:
        return False
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        datetime.fromisoformat(candidate)
        return True
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            datetime.strptime(candidate, fmt)
            return True
        except ValueError:
            continue
    return False


def check_type(value: str, rule: FieldRule) -> TypeCheck:
    """Dispatch the type check for *value* on ``rule.data_type``."""

    if rule.data_type is DataType.STRING:
        return TypeCheck(valid=True)
    if rule.data_type is DataType.INTEGER:
        return TypeCheck(valid=bool(_INTEGER.match(value.strip())))
    if rule.data_type is DataType.DECIMAL:
        result: DecimalCheck = check_decimal(value, rule.original_type_spec)
        return TypeCheck(valid=result.valid, detail=result.detail)
    if rule.data_type is DataType.DATE:
        return TypeCheck(valid=is_parseable_date(value))
    if rule.data_type is DataType.BOOLEAN:
        return TypeCheck(valid=value.strip().lower() in BOOLEAN_LITERALS)
    return TypeCheck(valid=True)  # pragma: no cover - DataType is exhaustive


def validate_field(raw_value: str | None, rule: FieldRule) -> FieldCheck:
    """Validate *raw_value* against *rule*.

    A required rule with an empty value yields a single error and nothing else.
    An optional rule with an empty value yields nothing at all. Otherwise the
    type, length, pattern and allowed-value checks all run and every violated
    constraint is reported.
    """

    result = FieldCheck()
    name = rule.field_name

    if is_empty(raw_value):
        if rule.required:
            result.errors.append(f"Field '{name}' is required but missing")
        return result

    value = str(raw_value)

    type_check = check_type(value, rule)
    if not type_check.valid:
        message = (
            f"Field '{name}' has invalid data type. "
            f"Expected: {rule.original_type_spec}, Got: {value}"
        )
        if type_check.detail:
            message = f"{message} ({type_check.detail})"
        result.errors.append(message)

    if rule.min_length is not None and len(value) < rule.min_length:
        result.errors.append(
            f"Field '{name}' is too short. Minimum length: {rule.min_length}, "
            f"Actual: {len(value)}, Got: {value}"
        )
    if rule.max_length is not None and len(value) > rule.max_length:
        result.errors.append(
            f"Field '{name}' is too long. Maximum length: {rule.max_length}, "
            f"Actual: {len(value)}, Got: {value}"
        )

    if rule.pattern:
        try:
            compiled = re.compile(rule.pattern)
        except re.error:
            result.warnings.append(
                f"Invalid regex pattern for field '{name}': {rule.pattern}"
            )
        else:
            if compiled.search(value) is None:
                result.errors.append(
                    f"Field '{name}' does not match required pattern: "
                    f"{rule.pattern}, Got: {value}"
                )

    if rule.allowed_values is not None:
        allowed = [item.strip() for item in rule.allowed_values]
        if value not in allowed:
            result.errors.append(
                f"Field '{name}' has invalid value '{value}'. "
                f"Allowed values: {', '.join(allowed)}"
            )

    return result

"""Representational consistency checks that never affect record validity."""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from tablecheck.rules.models import DataType, FieldRule
from tablecheck.validations.decimal import fractional_digits, is_plain_number

__all__ = [
    "DATE_SHAPES",
    "FormattingIssue",
    "detect_formatting_issues",
    "format_issues_for_value",
    "matches_date_shape",
    "matches_phone_shape",
]

DATE_SHAPES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$"),  # YYYY-MM-DD
    re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"),  # MM/DD/YYYY
    re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$"),  # MM-DD-YYYY
    re.compile(r"^\d{4}/\d{1,2}/\d{1,2}$"),  # YYYY/MM/DD
    re.compile(r"^\d{1,2}\.\d{1,2}\.\d{4}$"),  # MM.DD.YYYY
    re.compile(
        r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?$"
    ),
)

_PHONE_SHAPE = re.compile(r"^\+?[1-9]\d{0,15}$")
_PHONE_NOISE = re.compile(r"[\s\-().]")


class FormattingIssue(BaseModel):
    row_index: int
    issues: List[str]


def matches_date_shape(value: str) -> bool:
    """Shape-only date check; ``13/45/2024`` passes, ``Jan 5 2024`` does not."""

    return any(shape.match(value) for shape in DATE_SHAPES)


def matches_phone_shape(value: str) -> bool:
    return bool(_PHONE_SHAPE.match(_PHONE_NOISE.sub("", value)))


def format_issues_for_value(name: str, value: str, rule: FieldRule | None) -> List[str]:
    """Return the formatting notes for one non-empty value."""

    issues: List[str] = []
    stripped = value.strip()
    lowered_name = name.lower()

    if value != stripped:
        issues.append(f"Field '{name}' has leading/trailing whitespace: '{value}'")

    if "email" in lowered_name and stripped != stripped.lower():
        issues.append(f"Field '{name}' should be lowercase: '{stripped}'")

    if ("phone" in lowered_name or "mobile" in lowered_name) and not matches_phone_shape(stripped):
        issues.append(f"Field '{name}' has an inconsistent phone format: '{stripped}'")

    if rule is None:
        return issues

    if rule.data_type is DataType.DATE and not matches_date_shape(stripped):
        issues.append(f"Field '{name}' has an inconsistent date format: '{stripped}'")

    if rule.data_type is DataType.DECIMAL:
        spec = rule.decimal_spec
        if spec is not None and is_plain_number(stripped):
            places = fractional_digits(stripped)
            if places != spec.scale:
                issues.append(
                    f"Field '{name}' has {places} decimal places, "
                    f"expected {spec.scale}: '{stripped}'"
                )

    return issues


def detect_formatting_issues(
    records: Sequence[Mapping[str, Optional[str]]],
    rules: Sequence[FieldRule],
) -> List[FormattingIssue]:
    """Collect formatting notes per record; clean records produce no entry."""

    rules_by_field: Dict[str, FieldRule] = {rule.field_name: rule for rule in rules}
    results: List[FormattingIssue] = []

    for row_index, record in enumerate(records, start=1):
        issues: List[str] = []
        for name, value in record.items():
            if value is None or not str(value).strip():
                continue
            issues.extend(format_issues_for_value(name, str(value), rules_by_field.get(name)))
        if issues:
            results.append(FormattingIssue(row_index=row_index, issues=issues))

    return results

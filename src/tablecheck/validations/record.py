"""Record level validation and aggregate statistics."""

from __future__ import annotations

import re
from collections import Counter
from typing import Callable, Iterable, List, Mapping, Optional, Sequence

import structlog
from pydantic import BaseModel

from tablecheck.errors import PreconditionError
from tablecheck.rules.models import FieldRule
from tablecheck.validations.field import validate_field

log = structlog.get_logger(__name__)

ProgressCallback = Callable[[int], None]

# Field names may hold apostrophes, so the name ends where a known predicate begins.
_MESSAGE_SHAPE = re.compile(
    r"^Field '(?P<field>.+?)' (?P<predicate>"
    r"is required but missing"
    r"|has invalid data type"
    r"|is too short"
    r"|is too long"
    r"|does not match required pattern"
    r"|has invalid value"
    r"|has leading/trailing whitespace"
    r"|should be lowercase"
    r"|has an inconsistent"
    r"|has \d+ decimal places"
    r")",
    re.DOTALL,
)
_PRECISION_DETAIL = re.compile(
    r"\((?:exceeds precision|wrong scale|integer part too long)[^()]*\)$"
)

_ERROR_CATEGORIES: dict[str, str] = {
    "is required but missing": "Required Field Missing",
    "has invalid data type": "Invalid Data Type",
    "is too short": "Length Constraint Error",
    "is too long": "Length Constraint Error",
    "does not match required pattern": "Pattern Mismatch",
    "has invalid value": "Invalid Value",
}
DECIMAL_PRECISION_ERROR = "Decimal Precision Error"
UNKNOWN_ERROR = "Unknown Error"


class ValidationOutcome(BaseModel):
    row_index: int
    is_valid: bool
    errors: List[str]
    warnings: List[str]


class ValidationStats(BaseModel):
    total_records: int
    valid_records: int
    invalid_records: int
    total_errors: int
    total_warnings: int
    success_rate: float

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[ValidationOutcome]) -> "ValidationStats":
        total = valid = errors = warnings = 0
        for outcome in outcomes:
            total += 1
            if outcome.is_valid:
                valid += 1
            errors += len(outcome.errors)
            warnings += len(outcome.warnings)
        return cls(
            total_records=total,
            valid_records=valid,
            invalid_records=total - valid,
            total_errors=errors,
            total_warnings=warnings,
            success_rate=(valid / total) * 100 if total else 100.0,
        )


def validate_record(
    record: Mapping[str, Optional[str]],
    rules: Sequence[FieldRule],
    *,
    row_index: int,
) -> ValidationOutcome:
    """Apply every rule to *record*; absent columns are treated as empty."""

    errors: List[str] = []
    warnings: List[str] = []
    for rule in rules:
        check = validate_field(record.get(rule.field_name), rule)
        errors.extend(check.errors)
        warnings.extend(check.warnings)
    return ValidationOutcome(
        row_index=row_index,
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
    )


def validate_records(
    records: Iterable[Mapping[str, Optional[str]]],
    rules: Sequence[FieldRule],
    *,
    progress_callback: Optional[ProgressCallback] = None,
) -> List[ValidationOutcome]:
    """Validate every record in order; row indexes start at 1."""

    if not rules:
        raise PreconditionError("No validation rules loaded; load rules before validating records.")

    outcomes: List[ValidationOutcome] = []
    for row_index, record in enumerate(records, start=1):
        outcomes.append(validate_record(record, rules, row_index=row_index))
        if progress_callback:
            progress_callback(1)

    invalid = sum(1 for outcome in outcomes if not outcome.is_valid)
    log.info(
        "validate.records.complete",
        records=len(outcomes),
        rules=len(rules),
        invalid=invalid,
    )
    return outcomes


def extract_field_name(message: str) -> str | None:
    """Return the field named in an error or warning message."""

    match = _MESSAGE_SHAPE.match(message)
    return match.group("field") if match else None


def classify_error(message: str) -> str:
    """Bucket an error message into a user-facing category.

    Only the predicate following the field name is consulted, plus the
    trailing decimal detail of a data type error, so names and values never
    influence the bucket.
    """

    match = _MESSAGE_SHAPE.match(message)
    if match is None:
        return UNKNOWN_ERROR
    category = _ERROR_CATEGORIES.get(match.group("predicate"), UNKNOWN_ERROR)
    if category == "Invalid Data Type" and _PRECISION_DETAIL.search(message):
        return DECIMAL_PRECISION_ERROR
    return category


def field_error_counts(outcomes: Iterable[ValidationOutcome]) -> Counter[str]:
    """Count errors per field across *outcomes*."""

    counts: Counter[str] = Counter()
    for outcome in outcomes:
        for message in outcome.errors:
            counts[extract_field_name(message) or "Unknown"] += 1
    return counts


__all__ = [
    "DECIMAL_PRECISION_ERROR",
    "ProgressCallback",
    "UNKNOWN_ERROR",
    "ValidationOutcome",
    "ValidationStats",
    "classify_error",
    "extract_field_name",
    "field_error_counts",
    "validate_record",
    "validate_records",
]

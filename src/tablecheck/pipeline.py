"""Single-call validation run bundling every per-record signal."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel

from tablecheck.rules.models import FieldRule
from tablecheck.validations.duplicates import DuplicateEntry, detect_duplicates
from tablecheck.validations.formatting import FormattingIssue, detect_formatting_issues
from tablecheck.validations.headers import HeaderComparison, compare_headers
from tablecheck.validations.record import (
    ProgressCallback,
    ValidationOutcome,
    ValidationStats,
    validate_records,
)


class ValidationReport(BaseModel):
    outcomes: List[ValidationOutcome]
    stats: ValidationStats
    duplicates: List[DuplicateEntry]
    formatting_issues: List[FormattingIssue]
    headers: Optional[HeaderComparison] = None

    @property
    def invalid_outcomes(self) -> List[ValidationOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.is_valid]


def run_validation(
    records: Sequence[Mapping[str, Optional[str]]],
    rules: Sequence[FieldRule],
    *,
    headers: Optional[Sequence[str]] = None,
    key_fields: Optional[Sequence[str]] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> ValidationReport:
    """Validate, deduplicate and format-check *records* in one pass.

    Each stage receives the same immutable inputs, so the order in which they
    run has no effect on the report.
    """

    outcomes = validate_records(records, rules, progress_callback=progress_callback)
    comparison = None
    if headers is not None:
        comparison = compare_headers([rule.field_name for rule in rules], headers)
    return ValidationReport(
        outcomes=outcomes,
        stats=ValidationStats.from_outcomes(outcomes),
        duplicates=detect_duplicates(records, key_fields),
        formatting_issues=detect_formatting_issues(records, rules),
        headers=comparison,
    )


__all__ = ["ValidationReport", "run_validation"]

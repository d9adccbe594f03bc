"""Record, field, duplicate, formatting and header validations."""

from tablecheck.validations.decimal import DecimalCheck, DecimalFailure, check_decimal
from tablecheck.validations.duplicates import DuplicateEntry, composite_key, detect_duplicates
from tablecheck.validations.field import (
    FieldCheck,
    check_type,
    is_empty,
    is_parseable_date,
    validate_field,
)
from tablecheck.validations.formatting import (
    FormattingIssue,
    detect_formatting_issues,
    matches_date_shape,
)
from tablecheck.validations.headers import HeaderComparison, compare_headers
from tablecheck.validations.record import (
    ValidationOutcome,
    ValidationStats,
    classify_error,
    field_error_counts,
    validate_record,
    validate_records,
)

__all__ = [
    "DecimalCheck",
    "DecimalFailure",
    "check_decimal",
    "DuplicateEntry",
    "composite_key",
    "detect_duplicates",
    "FieldCheck",
    "check_type",
    "is_empty",
    "is_parseable_date",
    "validate_field",
    "FormattingIssue",
    "detect_formatting_issues",
    "matches_date_shape",
    "HeaderComparison",
    "compare_headers",
    "ValidationOutcome",
    "ValidationStats",
    "classify_error",
    "field_error_counts",
    "validate_record",
    "validate_records",
]

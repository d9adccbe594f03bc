from __future__ import annotations

import pytest

from tablecheck.errors import PreconditionError
from tablecheck.rules.models import DataType, FieldRule
from tablecheck.validations.record import (
    UNKNOWN_ERROR,
    ValidationOutcome,
    ValidationStats,
    classify_error,
    extract_field_name,
    field_error_counts,
    validate_record,
    validate_records,
)

RULES = [
    FieldRule(field_name="id", data_type=DataType.INTEGER, original_type_spec="int", required=True),
    FieldRule(
        field_name="amount",
        data_type=DataType.DECIMAL,
        original_type_spec="DECIMAL(10,2)",
    ),
    FieldRule(field_name="status", allowed_values=("open", "closed")),
]


def test_missing_column_is_treated_as_empty() -> None:
    outcome = validate_record({"amount": "10.00"}, RULES, row_index=1)

    assert not outcome.is_valid
    assert outcome.errors == ["Field 'id' is required but missing"]


def test_errors_from_every_rule_are_collected() -> None:
    outcome = validate_record(
        {"id": "x", "amount": "1.5", "status": "pending"}, RULES, row_index=7
    )

    assert outcome.row_index == 7
    assert len(outcome.errors) == 3
    assert [classify_error(message) for message in outcome.errors] == [
        "Invalid Data Type",
        "Decimal Precision Error",
        "Invalid Value",
    ]


def test_validate_records_numbers_rows_from_one_and_reports_progress() -> None:
    steps: list[int] = []
    records = [
        {"id": "1", "amount": "1.00", "status": "open"},
        {"id": "", "amount": "", "status": ""},
    ]

    outcomes = validate_records(records, RULES, progress_callback=steps.append)

    assert [outcome.row_index for outcome in outcomes] == [1, 2]
    assert [outcome.is_valid for outcome in outcomes] == [True, False]
    assert steps == [1, 1]


def test_validation_is_deterministic() -> None:
    records = [{"id": "a", "amount": "9.999", "status": "open"}]

    assert validate_records(records, RULES) == validate_records(records, RULES)


def test_empty_rules_is_a_precondition_error() -> None:
    with pytest.raises(PreconditionError):
        validate_records([{"id": "1"}], [])


def test_stats_from_outcomes() -> None:
    outcomes = [
        ValidationOutcome(row_index=1, is_valid=True, errors=[], warnings=["w"]),
        ValidationOutcome(row_index=2, is_valid=False, errors=["a", "b"], warnings=[]),
        ValidationOutcome(row_index=3, is_valid=True, errors=[], warnings=[]),
        ValidationOutcome(row_index=4, is_valid=False, errors=["c"], warnings=[]),
    ]

    stats = ValidationStats.from_outcomes(outcomes)

    assert stats.total_records == 4
    assert stats.valid_records == 2
    assert stats.invalid_records == 2
    assert stats.total_errors == 3
    assert stats.total_warnings == 1
    assert stats.success_rate == pytest.approx(50.0)


def test_stats_for_empty_table() -> None:
    stats = ValidationStats.from_outcomes([])

    assert stats.total_records == 0
    assert stats.success_rate == 100.0


@pytest.mark.parametrize(
    ("message", "category"),
    [
        ("Field 'id' is required but missing", "Required Field Missing"),
        ("Field 'n' is too short. Minimum length: 3, Actual: 1, Got: a", "Length Constraint Error"),
        ("Field 'n' does not match required pattern: ^a, Got: b", "Pattern Mismatch"),
        ("Something odd happened", UNKNOWN_ERROR),
        ("Field 'pattern_code' has invalid value 'x'. Allowed values: A, B", "Invalid Value"),
        (
            "Field 'required_by' is too long. Maximum length: 2, Actual: 3, Got: abc",
            "Length Constraint Error",
        ),
        ("Field 'notes' has invalid value 'wrong scale'. Allowed values: a", "Invalid Value"),
        (
            "Field 'amount' has invalid data type. Expected: DECIMAL(10,2), Got: 1.5 "
            "(wrong scale: 1 decimal places, expected exactly 2)",
            "Decimal Precision Error",
        ),
    ],
)
def test_classify_error(message: str, category: str) -> None:
    assert classify_error(message) == category


def test_field_error_counts() -> None:
    outcomes = validate_records(
        [
            {"id": "", "amount": "x", "status": "open"},
            {"id": "", "amount": "1.00", "status": "open"},
        ],
        RULES,
    )
    outcomes.append(
        ValidationOutcome(row_index=3, is_valid=False, errors=["no field here"], warnings=[])
    )

    counts = field_error_counts(outcomes)

    assert counts == {"id": 2, "amount": 1, "Unknown": 1}


def test_field_names_with_apostrophes_are_counted_whole() -> None:
    rule = FieldRule(field_name="owner's email", required=True)
    outcome = validate_record({}, [rule], row_index=1)

    assert extract_field_name(outcome.errors[0]) == "owner's email"
    assert field_error_counts([outcome]) == {"owner's email": 1}
    assert classify_error(outcome.errors[0]) == "Required Field Missing"

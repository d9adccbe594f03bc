from __future__ import annotations

import pytest

from tablecheck.rules.models import DecimalSpec, parse_decimal_spec
from tablecheck.validations.decimal import (
    DecimalFailure,
    check_decimal,
    fractional_digits,
    is_plain_number,
    is_real_number,
)


def test_value_filling_precision_exactly_is_valid() -> None:
    result = check_decimal("1234567890123456.78", "DECIMAL(18,2)")

    assert result.valid
    assert result.failure is None


def test_total_precision_exceeded() -> None:
    result = check_decimal("12345678901234567.89", "DECIMAL(18,2)")

    assert not result.valid
    assert result.failure is DecimalFailure.PRECISION_EXCEEDED
    assert "19 digits, maximum 18" in (result.detail or "")


def test_scale_must_match_exactly() -> None:
    too_many = check_decimal("123.456", "DECIMAL(18,2)")
    too_few = check_decimal("123.4", "DECIMAL(18,2)")

    assert too_many.failure is DecimalFailure.SCALE_MISMATCH
    assert too_few.failure is DecimalFailure.SCALE_MISMATCH
    assert "expected exactly 2" in (too_few.detail or "")


def test_integer_part_overflow_is_reported() -> None:
    result = check_decimal("123.45", "DECIMAL(4,2)")

    assert not result.valid
    assert result.failure is DecimalFailure.PRECISION_EXCEEDED
    assert "integer part has 3 digits, maximum 2" in (result.detail or "")


def test_sign_does_not_count_towards_digits() -> None:
    assert check_decimal("-12.34", "decimal(4,2)").valid
    assert check_decimal("+12.34", "decimal(4,2)").valid


def test_integer_value_only_checks_precision() -> None:
    assert check_decimal("1234", "DECIMAL(4,2)").valid

    result = check_decimal("12345", "DECIMAL(4,2)")
    assert result.failure is DecimalFailure.PRECISION_EXCEEDED


def test_spec_parsing_is_whitespace_tolerant_and_case_insensitive() -> None:
    assert parse_decimal_spec("Decimal ( 10 , 3 )") == DecimalSpec(precision=10, scale=3)
    assert parse_decimal_spec("number") is None
    assert parse_decimal_spec(None) is None


def test_scale_larger_than_precision_means_unconstrained() -> None:
    assert parse_decimal_spec("DECIMAL(2,5)") is None
    assert check_decimal("123.4567", "DECIMAL(2,5)").valid


@pytest.mark.parametrize("value", ["abc", "1.2.3", "1e5", "", "12,50"])
def test_non_plain_values_are_not_numeric(value: str) -> None:
    result = check_decimal(value, "DECIMAL(10,2)")

    assert result.failure is DecimalFailure.NOT_NUMERIC


def test_without_declaration_only_numeric_ness_is_checked() -> None:
    assert check_decimal("3.14159", "decimal").valid
    assert check_decimal("1e5", "double").valid

    result = check_decimal("nan", "currency")
    assert result.failure is DecimalFailure.NOT_NUMERIC
    assert result.detail == "not a valid number"


def test_number_helpers() -> None:
    assert is_plain_number(".5")
    assert is_plain_number("5.")
    assert not is_plain_number("5e2")
    assert is_real_number("5e2")
    assert not is_real_number("inf")
    assert fractional_digits("100.5") == 1
    assert fractional_digits("300") == 0

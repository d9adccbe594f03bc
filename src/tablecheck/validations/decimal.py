"""Precision and scale checks for ``DECIMAL(P,S)`` columns.

Checks run on the string form of the value so that binary floating point
rounding can never accept or reject a value on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from tablecheck.rules.models import parse_decimal_spec

__all__ = [
    "DecimalCheck",
    "DecimalFailure",
    "check_decimal",
    "fractional_digits",
    "is_plain_number",
    "is_real_number",
]

_PLAIN_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)$")


class DecimalFailure(str, Enum):
    NOT_NUMERIC = "not_numeric"
    PRECISION_EXCEEDED = "precision_exceeded"
    SCALE_MISMATCH = "scale_mismatch"
    INTEGER_PART_TOO_LONG = "integer_part_too_long"


@dataclass(frozen=True, slots=True)
class DecimalCheck:
    valid: bool
    failure: DecimalFailure | None = None
    detail: str | None = None


_VALID = DecimalCheck(valid=True)


def is_plain_number(value: str) -> bool:
    """Return ``True`` for plain decimal notation such as ``-12.50`` or ``.5``."""

    return bool(_PLAIN_NUMBER.match(value.strip()))


def is_real_number(value: str) -> bool:
    """Return ``True`` when *value* parses as a finite real number."""

    try:
        return Decimal(value.strip()).is_finite()
    except InvalidOperation:
        return False


def fractional_digits(value: str) -> int:
    """Number of digits after the decimal point of a plain-notation number."""

    _, _, fraction = value.strip().partition(".")
    return len(fraction)


def check_decimal(value: str, type_spec: str | None) -> DecimalCheck:
    """Check *value* against the precision and scale declared in *type_spec*.

    Without a ``decimal(P,S)`` declaration only numeric-ness is checked.
    """

    spec = parse_decimal_spec(type_spec)
    if spec is None:
        if is_real_number(value):
            return _VALID
        return DecimalCheck(
            valid=False,
            failure=DecimalFailure.NOT_NUMERIC,
            detail="not a valid number",
        )

    digits = value.strip()
    if not _PLAIN_NUMBER.match(digits):
        return DecimalCheck(
            valid=False,
            failure=DecimalFailure.NOT_NUMERIC,
            detail="not a valid number in plain decimal notation",
        )
    digits = digits.lstrip("+-")

    if "." not in digits:
        if len(digits) > spec.precision:
            return DecimalCheck(
                valid=False,
                failure=DecimalFailure.PRECISION_EXCEEDED,
                detail=(
                    f"exceeds precision: {len(digits)} digits, "
                    f"maximum {spec.precision}"
                ),
            )
        return _VALID

    integer_part, _, fraction_part = digits.partition(".")
    if len(fraction_part) != spec.scale:
        return DecimalCheck(
            valid=False,
            failure=DecimalFailure.SCALE_MISMATCH,
            detail=(
                f"wrong scale: {len(fraction_part)} decimal places, "
                f"expected exactly {spec.scale}"
            ),
        )

    # With the scale pinned, total and integer-part overflow coincide.
    total = len(integer_part) + len(fraction_part)
    if total > spec.precision:
        return DecimalCheck(
            valid=False,
            failure=DecimalFailure.PRECISION_EXCEEDED,
            detail=(
                f"exceeds precision: {total} digits, maximum {spec.precision}; "
                f"integer part has {len(integer_part)} digits, "
                f"maximum {spec.max_integer_digits}"
            ),
        )

    if len(integer_part) > spec.max_integer_digits:
        return DecimalCheck(
            valid=False,
            failure=DecimalFailure.INTEGER_PART_TOO_LONG,
            detail=(
                f"integer part too long: {len(integer_part)} digits, "
                f"maximum {spec.max_integer_digits}"
            ),
        )

    return _VALID

"""Normalised field rules consumed by the validators."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "DataType",
    "DecimalSpec",
    "FieldRule",
    "normalize_data_type",
    "parse_decimal_spec",
]


class DataType(str, Enum):
    """The five value types a rule can declare."""

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    DATE = "date"
    BOOLEAN = "boolean"


# First keyword family found in the declaration wins, so "PrintString" stays a
# string rather than matching the bare "int" keyword.
_TYPE_KEYWORDS: tuple[tuple[DataType, tuple[str, ...]], ...] = (
    (DataType.DECIMAL, ("decimal", "number", "double", "float", "currency", "percent")),
    (DataType.BOOLEAN, ("bool",)),
    (DataType.DATE, ("timestamp", "datetime", "date", "time")),
    (DataType.STRING, ("string", "text", "picklist", "char", "email", "url", "phone")),
    (DataType.INTEGER, ("int",)),
)

_DECIMAL_SPEC_PATTERN = re.compile(r"decimal\s*\(\s*(\d+)\s*,\s*(\d+)\s*\)", re.IGNORECASE)


def normalize_data_type(raw: str | None) -> DataType:
    """Map a raw type declaration such as ``"DECIMAL(18,2)"`` to a :class:`DataType`.

    Unknown or empty declarations fall back to :attr:`DataType.STRING`.
    """

    if not raw:
        return DataType.STRING
    lowered = str(raw).strip().lower()
    for data_type, keywords in _TYPE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return data_type
    return DataType.STRING


@dataclass(frozen=True, slots=True)
class DecimalSpec:
    precision: int
    scale: int

    @property
    def max_integer_digits(self) -> int:
        return self.precision - self.scale


def parse_decimal_spec(type_spec: str | None) -> DecimalSpec | None:
    """Return the precision/scale declared in *type_spec*, if any.

    A declaration whose scale exceeds its precision cannot describe any value
    and is treated as having no constraint.
    """

    if not type_spec:
        return None
    match = _DECIMAL_SPEC_PATTERN.search(str(type_spec))
    if match is None:
        return None
    precision, scale = int(match.group(1)), int(match.group(2))
    if scale > precision:
        return None
    return DecimalSpec(precision=precision, scale=scale)


@dataclass(frozen=True)
class FieldRule:
    """Declarative constraints for a single column."""

    field_name: str
    data_type: DataType = DataType.STRING
    original_type_spec: str = "string"
    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    allowed_values: tuple[str, ...] | None = None
    description: str | None = None

    @property
    def decimal_spec(self) -> DecimalSpec | None:
        return parse_decimal_spec(self.original_type_spec)

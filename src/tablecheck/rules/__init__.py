"""Field rule model and loaders."""

from tablecheck.rules.loader import (
    RULE_COLUMN_ALIASES,
    RuleDefinition,
    build_rules,
    load_rule_rows,
    load_rules,
    resolve_aliases,
)
from tablecheck.rules.models import (
    DataType,
    DecimalSpec,
    FieldRule,
    normalize_data_type,
    parse_decimal_spec,
)

__all__ = [
    "RULE_COLUMN_ALIASES",
    "RuleDefinition",
    "build_rules",
    "load_rule_rows",
    "load_rules",
    "resolve_aliases",
    "DataType",
    "DecimalSpec",
    "FieldRule",
    "normalize_data_type",
    "parse_decimal_spec",
]

"""Rule-driven validation and source/destination reconciliation of tabular data."""

from tablecheck.errors import PreconditionError, RuleLoadError, TableCheckError, TableReadError
from tablecheck.pipeline import ValidationReport, run_validation
from tablecheck.reconcile import ReconciliationResult, StatusThresholds, reconcile
from tablecheck.rules import DataType, FieldRule, load_rules
from tablecheck.tables import Table, read_table

__all__ = [
    "PreconditionError",
    "RuleLoadError",
    "TableCheckError",
    "TableReadError",
    "ValidationReport",
    "run_validation",
    "ReconciliationResult",
    "StatusThresholds",
    "reconcile",
    "DataType",
    "FieldRule",
    "load_rules",
    "Table",
    "read_table",
]

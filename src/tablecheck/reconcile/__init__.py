"""Reconciliation of a source dataset against a destination dataset."""

from tablecheck.reconcile.engine import (
    find_field_mismatches,
    next_steps,
    overall_status,
    priority_level,
    reconcile,
)
from tablecheck.reconcile.models import (
    FieldDiff,
    MatchEntry,
    MismatchEntry,
    PriorityLevel,
    ReconciliationResult,
    ReconciliationStatus,
    ReconciliationSummary,
    StatusThresholds,
)

__all__ = [
    "find_field_mismatches",
    "next_steps",
    "overall_status",
    "priority_level",
    "reconcile",
    "FieldDiff",
    "MatchEntry",
    "MismatchEntry",
    "PriorityLevel",
    "ReconciliationResult",
    "ReconciliationStatus",
    "ReconciliationSummary",
    "StatusThresholds",
]

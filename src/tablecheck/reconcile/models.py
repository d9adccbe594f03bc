"""Result models produced by :func:`tablecheck.reconcile.engine.reconcile`."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence

from pydantic import BaseModel, Field


class ReconciliationStatus(str, Enum):
    PERFECT = "perfect"
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


class PriorityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StatusThresholds(BaseModel):
    """Upper bounds (inclusive) for each difference count per status band."""

    minor_missing: int = Field(default=5, ge=0)
    minor_extra: int = Field(default=5, ge=0)
    minor_mismatches: int = Field(default=10, ge=0)
    moderate_missing: int = Field(default=20, ge=0)
    moderate_extra: int = Field(default=20, ge=0)
    moderate_mismatches: int = Field(default=50, ge=0)
    priority_medium_max: int = Field(default=10, ge=0)


class MatchEntry(BaseModel):
    composite_key: str
    row_index: int
    key_fields: Sequence[str]
    key_values: Sequence[str]


class FieldDiff(BaseModel):
    field: str
    source_value: str
    destination_value: str


class MismatchEntry(BaseModel):
    composite_key: str
    source_row_index: int
    destination_row_index: int
    key_fields: Sequence[str]
    key_values: Sequence[str]
    field_diffs: Sequence[FieldDiff]


class ReconciliationSummary(BaseModel):
    source_record_count: int
    destination_record_count: int
    matching_records: int
    missing_count: int
    extra_count: int
    mismatch_count: int
    key_fields: Sequence[str]
    strict: bool
    status: ReconciliationStatus
    priority: PriorityLevel
    next_steps: List[str]


class ReconciliationResult(BaseModel):
    missing: Sequence[MatchEntry]
    extra: Sequence[MatchEntry]
    mismatches: Sequence[MismatchEntry]
    summary: ReconciliationSummary

    @property
    def has_differences(self) -> bool:
        return self.summary.status is not ReconciliationStatus.PERFECT


__all__ = [
    "FieldDiff",
    "MatchEntry",
    "MismatchEntry",
    "PriorityLevel",
    "ReconciliationResult",
    "ReconciliationStatus",
    "ReconciliationSummary",
    "StatusThresholds",
]

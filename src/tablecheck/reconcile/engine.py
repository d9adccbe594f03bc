"""Source versus destination record matching."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import structlog

from tablecheck.errors import PreconditionError
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
from tablecheck.validations.duplicates import KeyTuple, composite_key, key_values

log = structlog.get_logger(__name__)

Record = Mapping[str, Optional[str]]
_Indexed = Dict[KeyTuple, Tuple[int, Record]]


def _default_key_fields(source: Sequence[Record], destination: Sequence[Record]) -> List[str]:
    if source:
        return list(source[0].keys())
    if destination:
        return list(destination[0].keys())
    return []


def _index(records: Sequence[Record], key_fields: Sequence[str]) -> _Indexed:
    # Later duplicates replace earlier ones but keep the first insertion slot.
    index: _Indexed = {}
    for row_index, record in enumerate(records, start=1):
        index[key_values(record, key_fields)] = (row_index, record)
    return index


def _as_text(value: Optional[str]) -> str:
    return "" if value is None else str(value)


def find_field_mismatches(
    source_record: Record,
    destination_record: Record,
    key_fields: Sequence[str],
) -> List[FieldDiff]:
    """Compare every non-key field present on either side after stripping."""

    excluded = set(key_fields)
    fields = list(source_record.keys())
    fields.extend(name for name in destination_record.keys() if name not in source_record)

    diffs: List[FieldDiff] = []
    for name in fields:
        if name in excluded:
            continue
        source_value = _as_text(source_record.get(name))
        destination_value = _as_text(destination_record.get(name))
        if source_value.strip() != destination_value.strip():
            diffs.append(
                FieldDiff(
                    field=name,
                    source_value=source_value,
                    destination_value=destination_value,
                )
            )
    return diffs


def overall_status(
    missing: int,
    extra: int,
    mismatches: int,
    thresholds: StatusThresholds | None = None,
) -> ReconciliationStatus:
    """Coarse classification of the three difference counts."""

    limits = thresholds or StatusThresholds()
    if missing == 0 and extra == 0 and mismatches == 0:
        return ReconciliationStatus.PERFECT
    if (
        missing <= limits.minor_missing
        and extra <= limits.minor_extra
        and mismatches <= limits.minor_mismatches
    ):
        return ReconciliationStatus.MINOR
    if (
        missing <= limits.moderate_missing
        and extra <= limits.moderate_extra
        and mismatches <= limits.moderate_mismatches
    ):
        return ReconciliationStatus.MODERATE
    return ReconciliationStatus.MAJOR


def priority_level(
    missing: int,
    extra: int,
    mismatches: int,
    thresholds: StatusThresholds | None = None,
) -> PriorityLevel:
    limits = thresholds or StatusThresholds()
    total = missing + extra + mismatches
    if total == 0:
        return PriorityLevel.LOW
    if total <= limits.priority_medium_max:
        return PriorityLevel.MEDIUM
    return PriorityLevel.HIGH


def next_steps(missing: int, extra: int, mismatches: int) -> List[str]:
    if missing == 0 and extra == 0 and mismatches == 0:
        return ["Files are identical - no action needed"]
    steps: List[str] = []
    if missing:
        steps.append("Review missing records in destination")
    if extra:
        steps.append("Review extra records in destination")
    if mismatches:
        steps.append("Review data mismatches")
    return steps


def reconcile(
    source: Optional[Sequence[Record]],
    destination: Optional[Sequence[Record]],
    key_fields: Optional[Sequence[str]] = None,
    strict: bool = False,
    *,
    thresholds: StatusThresholds | None = None,
) -> ReconciliationResult:
    """Match *source* and *destination* records by composite key.

    ``None`` for either dataset means it was never loaded and raises
    :class:`PreconditionError`; empty datasets are legal. Field level
    differences are only inspected when *strict* is set.
    """

    if source is None or destination is None:
        raise PreconditionError(
            "Both source and destination data must be loaded before comparison"
        )

    fields = list(key_fields) if key_fields else _default_key_fields(source, destination)
    source_index = _index(source, fields)
    destination_index = _index(destination, fields)

    missing: List[MatchEntry] = []
    for key, (row_index, _record) in source_index.items():
        if key not in destination_index:
            missing.append(
                MatchEntry(
                    composite_key=composite_key(key),
                    row_index=row_index,
                    key_fields=fields,
                    key_values=list(key),
                )
            )

    extra: List[MatchEntry] = []
    for key, (row_index, _record) in destination_index.items():
        if key not in source_index:
            extra.append(
                MatchEntry(
                    composite_key=composite_key(key),
                    row_index=row_index,
                    key_fields=fields,
                    key_values=list(key),
                )
            )

    mismatches: List[MismatchEntry] = []
    if strict:
        for key, (source_row, source_record) in source_index.items():
            matched = destination_index.get(key)
            if matched is None:
                continue
            destination_row, destination_record = matched
            diffs = find_field_mismatches(source_record, destination_record, fields)
            if diffs:
                mismatches.append(
                    MismatchEntry(
                        composite_key=composite_key(key),
                        source_row_index=source_row,
                        destination_row_index=destination_row,
                        key_fields=fields,
                        key_values=list(key),
                        field_diffs=diffs,
                    )
                )

    missing_count, extra_count, mismatch_count = len(missing), len(extra), len(mismatches)
    summary = ReconciliationSummary(
        source_record_count=len(source),
        destination_record_count=len(destination),
        matching_records=len(source) - missing_count,
        missing_count=missing_count,
        extra_count=extra_count,
        mismatch_count=mismatch_count,
        key_fields=fields,
        strict=strict,
        status=overall_status(missing_count, extra_count, mismatch_count, thresholds),
        priority=priority_level(missing_count, extra_count, mismatch_count, thresholds),
        next_steps=next_steps(missing_count, extra_count, mismatch_count),
    )

    log.info(
        "reconcile.compare.complete",
        source=summary.source_record_count,
        destination=summary.destination_record_count,
        missing=missing_count,
        extra=extra_count,
        mismatches=mismatch_count,
        status=summary.status.value,
    )
    return ReconciliationResult(
        missing=missing,
        extra=extra,
        mismatches=mismatches,
        summary=summary,
    )


__all__ = [
    "find_field_mismatches",
    "next_steps",
    "overall_status",
    "priority_level",
    "reconcile",
]

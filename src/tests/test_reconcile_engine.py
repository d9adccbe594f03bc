from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from tablecheck.errors import PreconditionError
from tablecheck.reconcile import (
    PriorityLevel,
    ReconciliationStatus,
    StatusThresholds,
    find_field_mismatches,
    next_steps,
    overall_status,
    priority_level,
    reconcile,
)


def _records(ids: list[str], **names: str) -> list[dict[str, str]]:
    return [{"id": key, "name": names.get(f"n{key}", f"name-{key}")} for key in ids]


SOURCE = _records(["1", "2", "3", "4"])
DESTINATION = _records(["1", "2", "3", "5"], n2="renamed")


def test_missing_and_extra_by_key() -> None:
    result = reconcile(SOURCE, DESTINATION, ["id"])

    assert [entry.composite_key for entry in result.missing] == ["4"]
    assert [entry.composite_key for entry in result.extra] == ["5"]
    assert result.missing[0].row_index == 4
    assert result.extra[0].row_index == 4
    assert result.mismatches == []
    assert result.summary.matching_records == 3


def test_strict_mode_reports_field_differences() -> None:
    result = reconcile(SOURCE, DESTINATION, ["id"], strict=True)

    assert len(result.mismatches) == 1
    mismatch = result.mismatches[0]
    assert mismatch.composite_key == "2"
    assert mismatch.source_row_index == 2
    assert mismatch.destination_row_index == 2
    assert [(diff.field, diff.source_value, diff.destination_value) for diff in mismatch.field_diffs] == [
        ("name", "name-2", "renamed")
    ]
    assert result.summary.mismatch_count == 1


def test_rerun_yields_identical_result() -> None:
    first = reconcile(SOURCE, DESTINATION, ["id"], strict=True)
    second = reconcile(SOURCE, DESTINATION, ["id"], strict=True)

    assert first == second


def test_unloaded_dataset_is_a_precondition_error() -> None:
    with pytest.raises(PreconditionError, match="must be loaded"):
        reconcile(None, DESTINATION, ["id"])
    with pytest.raises(PreconditionError):
        reconcile(SOURCE, None, ["id"])


def test_empty_sides_are_legal() -> None:
    only_destination = reconcile([], DESTINATION, ["id"])
    both_empty = reconcile([], [])

    assert only_destination.missing == []
    assert len(only_destination.extra) == 4
    assert both_empty.summary.status is ReconciliationStatus.PERFECT
    assert both_empty.summary.key_fields == []


def test_key_fields_default_to_first_source_record() -> None:
    result = reconcile(SOURCE, SOURCE)

    assert result.summary.key_fields == ["id", "name"]
    assert not result.has_differences


def test_key_fields_fall_back_to_destination_when_source_is_empty() -> None:
    result = reconcile([], DESTINATION)

    assert result.summary.key_fields == ["id", "name"]


def test_composite_keys_and_later_duplicates_overwrite() -> None:
    source = [
        {"id": "1", "org": "A", "total": "10"},
        {"id": "1", "org": "A", "total": "11"},
    ]
    destination = [{"id": "1", "org": "A", "total": "11"}]

    result = reconcile(source, destination, ["id", "org"], strict=True)

    assert result.missing == []
    assert result.extra == []
    assert result.mismatches == []
    assert result.summary.source_record_count == 2


def test_field_comparison_strips_whitespace_and_covers_both_sides() -> None:
    diffs = find_field_mismatches(
        {"id": "1", "name": " Acme ", "region": None},
        {"id": "1", "name": "Acme", "region": "", "tier": "gold"},
        ["id"],
    )

    assert [(diff.field, diff.source_value, diff.destination_value) for diff in diffs] == [
        ("tier", "", "gold")
    ]


def test_status_bands_and_priority() -> None:
    assert overall_status(0, 0, 0) is ReconciliationStatus.PERFECT
    assert overall_status(5, 5, 10) is ReconciliationStatus.MINOR
    assert overall_status(6, 0, 0) is ReconciliationStatus.MODERATE
    assert overall_status(0, 21, 0) is ReconciliationStatus.MAJOR

    assert priority_level(0, 0, 0) is PriorityLevel.LOW
    assert priority_level(4, 3, 3) is PriorityLevel.MEDIUM
    assert priority_level(4, 4, 3) is PriorityLevel.HIGH


def test_thresholds_are_configurable() -> None:
    strict_policy = StatusThresholds(minor_missing=0, moderate_missing=0, priority_medium_max=0)

    result = reconcile(SOURCE, DESTINATION, ["id"], thresholds=strict_policy)

    assert result.summary.status is ReconciliationStatus.MAJOR
    assert result.summary.priority is PriorityLevel.HIGH


def test_next_steps() -> None:
    assert next_steps(0, 0, 0) == ["Files are identical - no action needed"]
    assert next_steps(1, 0, 2) == [
        "Review missing records in destination",
        "Review data mismatches",
    ]


_ids = st.sets(st.integers(min_value=0, max_value=50), max_size=20)


@given(_ids, _ids)
def test_missing_and_extra_are_set_differences(source_ids: set[int], destination_ids: set[int]) -> None:
    source = [{"id": str(value)} for value in sorted(source_ids)]
    destination = [{"id": str(value)} for value in sorted(destination_ids)]

    result = reconcile(source, destination, ["id"], strict=True)

    assert {entry.composite_key for entry in result.missing} == {
        str(value) for value in source_ids - destination_ids
    }
    assert {entry.composite_key for entry in result.extra} == {
        str(value) for value in destination_ids - source_ids
    }
    assert result.mismatches == []
    assert result.summary.matching_records == len(source_ids & destination_ids)

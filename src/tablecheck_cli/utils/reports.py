"""JSON and CSV report writers shared by the CLI commands."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from tablecheck.pipeline import ValidationReport
from tablecheck.reconcile.models import ReconciliationResult
from tablecheck_cli.utils.errors import TableCheckIOError

ReportRow = dict[str, Any]


def write_json_report(path: Path, payload: BaseModel | Mapping[str, Any]) -> None:
    """Serialise *payload* as indented JSON, creating parent folders."""

    data = payload.model_dump(mode="json") if isinstance(payload, BaseModel) else payload
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)
    except OSError as exc:
        raise TableCheckIOError(f"Unable to write JSON report '{path}': {exc}") from exc


def write_csv_report(path: Path, rows: Iterable[ReportRow], fieldnames: list[str]) -> None:
    """Write flat *rows* to *path*; an empty row set still gets a header."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=fieldnames, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(rows)
    except OSError as exc:
        raise TableCheckIOError(f"Unable to write CSV report '{path}': {exc}") from exc


VALIDATION_CSV_FIELDS = ["row_index", "severity", "message"]
RECONCILE_CSV_FIELDS = [
    "category",
    "composite_key",
    "source_row_index",
    "destination_row_index",
    "field",
    "source_value",
    "destination_value",
]


def validation_rows(report: ValidationReport) -> list[ReportRow]:
    """One row per error or warning of every record that produced one."""

    rows: list[ReportRow] = []
    for outcome in report.outcomes:
        for message in outcome.errors:
            rows.append(
                {"row_index": outcome.row_index, "severity": "error", "message": message}
            )
        for message in outcome.warnings:
            rows.append(
                {"row_index": outcome.row_index, "severity": "warning", "message": message}
            )
    return rows


def reconciliation_rows(result: ReconciliationResult) -> list[ReportRow]:
    """Flatten missing, extra and per-field mismatch entries."""

    rows: list[ReportRow] = []
    for entry in result.missing:
        rows.append(
            {
                "category": "missing",
                "composite_key": entry.composite_key,
                "source_row_index": entry.row_index,
            }
        )
    for entry in result.extra:
        rows.append(
            {
                "category": "extra",
                "composite_key": entry.composite_key,
                "destination_row_index": entry.row_index,
            }
        )
    for mismatch in result.mismatches:
        for diff in mismatch.field_diffs:
            rows.append(
                {
                    "category": "mismatch",
                    "composite_key": mismatch.composite_key,
                    "source_row_index": mismatch.source_row_index,
                    "destination_row_index": mismatch.destination_row_index,
                    "field": diff.field,
                    "source_value": diff.source_value,
                    "destination_value": diff.destination_value,
                }
            )
    return rows


__all__ = [
    "RECONCILE_CSV_FIELDS",
    "VALIDATION_CSV_FIELDS",
    "reconciliation_rows",
    "validation_rows",
    "write_csv_report",
    "write_json_report",
]

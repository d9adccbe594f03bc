"""Typer command reconciling a source file against a destination file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog
import typer

from tablecheck.reconcile import ReconciliationStatus, reconcile
from tablecheck_cli.config import load_profile, thresholds_from_profile
from tablecheck_cli.utils.inputs import (
    read_table_or_fail,
    require_columns,
    resolve_delimiter,
    resolve_key_fields,
)
from tablecheck_cli.utils.reports import (
    RECONCILE_CSV_FIELDS,
    reconciliation_rows,
    write_csv_report,
    write_json_report,
)

log = structlog.get_logger(__name__)

PREVIEW_LIMIT = 10

_STATUS_COLOURS = {
    ReconciliationStatus.PERFECT: typer.colors.GREEN,
    ReconciliationStatus.MINOR: typer.colors.YELLOW,
    ReconciliationStatus.MODERATE: typer.colors.YELLOW,
    ReconciliationStatus.MAJOR: typer.colors.RED,
}


def compare(
    source: Path = typer.Argument(..., help="Source (expected) data file"),
    destination: Path = typer.Argument(..., help="Destination (actual) data file"),
    key_fields: Optional[str] = typer.Option(
        None,
        "--key-fields",
        help="Comma separated columns forming the record key (default: all source columns)",
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--no-strict",
        help="Also compare non-key fields of matched records",
    ),
    delimiter: Optional[str] = typer.Option(
        None, "--delimiter", help="Column delimiter; detected from the header when omitted"
    ),
    json_report: Optional[Path] = typer.Option(
        None, "--json", help="Path to write the reconciliation result as JSON"
    ),
    csv_report: Optional[Path] = typer.Option(
        None, "--csv", help="Path to write one row per difference"
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", help="Configuration profile from tablecheck.toml"
    ),
) -> None:
    """Report missing, extra and mismatched records between two files."""

    context = load_profile(profile=profile)
    separator = resolve_delimiter(delimiter, context)
    keys = resolve_key_fields(key_fields, context)
    strict_mode = context.strict() if strict is None else strict
    thresholds = thresholds_from_profile(context)

    log.info(
        "compare.start",
        source=str(source),
        destination=str(destination),
        key_fields=keys,
        strict=strict_mode,
        profile=context.name,
    )

    source_table = read_table_or_fail(source, separator)
    destination_table = read_table_or_fail(destination, separator)
    if keys:
        require_columns(source_table, keys, label=f"source {source}")
        require_columns(destination_table, keys, label=f"destination {destination}")

    result = reconcile(
        source_table.records,
        destination_table.records,
        keys,
        strict_mode,
        thresholds=thresholds,
    )

    summary = result.summary
    typer.secho(
        f"Source: {summary.source_record_count} record(s)  "
        f"destination: {summary.destination_record_count} record(s)  "
        f"matching: {summary.matching_records}",
        fg=typer.colors.CYAN,
    )
    typer.secho(f"Key fields: {', '.join(summary.key_fields)}", fg=typer.colors.CYAN)
    typer.secho(
        f"Missing: {summary.missing_count}  extra: {summary.extra_count}  "
        f"mismatched: {summary.mismatch_count}",
        fg=typer.colors.CYAN,
    )

    sections = (
        ("Missing in destination", result.missing),
        ("Extra in destination", result.extra),
    )
    for label, entries in sections:
        if entries:
            typer.secho(f"{label}:", fg=typer.colors.YELLOW)
            for entry in entries[:PREVIEW_LIMIT]:
                typer.echo(f"  {entry.composite_key} (row {entry.row_index})")
    if result.mismatches:
        typer.secho("Field mismatches:", fg=typer.colors.YELLOW)
        for mismatch in result.mismatches[:PREVIEW_LIMIT]:
            for diff in mismatch.field_diffs:
                typer.echo(
                    f"  {mismatch.composite_key} {diff.field}: "
                    f"'{diff.source_value}' != '{diff.destination_value}'"
                )

    typer.secho(
        f"Status: {summary.status.value} (priority {summary.priority.value})",
        fg=_STATUS_COLOURS[summary.status],
    )
    for step in summary.next_steps:
        typer.echo(f"  - {step}")

    if csv_report:
        write_csv_report(csv_report, reconciliation_rows(result), RECONCILE_CSV_FIELDS)
        typer.secho(f"Wrote CSV report to {csv_report}", fg=typer.colors.BLUE)
    if json_report:
        write_json_report(json_report, result)
        typer.secho(f"Wrote JSON report to {json_report}", fg=typer.colors.BLUE)

    if result.has_differences:
        raise typer.Exit(code=1)


__all__ = ["compare"]

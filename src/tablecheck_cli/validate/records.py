"""Validate every record of a data file against a rule mapping."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Optional

import structlog
import typer

from tablecheck.pipeline import run_validation
from tablecheck.validations.record import classify_error, field_error_counts
from tablecheck_cli.config import load_profile
from tablecheck_cli.utils.inputs import (
    load_rules_or_fail,
    read_table_or_fail,
    resolve_delimiter,
    resolve_key_fields,
)
from tablecheck_cli.utils.progress import progress_tracker
from tablecheck_cli.utils.reports import (
    VALIDATION_CSV_FIELDS,
    validation_rows,
    write_csv_report,
    write_json_report,
)

log = structlog.get_logger(__name__)

PREVIEW_LIMIT = 10


def validate_records_command(
    mapping: Path = typer.Argument(..., help="Rule mapping file (CSV, YAML or JSON)"),
    input_file: Path = typer.Argument(..., help="Delimited data file to validate"),
    delimiter: Optional[str] = typer.Option(
        None, "--delimiter", help="Column delimiter; detected from the header when omitted"
    ),
    key_fields: Optional[str] = typer.Option(
        None,
        "--key-fields",
        help="Comma separated columns identifying duplicates (default: all columns)",
    ),
    json_report: Optional[Path] = typer.Option(
        None, "--json", help="Path to write the full validation report as JSON"
    ),
    csv_report: Optional[Path] = typer.Option(
        None, "--csv", help="Path to write one row per error or warning"
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", help="Configuration profile from tablecheck.toml"
    ),
) -> None:
    """Validate records, report duplicates and formatting issues."""

    context = load_profile(profile=profile)
    rules = load_rules_or_fail(mapping)
    table = read_table_or_fail(input_file, resolve_delimiter(delimiter, context))
    keys = resolve_key_fields(key_fields, context)

    log.info(
        "validate.records.start",
        mapping=str(mapping),
        input=str(input_file),
        rules=len(rules),
        records=len(table),
        profile=context.name,
    )

    with progress_tracker("Validate Records", total=len(table)) as tracker:
        report = run_validation(
            table.records,
            rules,
            headers=table.headers,
            key_fields=keys,
            progress_callback=tracker.callback,
        )
        tracker.succeed(f"Validated {len(table)} record(s) against {len(rules)} rule(s).")

    stats = report.stats
    typer.secho(
        f"Records: {stats.total_records}  valid: {stats.valid_records}  "
        f"invalid: {stats.invalid_records}  success rate: {stats.success_rate:.1f}%",
        fg=typer.colors.CYAN,
    )

    if report.headers is not None and report.headers.missing:
        typer.secho(
            f"Missing columns: {', '.join(report.headers.missing)}",
            fg=typer.colors.YELLOW,
        )

    invalid = report.invalid_outcomes
    if invalid:
        typer.secho("Field error summary:", fg=typer.colors.YELLOW)
        for field_name, count in field_error_counts(invalid).most_common():
            typer.secho(f"  {field_name}: {count}", fg=typer.colors.YELLOW)

        categories = Counter(
            classify_error(message) for outcome in invalid for message in outcome.errors
        )
        typer.secho("Unique error types:", fg=typer.colors.YELLOW)
        for category, count in sorted(categories.items()):
            typer.secho(f"  {category}: {count}", fg=typer.colors.YELLOW)

        for outcome in invalid[:PREVIEW_LIMIT]:
            typer.secho(f"  Row {outcome.row_index}:", fg=typer.colors.RED)
            for message in outcome.errors:
                typer.secho(f"    {message}", fg=typer.colors.RED)
        if len(invalid) > PREVIEW_LIMIT:
            typer.echo(f"  ... and {len(invalid) - PREVIEW_LIMIT} more invalid record(s)")
    else:
        typer.secho("All records are valid", fg=typer.colors.GREEN)

    if report.duplicates:
        typer.secho(f"Duplicate records: {len(report.duplicates)}", fg=typer.colors.YELLOW)
        for duplicate in report.duplicates[:PREVIEW_LIMIT]:
            typer.echo(
                f"  Row {duplicate.row_index} duplicates row {duplicate.first_seen_row_index}"
            )
    if report.formatting_issues:
        typer.secho(
            f"Records with formatting issues: {len(report.formatting_issues)}",
            fg=typer.colors.YELLOW,
        )

    if csv_report:
        write_csv_report(csv_report, validation_rows(report), VALIDATION_CSV_FIELDS)
        typer.secho(f"Wrote CSV report to {csv_report}", fg=typer.colors.BLUE)
    if json_report:
        write_json_report(json_report, report)
        typer.secho(f"Wrote JSON report to {json_report}", fg=typer.colors.BLUE)

    if invalid:
        raise typer.Exit(code=1)


__all__ = ["validate_records_command"]

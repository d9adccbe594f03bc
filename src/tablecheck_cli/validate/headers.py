"""Compare the columns of a data file with the columns a mapping expects."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog
import typer

from tablecheck.validations.headers import compare_headers
from tablecheck_cli.config import load_profile
from tablecheck_cli.utils.inputs import (
    load_rules_or_fail,
    read_table_or_fail,
    resolve_delimiter,
)

log = structlog.get_logger(__name__)


def validate_headers_command(
    mapping: Path = typer.Argument(..., help="Rule mapping file (CSV, YAML or JSON)"),
    input_file: Path = typer.Argument(..., help="Delimited data file to inspect"),
    delimiter: Optional[str] = typer.Option(
        None, "--delimiter", help="Column delimiter; detected from the header when omitted"
    ),
) -> None:
    """Report missing, extra and case-mismatched columns."""

    rules = load_rules_or_fail(mapping)
    table = read_table_or_fail(input_file, resolve_delimiter(delimiter, load_profile()))
    comparison = compare_headers([rule.field_name for rule in rules], table.headers)
    log.info(
        "validate.headers.compared",
        input=str(input_file),
        missing=len(comparison.missing),
        extra=len(comparison.extra),
    )

    typer.secho(
        f"Expected {len(comparison.expected)} column(s), found {len(comparison.actual)}; "
        f"{len(comparison.matched)} matched",
        fg=typer.colors.CYAN,
    )
    if comparison.missing:
        typer.secho("Missing columns:", fg=typer.colors.RED)
        for name in comparison.missing:
            typer.secho(f"  {name}", fg=typer.colors.RED)
    if comparison.extra:
        typer.secho("Extra columns:", fg=typer.colors.YELLOW)
        for name in comparison.extra:
            typer.secho(f"  {name}", fg=typer.colors.YELLOW)
    for expected, actual in comparison.case_mismatches:
        typer.secho(
            f"  '{expected}' differs only by case from '{actual}'", fg=typer.colors.YELLOW
        )
    if comparison.is_match:
        typer.secho("Headers match the mapping", fg=typer.colors.GREEN)

    if comparison.missing:
        raise typer.Exit(code=1)


__all__ = ["validate_headers_command"]

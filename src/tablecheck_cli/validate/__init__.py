"""Typer application grouping the validation commands."""

import typer

from tablecheck_cli.validate.headers import validate_headers_command
from tablecheck_cli.validate.records import validate_records_command
from tablecheck_cli.validate.rules import validate_rules_command

app = typer.Typer(name="validate", help="Validation commands")

app.command("records")(validate_records_command)
app.command("headers")(validate_headers_command)
app.command("rules")(validate_rules_command)


__all__ = ["app"]

"""Print the rules a mapping file resolves to."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import typer

from tablecheck_cli.utils.inputs import load_rules_or_fail


def validate_rules_command(
    mapping: Path = typer.Argument(..., help="Rule mapping file (CSV, YAML or JSON)"),
) -> None:
    """List loaded rules with a data type breakdown."""

    rules = load_rules_or_fail(mapping)

    typer.secho(f"Loaded {len(rules)} rule(s) from {mapping}", fg=typer.colors.CYAN)
    for rule in rules:
        flags = ["required" if rule.required else "optional"]
        if rule.min_length is not None or rule.max_length is not None:
            flags.append(f"length {rule.min_length or 0}..{rule.max_length or '*'}")
        if rule.pattern:
            flags.append(f"pattern {rule.pattern}")
        if rule.allowed_values:
            flags.append(f"values {', '.join(rule.allowed_values)}")
        typer.echo(f"  {rule.field_name}: {rule.original_type_spec} ({'; '.join(flags)})")

    types = Counter(rule.data_type.value for rule in rules)
    typer.secho("Data types:", fg=typer.colors.CYAN)
    for name, count in sorted(types.items()):
        typer.echo(f"  {name}: {count}")

    required = sum(1 for rule in rules if rule.required)
    typer.echo(f"Required: {required}  Optional: {len(rules) - required}")


__all__ = ["validate_rules_command"]

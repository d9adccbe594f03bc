"""Loading helpers that translate engine errors into CLI errors."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import structlog

from tablecheck.errors import RuleLoadError, TableReadError
from tablecheck.rules import FieldRule, load_rules
from tablecheck.tables import Table, read_table
from tablecheck_cli.config import ProfileContext, split_key_fields
from tablecheck_cli.utils.errors import (
    TableCheckConfigError,
    TableCheckValidationError,
    from_engine_error,
)

log = structlog.get_logger(__name__)


def load_rules_or_fail(path: Path) -> List[FieldRule]:
    try:
        rules = load_rules(path)
    except RuleLoadError as exc:
        log.error("cli.rules_failed", path=str(path), error=str(exc))
        raise from_engine_error(exc) from exc
    if not rules:
        raise TableCheckConfigError(f"No usable validation rules found in {path}")
    return rules


def read_table_or_fail(path: Path, delimiter: Optional[str]) -> Table:
    try:
        return read_table(path, delimiter)
    except TableReadError as exc:
        log.error("cli.table_failed", path=str(path), error=str(exc))
        raise from_engine_error(exc) from exc


def resolve_delimiter(option: Optional[str], context: ProfileContext) -> Optional[str]:
    """Command line value first, then the profile; ``None`` means auto-detect."""

    if option is not None:
        if option == "\\t":
            return "\t"
        if len(option) != 1:
            raise TableCheckConfigError(
                f"--delimiter must be a single character, got {option!r}"
            )
        return option
    return context.delimiter()


def resolve_key_fields(option: Optional[str], context: ProfileContext) -> Optional[List[str]]:
    if option:
        return split_key_fields(option) or None
    return context.key_fields()


def require_columns(table: Table, columns: Sequence[str], *, label: str) -> None:
    """Fail when a non-empty *table* lacks any of *columns*."""

    if not table.headers:
        return
    absent = [name for name in columns if name not in table.headers]
    if absent:
        raise TableCheckValidationError(
            f"Key field(s) not found in {label}: {', '.join(absent)}"
        )


__all__ = [
    "load_rules_or_fail",
    "read_table_or_fail",
    "require_columns",
    "resolve_delimiter",
    "resolve_key_fields",
]

"""CLI error types, exit codes and the mapping from engine exceptions."""

from __future__ import annotations

from enum import IntEnum

from tablecheck.errors import (
    PreconditionError,
    RuleLoadError,
    TableCheckError,
    TableReadError,
)


class ExitCode(IntEnum):
    """Process exit codes of the ``tablecheck`` command."""

    SUCCESS = 0
    VALIDATION = 1
    IO = 2
    CONFIG = 3
    RUNTIME = 5


class TableCheckCliError(Exception):
    """An error the CLI reports as a one-line message plus an exit code."""

    exit_code: ExitCode = ExitCode.RUNTIME
    label = "Error"

    def __init__(self, message: str, *, exit_code: ExitCode | int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = ExitCode(type(self).exit_code if exit_code is None else exit_code)

    def __str__(self) -> str:
        return self.message

    @property
    def heading(self) -> str:
        return type(self).label


class TableCheckValidationError(TableCheckCliError):
    exit_code = ExitCode.VALIDATION
    label = "Validation error"


class TableCheckIOError(TableCheckCliError):
    """A data, rule or report file could not be read or written."""

    exit_code = ExitCode.IO
    label = "I/O error"


class TableCheckConfigError(TableCheckCliError):
    """A profile, option value or rule mapping is unusable."""

    exit_code = ExitCode.CONFIG
    label = "Configuration error"


class TableCheckRuntimeError(TableCheckCliError):
    exit_code = ExitCode.RUNTIME
    label = "Runtime error"


_ENGINE_ERRORS: tuple[tuple[type[TableCheckError], type[TableCheckCliError]], ...] = (
    (TableReadError, TableCheckIOError),
    (RuleLoadError, TableCheckIOError),
    (PreconditionError, TableCheckRuntimeError),
)


def from_engine_error(exc: TableCheckError) -> TableCheckCliError:
    """Wrap an engine exception in the CLI error that carries its exit code."""

    for engine_type, cli_type in _ENGINE_ERRORS:
        if isinstance(exc, engine_type):
            return cli_type(str(exc))
    return TableCheckRuntimeError(str(exc))


__all__ = [
    "ExitCode",
    "TableCheckCliError",
    "TableCheckConfigError",
    "TableCheckIOError",
    "TableCheckRuntimeError",
    "TableCheckValidationError",
    "from_engine_error",
]

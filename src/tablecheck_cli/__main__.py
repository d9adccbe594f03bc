"""Console entry point for the tablecheck CLI application."""

from __future__ import annotations

import sys
from typing import Sequence

import structlog
import typer

from tablecheck.errors import TableCheckError
from tablecheck_cli.app import app
from tablecheck_cli.utils.errors import ExitCode, TableCheckCliError, from_engine_error

log = structlog.get_logger(__name__)


def _report(exc: TableCheckCliError) -> int:
    typer.secho(f"{exc.heading}: {exc}", fg=typer.colors.RED, err=True)
    return int(exc.exit_code)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Typer application and translate its outcome into an exit code.

    Commands signal findings with ``typer.Exit(code=1)``; predictable failures
    surface as :class:`TableCheckCliError`. Engine exceptions that escape a
    command are mapped with :func:`from_engine_error`.
    """

    args = list(argv) if argv is not None else None
    try:
        result = app(args=args, standalone_mode=False)
    except TableCheckCliError as exc:
        return _report(exc)
    except TableCheckError as exc:
        log.error("cli.engine_error", error=str(exc), kind=type(exc).__name__)
        return _report(from_engine_error(exc))
    return int(ExitCode.SUCCESS) if result is None else int(result)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

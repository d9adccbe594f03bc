"""Exceptions raised by the tablecheck engine."""

from __future__ import annotations


class TableCheckError(Exception):
    """Base class for errors raised by the engine."""


class PreconditionError(TableCheckError, ValueError):
    """Raised when an engine operation is invoked without its required inputs.

    This signals caller misuse (for example reconciling before both datasets
    were loaded) rather than bad data, which is always reported on the result
    structures instead.
    """


class RuleLoadError(TableCheckError):
    """Raised when a rule definition file cannot be read or has the wrong shape."""


class TableReadError(TableCheckError):
    """Raised when a delimited data file cannot be read."""


__all__ = [
    "TableCheckError",
    "PreconditionError",
    "RuleLoadError",
    "TableReadError",
]

"""Expected-versus-actual column comparison."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from pydantic import BaseModel


class HeaderComparison(BaseModel):
    expected: List[str]
    actual: List[str]
    matched: List[str]
    missing: List[str]
    extra: List[str]
    case_mismatches: List[Tuple[str, str]]

    @property
    def is_match(self) -> bool:
        return not self.missing and not self.extra


def compare_headers(expected: Sequence[str], actual: Sequence[str]) -> HeaderComparison:
    """Case-sensitive set difference of *expected* and *actual* columns.

    ``case_mismatches`` pairs a missing expected column with an extra actual
    column that only differs by case, which is usually the fix a user wants.
    """

    actual_set = set(actual)
    expected_set = set(expected)
    matched = [name for name in expected if name in actual_set]
    missing = [name for name in expected if name not in actual_set]
    extra = [name for name in actual if name not in expected_set]

    extra_by_lower = {}
    for name in extra:
        extra_by_lower.setdefault(name.lower(), name)
    case_mismatches = [
        (name, extra_by_lower[name.lower()])
        for name in missing
        if name.lower() in extra_by_lower
    ]

    return HeaderComparison(
        expected=list(expected),
        actual=list(actual),
        matched=matched,
        missing=missing,
        extra=extra,
        case_mismatches=case_mismatches,
    )


__all__ = ["HeaderComparison", "compare_headers"]

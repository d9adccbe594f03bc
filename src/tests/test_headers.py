from __future__ import annotations

from tablecheck.validations.headers import compare_headers


def test_matching_headers() -> None:
    comparison = compare_headers(["id", "name"], ["name", "id"])

    assert comparison.is_match
    assert comparison.matched == ["id", "name"]
    assert comparison.missing == []
    assert comparison.extra == []


def test_missing_extra_and_case_mismatches() -> None:
    comparison = compare_headers(["id", "Name", "email"], ["id", "name", "phone"])

    assert not comparison.is_match
    assert comparison.missing == ["Name", "email"]
    assert comparison.extra == ["name", "phone"]
    assert comparison.case_mismatches == [("Name", "name")]

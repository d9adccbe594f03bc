from __future__ import annotations

from pathlib import Path

import pytest

from tablecheck.errors import RuleLoadError
from tablecheck.rules import DataType, load_rules
from tablecheck.rules.loader import build_rules, resolve_aliases
from tablecheck.rules.models import normalize_data_type


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_csv_mapping_with_target_aliases(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "mapping.csv",
        "Target Field Name,Target Data Type,Null Allowed,Max Length,Allowed Values\n"
        "AccountId,Text(18),No,18,\n"
        "Amount,\"DECIMAL(18,2)\",Yes,,\n"
        "Status,Picklist,,,\"Open, Closed\"\n",
    )

    rules = load_rules(path)

    assert [rule.field_name for rule in rules] == ["AccountId", "Amount", "Status"]
    account, amount, status = rules
    assert account.required is True
    assert account.max_length == 18
    assert account.data_type is DataType.STRING
    assert amount.required is False
    assert amount.data_type is DataType.DECIMAL
    assert amount.original_type_spec == "DECIMAL(18,2)"
    assert amount.decimal_spec is not None and amount.decimal_spec.scale == 2
    assert status.required is False
    assert status.allowed_values == ("Open", "Closed")


def test_explicit_required_column_wins_over_null_allowed() -> None:
    rules = build_rules(
        [
            {"fieldName": "a", "required": "true", "nullAllowed": "yes"},
            {"fieldName": "b", "required": "false", "nullAllowed": "no"},
            {"fieldName": "c"},
        ]
    )

    assert [rule.required for rule in rules] == [True, False, False]


def test_unparseable_rows_are_skipped() -> None:
    rules = build_rules(
        [
            {"fieldName": "   "},
            {"description": "no name at all"},
            {"fieldName": "bad_length", "minLength": "three"},
            {"fieldName": "negative", "maxLength": "-1"},
            {"fieldName": "ok", "minLength": "2.0"},
        ]
    )

    assert [rule.field_name for rule in rules] == ["ok"]
    assert rules[0].min_length == 2


def test_first_non_blank_alias_wins() -> None:
    resolved = resolve_aliases({"fieldName": "", "Field Name": "Email", "Pattern": "@"})

    assert resolved == {"field_name": "Email", "pattern": "@"}


def test_yaml_rules_document(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "rules.yaml",
        """
rules:
  - field_name: id
    data_type: integer
    required: true
  - field_name: tier
    allowed_values: [1, 2, 3]
  - not a mapping
""".lstrip(),
    )

    rules = load_rules(path)

    assert [rule.field_name for rule in rules] == ["id", "tier"]
    assert rules[0].data_type is DataType.INTEGER
    assert rules[0].required is True
    assert rules[1].allowed_values == ("1", "2", "3")
    assert rules[1].original_type_spec == "string"


def test_json_list_document(tmp_path: Path) -> None:
    path = _write(tmp_path / "rules.json", '[{"fieldName": "created", "dataType": "DateTime"}]')

    rules = load_rules(path)

    assert rules[0].data_type is DataType.DATE


def test_unsupported_or_malformed_documents(tmp_path: Path) -> None:
    with pytest.raises(RuleLoadError, match="Unsupported"):
        load_rules(_write(tmp_path / "rules.xml", "<rules/>"))
    with pytest.raises(RuleLoadError):
        load_rules(_write(tmp_path / "scalar.yaml", "just text"))
    with pytest.raises(RuleLoadError):
        load_rules(tmp_path / "missing.csv")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("DECIMAL(18,2)", DataType.DECIMAL),
        ("Currency", DataType.DECIMAL),
        ("Checkbox Boolean", DataType.BOOLEAN),
        ("DateTime", DataType.DATE),
        ("Integer", DataType.INTEGER),
        ("PrintString", DataType.STRING),
        ("Lookup(Account)", DataType.STRING),
        ("", DataType.STRING),
        (None, DataType.STRING),
    ],
)
def test_normalize_data_type(raw: str | None, expected: DataType) -> None:
    assert normalize_data_type(raw) is expected


def test_negative_lengths_in_yaml_skip_the_rule(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "rules.yaml",
        """
rules:
  - fieldName: code
    maxLength: -1
  - fieldName: name
    minLength: -3
  - fieldName: kept
    maxLength: 0
""".lstrip(),
    )

    rules = load_rules(path)

    assert [rule.field_name for rule in rules] == ["kept"]
    assert rules[0].max_length == 0

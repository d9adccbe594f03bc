"""Composite-key duplicate detection within a single dataset."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import structlog
from pydantic import BaseModel

log = structlog.get_logger(__name__)

KEY_DISPLAY_SEPARATOR = "|"

KeyTuple = Tuple[str, ...]


class DuplicateEntry(BaseModel):
    row_index: int
    first_seen_row_index: int
    key_fields: List[str]
    key_values: List[str]


def key_values(record: Mapping[str, Optional[str]], key_fields: Sequence[str]) -> KeyTuple:
    """Return the string key values for *record*; missing and ``None`` become ``""``."""

    values = []
    for name in key_fields:
        value = record.get(name)
        values.append("" if value is None else str(value))
    return tuple(values)


def composite_key(values: Iterable[str]) -> str:
    """Render key values for display, e.g. ``"1001|ACME"``."""

    return KEY_DISPLAY_SEPARATOR.join(values)


def default_key_fields(records: Sequence[Mapping[str, Optional[str]]]) -> List[str]:
    """Every field of the first record, in column order."""

    if not records:
        return []
    return list(records[0].keys())


def detect_duplicates(
    records: Sequence[Mapping[str, Optional[str]]],
    key_fields: Optional[Sequence[str]] = None,
) -> List[DuplicateEntry]:
    """Report every second-and-later occurrence of a composite key.

    Without *key_fields* the whole row (as laid out by the first record) is the
    key. Entries are emitted in input order and reference the 1-based row of
    the first occurrence.
    """

    fields = list(key_fields) if key_fields else default_key_fields(records)
    first_seen: Dict[KeyTuple, int] = {}
    duplicates: List[DuplicateEntry] = []

    for row_index, record in enumerate(records, start=1):
        key = key_values(record, fields)
        canonical = first_seen.get(key)
        if canonical is None:
            first_seen[key] = row_index
            continue
        duplicates.append(
            DuplicateEntry(
                row_index=row_index,
                first_seen_row_index=canonical,
                key_fields=fields,
                key_values=list(key),
            )
        )

    if duplicates:
        log.info(
            "validate.duplicates.found",
            records=len(records),
            duplicates=len(duplicates),
            key_fields=fields,
        )
    return duplicates


__all__ = [
    "DuplicateEntry",
    "KEY_DISPLAY_SEPARATOR",
    "KeyTuple",
    "composite_key",
    "default_key_fields",
    "detect_duplicates",
    "key_values",
]

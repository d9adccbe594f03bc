"""Reading delimited text files into in-memory record lists."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import structlog

from tablecheck.errors import TableReadError

log = structlog.get_logger(__name__)

Record = Dict[str, Optional[str]]

CANDIDATE_DELIMITERS: tuple[str, ...] = (",", "|", ";", "\t")
DEFAULT_DELIMITER = ","


@dataclass
class Table:
    """Header row plus one mapping per data row."""

    headers: List[str] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


def detect_delimiter(header_line: str) -> str:
    """Return the first candidate delimiter that splits *header_line*."""

    for delimiter in CANDIDATE_DELIMITERS:
        if len(header_line.split(delimiter)) > 1:
            return delimiter
    return DEFAULT_DELIMITER


def read_table(path: Path, delimiter: str | None = None) -> Table:
    """Load *path* as a delimited table.

    The delimiter is detected from the header line when not given. Rows with
    fewer values than headers read the missing columns as ``None``; surplus
    values without a header are dropped. Quoted cells keep embedded line
    breaks.
    """

    headers: List[str] = []
    records: List[Record] = []
    try:
        with path.open(newline="", encoding="utf-8-sig") as handle:
            header_line = handle.readline()
            if not header_line:
                log.warning("tables.read.empty", path=str(path))
                return Table()
            resolved = delimiter or detect_delimiter(header_line.rstrip("\r\n"))
            handle.seek(0)
            reader = csv.DictReader(handle, delimiter=resolved)
            headers = list(reader.fieldnames or [])
            for row in reader:
                row.pop(None, None)  # type: ignore[call-overload]
                records.append(dict(row))
    except FileNotFoundError as exc:
        raise TableReadError(f"File not found: {path}") from exc
    except csv.Error as exc:
        raise TableReadError(f"Malformed delimited data in {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise TableReadError(f"Unable to read {path}: {exc}") from exc

    log.info(
        "tables.read.complete",
        path=str(path),
        delimiter=resolved,
        columns=len(headers),
        rows=len(records),
    )
    return Table(headers=headers, records=records)


__all__ = [
    "CANDIDATE_DELIMITERS",
    "DEFAULT_DELIMITER",
    "Record",
    "Table",
    "detect_delimiter",
    "read_table",
]

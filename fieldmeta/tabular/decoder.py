from __future__ import annotations

from enum import Enum
from pathlib import Path

"""CSV decoder for field-definition sheets.

Header row -> column names, remaining rows -> one record (列名→文字列) each.

Rules:
- comma delimiter, double-quote quoting, `""` inside quotes is a literal quote
- LF separates rows; CR is always dropped (CRLF / bare CR both behave as LF-only)
- single pass, one character of lookahead for the doubled-quote check only
- unterminated quote is closed implicitly at end of input (no error)
- a row made of exactly one empty field is discarded (blank line)

pandas は使わない: 引用符内の改行や CR の扱いを行単位で固定したいため自前で走査する。
"""

__all__ = [
    "BOM",
    "decode",
    "parse_rows",
    "read_csv_text",
    "strip_bom",
]

BOM = "\ufeff"

DELIMITER = ","
QUOTE = '"'
NEWLINE = "\n"
CARRIAGE_RETURN = "\r"


class ScanState(Enum):
    """Quoting state of the scanner."""
    OUTSIDE_QUOTES = "outside"
    INSIDE_QUOTES = "inside"


class _RowScanner:
    """Character scanner holding the three accumulators (field, row, rows)."""

    def __init__(self) -> None:
        self.state = ScanState.OUTSIDE_QUOTES
        self.field: list[str] = []
        self.row: list[str] = []
        self.rows: list[list[str]] = []

    def end_field(self) -> None:
        self.row.append("".join(self.field))
        self.field = []

    def end_row(self) -> None:
        # 末尾の空行 (単一の空フィールド) は捨てる
        if len(self.row) > 1 or (len(self.row) == 1 and self.row[0] != ""):
            self.rows.append(self.row)
        self.row = []

    def scan(self, text: str) -> list[list[str]]:
        i = 0
        n = len(text)
        while i < n:
            c = text[i]
            if c == CARRIAGE_RETURN:
                i += 1
                continue
            if self.state is ScanState.INSIDE_QUOTES:
                if c == QUOTE:
                    if i + 1 < n and text[i + 1] == QUOTE:
                        self.field.append(QUOTE)
                        i += 2
                        continue
                    self.state = ScanState.OUTSIDE_QUOTES
                else:
                    self.field.append(c)
            elif c == QUOTE:
                self.state = ScanState.INSIDE_QUOTES
            elif c == DELIMITER:
                self.end_field()
            elif c == NEWLINE:
                self.end_field()
                self.end_row()
            else:
                self.field.append(c)
            i += 1

        # last field/row (no trailing newline required)
        self.end_field()
        self.end_row()
        return self.rows


def strip_bom(text: str) -> str:
    """Drop a single leading byte-order mark. Only position 0 is inspected."""
    if text[:1] == BOM:
        return text[1:]
    return text


def parse_rows(text: str) -> list[list[str]]:
    """Split raw CSV text into rows of raw field strings (header included)."""
    return _RowScanner().scan(text)


def decode(text: str) -> list[dict[str, str]]:
    """Decode CSV text into header-keyed records.

    Returns an empty list when no rows remain (empty input, blank lines only,
    or header only). Rows shorter than the header resolve missing columns to "".
    """
    rows = parse_rows(strip_bom(text))
    if not rows:
        return []

    headers = [h.strip() for h in rows[0]]
    records: list[dict[str, str]] = []
    for cols in rows[1:]:
        record: dict[str, str] = {}
        for idx, header in enumerate(headers):
            record[header] = cols[idx] if idx < len(cols) else ""
        records.append(record)
    return records


def read_csv_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a CSV file fully into memory. OSError / UnicodeDecodeError propagate.

    newline="" で読み込み、CR の除去は decoder 側に任せる (universal newlines 無効)。
    """
    with path.open("r", encoding=encoding, newline="") as f:
        return f.read()

"""
CSV Engine (Raw Input → CsvDocument → Value Model).

Converts comma-separated text into an editable tabular document.

CSV Format:
    first non-blank line = headers, every further non-blank line = one row

Syntax Notes:
    - Delimiter is fixed at ','; quote character is fixed at '"'
    - "" inside a quoted field is a literal quote
    - Every row is forced to exactly len(headers) cells (pad / truncate)
    - Parsing NEVER raises: malformed quoting degrades to best-effort
      splitting and issues a CSVQuotingWarning
"""

import logging
import re
import warnings
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import CSVQuotingWarning, ErrorKind, Format, ParseError
from .serialization import to_compact_json
from .values import VArray, VNull, VObject, VString, Value, is_container, scalar_text

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'
DEFAULT_HEADER = "Column"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _fit_row(values: List[str], width: int) -> List[str]:
    """Pad with empty strings or truncate so the row has exactly `width` cells."""
    row = list(values[:width])
    if len(row) < width:
        row.extend([""] * (width - len(row)))
    return row


@dataclass
class CsvDocument:
    """
    Editable tabular document.

    Properties:
        headers: Column names, in order
        rows: Cells, each row exactly len(headers) long
        file_path: Where the document was loaded from (not part of equality)

    INVARIANT:
        len(row) == len(headers) for every row, after parsing and after
        every mutation below.

    Mutations are routine UI-driven edits: out-of-range indices return
    False instead of raising. Concurrent mutation is not supported.
    """

    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    file_path: Optional[str] = field(default=None, compare=False)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def get_value(self, row: int, column: int) -> Optional[str]:
        if not (0 <= row < len(self.rows) and 0 <= column < len(self.rows[row])):
            return None
        return self.rows[row][column]

    def get_value_by_header(self, row: int, header: str) -> Optional[str]:
        if header not in self.headers:
            return None
        return self.get_value(row, self.headers.index(header))

    def set_value(self, row: int, column: int, value: str) -> bool:
        if not (0 <= row < len(self.rows) and 0 <= column < len(self.rows[row])):
            return False
        self.rows[row][column] = value
        return True

    def add_row(self, values: Optional[List[str]] = None) -> None:
        """Append a row, padded or truncated to the header width."""
        self.rows.append(_fit_row(values or [], self.column_count))

    def delete_row(self, index: int) -> bool:
        if not 0 <= index < len(self.rows):
            return False
        del self.rows[index]
        return True

    def add_column(self, header: str, default_value: str = "") -> None:
        """Append a column and give every existing row `default_value`."""
        self.headers.append(header)
        for row in self.rows:
            row.append(default_value)

    def delete_column(self, index: int) -> bool:
        if not 0 <= index < len(self.headers):
            return False
        del self.headers[index]
        for row in self.rows:
            if index < len(row):
                del row[index]
        return True

    def to_csv_string(self, delimiter: str = DELIMITER) -> str:
        """Serialize headers and rows, one line each, newline-terminated."""
        lines = [_format_line(self.headers, delimiter)]
        lines.extend(_format_line(row, delimiter) for row in self.rows)
        return "".join(line + "\n" for line in lines)


def _escape_field(value: str, delimiter: str) -> str:
    if delimiter in value or QUOTE in value or "\n" in value or "\r" in value:
        return QUOTE + value.replace(QUOTE, QUOTE + QUOTE) + QUOTE
    return value


def _format_line(values: List[str], delimiter: str) -> str:
    line = delimiter.join(_escape_field(v, delimiter) for v in values)
    if values and not line.strip():
        # A blank line would be dropped on re-parse; quoting keeps the row.
        line = delimiter.join(QUOTE + v + QUOTE for v in values)
    return line


def parse_csv_line(line: str, line_number: Optional[int] = None) -> List[str]:
    """
    Split one CSV line into fields with a single-pass scanner.

    Args:
        line: Raw line, without its terminator
        line_number: 1-based line number used in the anomaly warning

    Returns:
        Fields (at least one)
    """
    fields: List[str] = []
    current: List[str] = []
    inside_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == QUOTE:
            if inside_quotes and i + 1 < len(line) and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            inside_quotes = not inside_quotes
        elif char == DELIMITER and not inside_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))

    if inside_quotes:
        where = f" at line {line_number}" if line_number is not None else ""
        warnings.warn(f"Unterminated quoted field{where}: {line!r}", CSVQuotingWarning)

    return fields


def parse_csv_string(csv_content: str, file_path: Optional[str] = None) -> CsvDocument:
    """
    Parse CSV content into a CsvDocument.

    Args:
        csv_content: CSV as string
        file_path: Optional origin, stored on the document

    Returns:
        CsvDocument with at least one header and at least one row.
        Blank input yields headers ["Column"] and one blank row.
    """
    numbered = [
        (number, line)
        for number, line in enumerate(_LINE_BREAK_RE.split(csv_content), start=1)
        if line.strip()
    ]

    headers: List[str] = []
    if numbered:
        number, line = numbered[0]
        headers = parse_csv_line(line, number)

    if not headers:
        headers = [DEFAULT_HEADER]

    rows = [_fit_row(parse_csv_line(line, number), len(headers)) for number, line in numbered[1:]]

    if not rows:
        rows.append([""] * len(headers))

    logger.debug("Parsed CSV: %d columns, %d rows", len(headers), len(rows))
    return CsvDocument(headers=headers, rows=rows, file_path=file_path)


def parse_csv_file(filepath: str) -> CsvDocument:
    """
    Parse CSV file into a CsvDocument.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"CSV file not found: {filepath}")

    return parse_csv_string(content, file_path=filepath)


def save_csv_file(document: CsvDocument, filepath: str) -> None:
    """Write the document to `filepath` and remember it as the document's path."""
    with open(filepath, "w", encoding="utf-8", newline="") as f:
        f.write(document.to_csv_string())
    document.file_path = filepath


def _value_keys(headers: List[str]) -> List[str]:
    """Object keys for each column; blank headers get a positional name."""
    return [h if h else f"{DEFAULT_HEADER} {i + 1}" for i, h in enumerate(headers)]


def csv_to_value(document: CsvDocument) -> VArray:
    """
    Expose a CsvDocument as an Array of Objects keyed by header.

    Cells stay strings; no type coercion is applied to tabular data.
    """
    keys = _value_keys(document.headers)
    return VArray([
        VObject({key: VString(cell) for key, cell in zip(keys, row)})
        for row in document.rows
    ])


def _cell_text(value: Value) -> str:
    if is_container(value):
        return to_compact_json(value)
    if isinstance(value, VNull):
        return ""
    return scalar_text(value)


def csv_from_value(value: Value) -> CsvDocument:
    """
    Build a CsvDocument from an Array of Objects.

    Headers are the union of member keys in first-seen order. Missing
    cells are empty; nested values are written as compact JSON.

    Raises:
        ParseError: CONVERSION_FAILED if the tree is not an Array of Objects
    """
    if not isinstance(value, VArray):
        raise ParseError(Format.CSV, ErrorKind.CONVERSION_FAILED, "CSV export needs an array of objects")

    headers: List[str] = []
    for item in value.items:
        if not isinstance(item, VObject):
            raise ParseError(Format.CSV, ErrorKind.CONVERSION_FAILED, "CSV export needs an array of objects")
        for key in item.members:
            if key not in headers:
                headers.append(key)

    document = CsvDocument(headers=headers or [DEFAULT_HEADER])
    for item in value.items:
        document.add_row([
            _cell_text(item.members[h]) if h in item.members else ""
            for h in document.headers
        ])
    return document


__all__ = [
    "CsvDocument",
    "parse_csv_line",
    "parse_csv_string",
    "parse_csv_file",
    "save_csv_file",
    "csv_to_value",
    "csv_from_value",
]

"""
CSV Parsing
============

Two small steps turn raw CSV text into a Table (a list of rows, each a
list of strings):

  1. normalize_lines(): one newline convention, no outer whitespace
  2. parse_csv():       RFC 4180 quoting, blank lines dropped

Cells are kept exactly as typed. "00123" stays "00123" here; deciding
whether it is a number is the classifier's job, at render time.

LEARNING POINT: Tolerant Parsing
-----------------------------------
An export button should not fail because one line in a 10,000 line
report has a stray quote. The parser never raises on odd input:

  - Ragged rows are fine (row lengths may differ)
  - `"abc"def` becomes `abcdef`
  - An unterminated quote swallows the rest of the input into one
    final field, newlines included. Nothing is silently dropped.
"""

import csv
import io

from sheetexport.utils.logger import setup_logger

logger = setup_logger(__name__)

# A single runaway quoted field may legitimately hold the whole input
_FIELD_SIZE_LIMIT = 2**31 - 1

Row = list[str]
Table = list[Row]

# Trimmed from both ends, NUL and vertical tab included
TRIM_CHARS = " \t\n\r\0\x0b"
_BOM = "\ufeff"


def normalize_lines(text: str) -> str:
    """
    Collapse CRLF/CR/LF to LF and trim outer whitespace.

    A leading UTF-8 byte-order mark is dropped as well, so CSV saved by
    a spreadsheet application (or by CsvSerializer) reads back cleanly.
    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.strip(TRIM_CHARS)


def parse_csv(text: str, delimiter: str = ",") -> Table:
    """
    Parse normalized CSV text into a Table.

    Quoted fields may contain the delimiter, doubled quotes ("") and
    newlines. Blank lines outside quotes are dropped, since CSV has no
    way to express a genuinely empty row.

    Args:
        text: Output of normalize_lines()
        delimiter: Single-character field separator

    Returns:
        The parsed rows; an empty list for empty input
    """
    if not text:
        return []

    reader = csv.reader(
        io.StringIO(text, newline=""),
        delimiter=delimiter,
        quotechar='"',
        doublequote=True,
        strict=False,
    )
    # The limit is module-global csv state; restore the host's value afterwards
    previous_limit = csv.field_size_limit(_FIELD_SIZE_LIMIT)
    try:
        table = [row for row in reader if row]
    finally:
        csv.field_size_limit(previous_limit)

    logger.debug(f"Parsed {len(table)} rows")
    return table


def read_table(text: str, delimiter: str = ",") -> Table:
    """Normalize and parse in one step."""
    return parse_csv(normalize_lines(text), delimiter=delimiter)

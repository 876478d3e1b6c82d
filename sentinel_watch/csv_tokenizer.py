"""
Tokenizer for the surveillance CSV exports.

The exports are not well-formed CSV: header blocks are merged across rows,
quoting is inconsistent and blank lines appear between sections. This module
turns the raw text into a ragged grid of string cells and never raises on
malformed input.
"""

import logging
import re
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

Grid = List[List[str]]

_LINE_BREAK = re.compile(r"\r\n|\n")

# Leading decimal number, as a spreadsheet would read "12.5" or "3.0 (est)".
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def split_fields(line: str, delimiter: str = ",", quote_char: str = '"') -> List[str]:
    """
    Split one line into fields with quote-aware state.

    A quote character toggles the quoted state; inside a quoted field a
    doubled quote is a literal quote and the delimiter is literal text.
    Unbalanced quotes simply leave the rest of the line in one field.

    Args:
        line: Single line of text without line breaks
        delimiter: Field delimiter character
        quote_char: Quote character

    Returns:
        List of unquoted field values
    """
    fields = []
    current = []
    in_quote = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == quote_char:
            if in_quote and i + 1 < length and line[i + 1] == quote_char:
                current.append(quote_char)
                i += 1
            else:
                in_quote = not in_quote
        elif char == delimiter and not in_quote:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields


def parse_delimited_text(
    text: Optional[str], delimiter: str = ",", quote_char: str = '"'
) -> Grid:
    """
    Tokenize raw export text into a grid of cells.

    Lines are split on CRLF or LF, trimmed, and blank lines are dropped.

    Args:
        text: Raw export text
        delimiter: Field delimiter character
        quote_char: Quote character

    Returns:
        Grid of rows; rows may have different lengths
    """
    if not text:
        return []

    lines = [line.strip() for line in _LINE_BREAK.split(text)]
    grid = [split_fields(line, delimiter, quote_char) for line in lines if line]

    logger.debug(f"Tokenized {len(grid)} rows")
    return grid


def cell_at(row: Sequence[str], index: int) -> str:
    """Return the cell at ``index`` or an empty string past the end of the row."""
    if 0 <= index < len(row):
        return row[index] or ""
    return ""


def parse_numeric_cell(value: Optional[str]) -> float:
    """
    Parse a value cell, reading its leading number.

    Cells without a leading number ("", "-", "X") become 0.0. Negative
    numbers are returned as-is.
    """
    if value is None:
        return 0.0

    match = _LEADING_NUMBER.match(value.strip())
    if not match:
        return 0.0
    return float(match.group(0))

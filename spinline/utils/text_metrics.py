"""Width and row computations for text containing ANSI escape sequences."""

import math
import re
import unicodedata
from typing import Optional

# CSI (ESC [ ... final), OSC (ESC ] ... BEL/ST), C1 CSI, then two-character ESC sequences
ANSI_PATTERN = re.compile(
    r'\x1b\[[0-?]*[ -/]*[@-~]'
    r'|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)'
    r'|\x9b[0-?]*[ -/]*[@-~]'
    r'|\x1b[ -/]*[0-~]'
)

# C0 controls (minus line feed), DEL and the C1 range
CONTROL_PATTERN = re.compile(r'[\x00-\x09\x0b-\x1f\x7f-\x9f]')


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences and control characters from text.

    Line feeds are kept so callers can still split the result into lines.
    """
    if not text:
        return ""
    text = ANSI_PATTERN.sub('', text)
    return CONTROL_PATTERN.sub('', text)


def _char_width(char: str) -> int:
    if unicodedata.category(char) in ('Mn', 'Me', 'Cf'):
        return 0
    if unicodedata.east_asian_width(char) in ('W', 'F'):
        return 2
    return 1


def visible_width(text: str) -> int:
    """Return the number of terminal columns text occupies.

    Escape sequences are zero-width. Wide and fullwidth characters take two
    columns, combining marks take none.

    Args:
        text: Text, possibly containing ANSI escape sequences

    Returns:
        Display width in columns
    """
    return sum(_char_width(char) for char in strip_ansi(text) if char != '\n')


def rows_occupied(text: str, columns: Optional[int]) -> int:
    """Return the number of terminal rows text occupies once printed.

    Each line of the text takes at least one row and wraps every ``columns``
    columns. An unknown or zero terminal width counts every line as one row.

    Args:
        text: Text to measure, may contain embedded newlines
        columns: Terminal width in columns

    Returns:
        Row count, 0 only for empty text
    """
    if not text:
        return 0

    rows = 0
    for line in strip_ansi(text).split('\n'):
        if not columns or columns <= 0:
            rows += 1
            continue
        rows += max(1, math.ceil(visible_width(line) / columns))
    return rows

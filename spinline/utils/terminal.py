"""Terminal capability detection and escape sequences."""

import os
from typing import Mapping, Optional

CSI = "\x1b["

CURSOR_TO_COLUMN_0 = "\r"
CLEAR_LINE = f"{CSI}2K"
CURSOR_UP = f"{CSI}1A"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"

# Synchronized output (DEC private mode 2026)
BEGIN_SYNCHRONIZED_UPDATE = f"{CSI}?2026h"
END_SYNCHRONIZED_UPDATE = f"{CSI}?2026l"

DEFAULT_TERMINAL_COLUMNS = 80


def is_interactive(stream, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check whether a stream is a real terminal that supports cursor control.

    Streams under automation (a non-empty ``CI``) or on a ``dumb`` terminal are treated
    as non-interactive even when they report a TTY.

    Args:
        stream: Writable stream to inspect
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        True if the spinner may redraw in place on this stream
    """
    environ = os.environ if environ is None else environ

    isatty = getattr(stream, 'isatty', None)
    if isatty is None:
        return False
    try:
        if not isatty():
            return False
    except ValueError:
        # Closed file
        return False

    if environ.get('TERM') == 'dumb':
        return False
    return not environ.get('CI')


def terminal_columns(stream) -> int:
    """Return the terminal width of a stream, falling back to 80 columns."""
    columns = getattr(stream, 'columns', None)
    if isinstance(columns, int) and columns > 0:
        return columns

    try:
        columns = os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return DEFAULT_TERMINAL_COLUMNS

    return columns if columns > 0 else DEFAULT_TERMINAL_COLUMNS

"""Terminal helpers: text metrics, colors and stream capabilities."""

from .colors import COLORS, DEFAULT_SYMBOLS, colorize
from .terminal import is_interactive, terminal_columns
from .text_metrics import rows_occupied, strip_ansi, visible_width

__all__ = [
    'COLORS',
    'DEFAULT_SYMBOLS',
    'colorize',
    'is_interactive',
    'terminal_columns',
    'rows_occupied',
    'strip_ansi',
    'visible_width'
]

"""ANSI color palette and default status symbols."""

from typing import Dict

from ..errors import ConfigurationError

# Foreground SGR codes; every color resets with 39 so nested styles survive
COLORS: Dict[str, int] = {
    'black': 30,
    'red': 31,
    'green': 32,
    'yellow': 33,
    'blue': 34,
    'magenta': 35,
    'cyan': 36,
    'white': 37,
    'gray': 90,
}

DEFAULT_COLOR = 'cyan'

DEFAULT_SYMBOLS: Dict[str, str] = {
    'success': '✔',
    'error': '✖',
    'warning': '⚠',
    'info': 'ℹ',
}

SYMBOL_COLORS: Dict[str, str] = {
    'success': 'green',
    'error': 'red',
    'warning': 'yellow',
    'info': 'blue',
}


def validate_color(color: str) -> str:
    """Return the color name if it is part of the palette."""
    if color not in COLORS:
        raise ConfigurationError(
            f"Unknown color '{color}'. Must be one of: {', '.join(COLORS)}"
        )
    return color


def colorize(text: str, color: str) -> str:
    """Wrap text in the SGR sequence for the given palette color."""
    if not text:
        return text
    return f"\x1b[{COLORS[validate_color(color)]}m{text}\x1b[39m"

"""Terminal spinner that keeps other console output intact."""

from .config_manager import ConfigManager
from .errors import ConfigurationError, SpinnerError
from .logging_setup import setup_logging
from .models.render_state import SpinnerState, SpinnerStyle
from .spinner import Spinner, spinner

__version__ = "0.1.0"

__all__ = [
    'ConfigManager',
    'ConfigurationError',
    'Spinner',
    'SpinnerError',
    'SpinnerState',
    'SpinnerStyle',
    'setup_logging',
    'spinner'
]

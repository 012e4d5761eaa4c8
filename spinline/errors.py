"""Exception types raised by spinline."""


class SpinnerError(Exception):
    """Base exception for spinner-related errors."""
    pass


class ConfigurationError(SpinnerError, ValueError):
    """Raised when a spinner is configured with invalid frames, interval or colors."""
    pass

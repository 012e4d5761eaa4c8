"""Data models for spinner configuration and render state."""

from .render_state import PendingLineBuffer, RenderState, SpinnerState, SpinnerStyle

__all__ = [
    'PendingLineBuffer',
    'RenderState',
    'SpinnerState',
    'SpinnerStyle'
]

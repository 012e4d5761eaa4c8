"""Cyclic source of animation frames."""

from typing import Optional

from ..errors import ConfigurationError
from ..models.render_state import SpinnerStyle


class FrameSource:
    """Hands out spinner glyphs in order, wrapping around forever."""

    def __init__(self, style: SpinnerStyle):
        if not style.frames:
            raise ConfigurationError("Spinner frames cannot be empty")
        self.frames = style.frames
        self.interval_ms = style.interval_ms
        self.index = 0
        self._current: Optional[str] = None

    def next(self) -> str:
        """Return the frame at the current index and advance by one."""
        frame = self.frames[self.index]
        self.index = (self.index + 1) % len(self.frames)
        self._current = frame
        return frame

    def current(self) -> str:
        """Return the last frame handed out without advancing."""
        if self._current is None:
            return self.frames[self.index]
        return self._current

    def reset(self):
        self.index = 0
        self._current = None

"""Data models for spinner styles and render bookkeeping."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from ..errors import ConfigurationError

DEFAULT_FRAMES = ('⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏')
DEFAULT_INTERVAL_MS = 80


class SpinnerState(Enum):
    """Lifecycle states of a spinner."""
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class SpinnerStyle:
    """Animation frames and the delay between them."""

    frames: Tuple[str, ...] = DEFAULT_FRAMES
    interval_ms: int = DEFAULT_INTERVAL_MS

    def __post_init__(self):
        """Normalize frames to a tuple and validate the style."""
        object.__setattr__(self, 'frames', tuple(self.frames or ()))
        self._validate()

    def _validate(self):
        if not self.frames:
            raise ConfigurationError("Spinner frames cannot be empty")

        if not all(isinstance(frame, str) for frame in self.frames):
            raise ConfigurationError("Spinner frames must be strings")

        if (isinstance(self.interval_ms, bool)
                or not isinstance(self.interval_ms, int)
                or self.interval_ms <= 0):
            raise ConfigurationError(
                f"Spinner interval must be a positive integer, got {self.interval_ms!r}"
            )

    @classmethod
    def from_value(cls, value: Optional[Any]) -> 'SpinnerStyle':
        """Build a style from None, an existing style, or a mapping.

        Mappings use ``frames`` and ``interval_ms`` keys; ``interval`` is
        accepted as an alias. Missing keys fall back to the defaults.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            interval = value.get('interval_ms', value.get('interval', DEFAULT_INTERVAL_MS))
            frames = value.get('frames', DEFAULT_FRAMES)
            if isinstance(frames, str):
                frames = list(frames)
            return cls(frames=frames, interval_ms=interval)
        raise ConfigurationError(f"Unsupported spinner style: {value!r}")


@dataclass
class RenderState:
    """What the spinner last put on screen.

    ``last_rendered_line_count`` always matches the rows the latest interactive
    draw occupied, so the next erase clears exactly those rows.
    """

    last_rendered_line_count: int = 0
    is_frame_on_screen: bool = False
    current_frame_index: int = 0
    last_rendered_text: str = ""

    def reset(self):
        """Forget everything drawn so far."""
        self.last_rendered_line_count = 0
        self.is_frame_on_screen = False
        self.current_frame_index = 0
        self.last_rendered_text = ""


@dataclass
class PendingLineBuffer:
    """Tail of a foreign write that has not been terminated by a newline yet."""

    partial: str = field(default="")

    def clear(self):
        self.partial = ""

    def __bool__(self) -> bool:
        return bool(self.partial)

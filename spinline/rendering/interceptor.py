"""Writer capabilities used by the spinner to reach its stream.

A spinner on a non-interactive stream writes straight to ``stream.write`` and
never touches the stream. On a terminal, the stream's ``write`` is replaced by
a wrapper so foreign output (logging handlers, prints to the same stream)
erases the spinner first and redraws it once a full line has been written.
"""

import threading
from typing import Any, Callable, Optional

from ..models.render_state import PendingLineBuffer, RenderState

_MISSING = object()

# Characters of a foreign partial line kept in the pending buffer
PENDING_TAIL_LIMIT = 64


class PassthroughWriter:
    """Writes to the stream as-is and leaves it untouched."""

    def __init__(self, stream):
        self.stream = stream

    @property
    def installed(self) -> bool:
        return False

    def install(self):
        pass

    def uninstall(self):
        pass

    def write(self, data: str) -> Any:
        return self.stream.write(data)


class InterceptingWriter(PassthroughWriter):
    """Replaces ``stream.write`` with a wrapper that keeps the spinner out of the way.

    The function found on the stream at install time is saved as the next
    writer. Spinner output goes to it directly so it never re-enters the
    wrapper, and uninstall puts exactly that object back.
    """

    def __init__(self, stream, state: RenderState, pending: PendingLineBuffer,
                 lock: threading.RLock, erase: Callable[[], None], redraw: Callable[[], None]):
        """Initialize the interceptor.

        Args:
            stream: Stream whose write function is wrapped
            state: Render state shared with the spinner
            pending: Buffer holding a foreign partial line
            lock: Lock serializing foreign writes with animation ticks
            erase: Callback erasing the frame through the saved writer
            redraw: Callback redrawing the frame through the saved writer
        """
        super().__init__(stream)
        self.state = state
        self.pending = pending
        self.lock = lock
        self._erase = erase
        self._redraw = redraw
        self._next_write: Optional[Callable[..., Any]] = None
        self._saved_attribute: Any = _MISSING
        self._wrapper: Optional[Callable[..., Any]] = None

    @property
    def installed(self) -> bool:
        return self._next_write is not None

    def install(self):
        """Save the stream's current write function and put the wrapper in its place."""
        if self.installed:
            return

        instance_attributes = getattr(self.stream, '__dict__', {})
        self._saved_attribute = instance_attributes.get('write', _MISSING)
        self._next_write = self.stream.write
        self._wrapper = self._make_wrapper()
        self.stream.write = self._wrapper

    def uninstall(self):
        """Restore the write function saved by install.

        When the stream had no instance-level ``write`` before, the instance
        attribute is removed so the class method is visible again. A pending
        partial line is left as written.
        """
        if not self.installed:
            return

        if self._saved_attribute is _MISSING:
            if 'write' in getattr(self.stream, '__dict__', {}):
                del self.stream.write
        else:
            self.stream.write = self._saved_attribute

        self._next_write = None
        self._saved_attribute = _MISSING
        self._wrapper = None

    def write(self, data: str) -> Any:
        if self._next_write is None:
            return self.stream.write(data)
        return self._next_write(data)

    def _make_wrapper(self) -> Callable[..., Any]:
        next_write = self._next_write

        def write(chunk, *args, **kwargs):
            with self.lock:
                if not chunk or not (self.state.is_frame_on_screen or self.pending):
                    return next_write(chunk, *args, **kwargs)

                if self.state.is_frame_on_screen:
                    self._erase()

                result = next_write(chunk, *args, **kwargs)
                self._flush()
                self._track_line(chunk)
                return result

        write.__wrapped__ = next_write
        return write

    def _flush(self):
        # Buffered streams (stdout) must reach the terminal before the next frame
        flush = getattr(self.stream, 'flush', None)
        if flush is not None:
            flush()

    def _track_line(self, chunk):
        if isinstance(chunk, (bytes, bytearray)):
            chunk = bytes(chunk).decode('utf-8', errors='replace')
        text = str(chunk)

        # A lone carriage return is not a line boundary
        if text.endswith('\n'):
            self.pending.clear()
            self._redraw()
            return

        if '\n' in text:
            tail = text.rsplit('\n', 1)[-1]
        else:
            tail = self.pending.partial + text[-PENDING_TAIL_LIMIT:]
        self.pending.partial = tail[-PENDING_TAIL_LIMIT:]

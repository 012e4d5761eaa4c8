"""Terminal spinner that coexists with other output on the same stream."""

import atexit
import logging
import sys
import threading
from contextlib import contextmanager, suppress
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .errors import ConfigurationError
from .models.render_state import PendingLineBuffer, RenderState, SpinnerState, SpinnerStyle
from .rendering.engine import RenderEngine
from .rendering.frame_source import FrameSource
from .rendering.interceptor import InterceptingWriter, PassthroughWriter
from .utils.colors import (
    DEFAULT_COLOR,
    DEFAULT_SYMBOLS,
    SYMBOL_COLORS,
    colorize,
    validate_color,
)
from .utils.terminal import HIDE_CURSOR, SHOW_CURSOR, is_interactive


logger = logging.getLogger(__name__)


class Spinner:
    """Animated status line for long-running operations.

    On a terminal the spinner repaints in place and steps aside for anything
    else written to its stream. On a pipe, file or CI log it prints one plain
    line per start, text change and stop.

    Example:
        spinner = Spinner(text="Loading").start()
        ...
        spinner.success("Loaded")
    """

    def __init__(self, text: str = "", color: str = DEFAULT_COLOR,
                 spinner: Optional[Any] = None, stream=None,
                 symbols: Optional[Mapping[str, str]] = None,
                 interactive: Optional[bool] = None):
        """Initialize the spinner.

        Args:
            text: Text shown next to the animation
            color: Palette color of the animated glyph
            spinner: SpinnerStyle or mapping with ``frames`` and ``interval_ms``
            stream: Output stream (default: sys.stderr). On a terminal, a spinner
                on stderr also steps aside for writes to stdout and vice versa
            symbols: Overrides for the success/error/warning/info symbols
            interactive: Force interactive mode on or off instead of detecting it

        Raises:
            ConfigurationError: If the style, color or symbols are invalid
        """
        self._style = SpinnerStyle.from_value(spinner)
        self._color = validate_color(color)
        self._symbols = self._resolve_symbols(symbols)
        self._frames = FrameSource(self._style)

        self._stream = stream if stream is not None else sys.stderr
        self._interactive = (
            is_interactive(self._stream) if interactive is None else bool(interactive)
        )
        self._companion_stream = self._find_companion_stream()

        self._text = text or ""
        self._state = SpinnerState.IDLE
        self._render_state = RenderState()
        self._pending = PendingLineBuffer()
        self._lock = threading.RLock()
        self._writer: PassthroughWriter = PassthroughWriter(self._stream)
        self._writers: List[PassthroughWriter] = [self._writer]
        self._engine = RenderEngine(self._writer, self._interactive)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def from_config(cls, config_manager, **overrides) -> 'Spinner':
        """Create a spinner from a loaded ConfigManager.

        Keyword overrides take precedence over configured values.
        """
        options = config_manager.spinner_options()
        options.update(overrides)
        return cls(**options)

    @staticmethod
    def _resolve_symbols(symbols: Optional[Mapping[str, str]]) -> Dict[str, str]:
        resolved = dict(DEFAULT_SYMBOLS)
        if symbols:
            unknown = set(symbols) - set(DEFAULT_SYMBOLS)
            if unknown:
                raise ConfigurationError(f"Unknown symbol names: {', '.join(sorted(unknown))}")
            resolved.update(symbols)
        return resolved

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: Optional[str]):
        with self._lock:
            self._text = value or ""
            # Terminals pick the new text up on the next tick
            if self._state is SpinnerState.RUNNING and not self._interactive:
                self._engine.draw(self._render_state, self._frames.current(), self._text)

    @property
    def color(self) -> str:
        return self._color

    @color.setter
    def color(self, value: str):
        self._color = validate_color(value)

    @property
    def is_spinning(self) -> bool:
        return self._state is SpinnerState.RUNNING

    @property
    def state(self) -> SpinnerState:
        return self._state

    @property
    def interactive(self) -> bool:
        return self._interactive

    @property
    def stream(self):
        return self._stream

    def start(self, text: Optional[str] = None) -> 'Spinner':
        """Show the spinner and start animating it.

        Args:
            text: Replace the spinner text before the first frame

        Returns:
            The spinner, for chaining

        Raises:
            OSError: If the first frame cannot be written; the spinner is left
                stopped and the stream unhooked
        """
        if self._state is SpinnerState.RUNNING:
            if text is not None:
                self.text = text
            return self

        if text is not None:
            self._text = text

        logger.debug("Starting spinner (interactive=%s, interval=%sms)",
                     self._interactive, self._style.interval_ms)

        with self._lock:
            previous_state = self._state
            self._frames.reset()
            self._render_state.reset()
            self._pending.clear()
            self._writers = self._create_writers()
            self._writer = self._writers[0]
            self._engine = RenderEngine(self._writer, self._interactive)
            self._state = SpinnerState.RUNNING

            try:
                if self._interactive:
                    self._writer.write(HIDE_CURSOR)
                    for writer in self._writers:
                        writer.install()
                    atexit.register(self._restore_on_exit)
                    self._engine.frame_render(self._render_state, self._next_glyph(), self._text)
                else:
                    self._engine.draw(self._render_state, self._next_glyph(), self._text)
            except BaseException:
                self._abort_start(previous_state)
                raise

            if self._interactive:
                self._start_ticker()

        return self

    def stop(self, final_text: Optional[str] = None, symbol: Optional[str] = None) -> 'Spinner':
        """Stop the spinner, optionally leaving a final line in its place.

        A bare stop removes the spinner without printing anything.

        Args:
            final_text: Text printed on the spinner's line after stopping
            symbol: Glyph shown before the final text (the live text is used
                when no final text is given)

        Returns:
            The spinner, for chaining
        """
        if symbol:
            return self._stop(RenderEngine.compose(symbol, final_text or self._text))
        return self._stop(final_text if final_text else None)

    def success(self, final_text: Optional[str] = None) -> 'Spinner':
        """Stop the spinner with the success symbol."""
        return self._symbol_stop('success', final_text)

    def error(self, final_text: Optional[str] = None) -> 'Spinner':
        """Stop the spinner with the error symbol."""
        return self._symbol_stop('error', final_text)

    def warning(self, final_text: Optional[str] = None) -> 'Spinner':
        """Stop the spinner with the warning symbol."""
        return self._symbol_stop('warning', final_text)

    def info(self, final_text: Optional[str] = None) -> 'Spinner':
        """Stop the spinner with the info symbol."""
        return self._symbol_stop('info', final_text)

    def clear(self) -> 'Spinner':
        """Erase the current frame until the next tick redraws it."""
        with self._lock:
            if self._state is SpinnerState.RUNNING and self._interactive:
                self._engine.erase(self._render_state)
        return self

    def _symbol_stop(self, kind: str, final_text: Optional[str]) -> 'Spinner':
        symbol = self._symbols[kind]
        if self._interactive:
            symbol = colorize(symbol, SYMBOL_COLORS[kind])
        return self._stop(RenderEngine.compose(symbol, final_text or self._text))

    def _stop(self, line: Optional[str]) -> 'Spinner':
        with self._lock:
            if self._state is not SpinnerState.RUNNING:
                return self
            self._state = SpinnerState.STOPPED
            self._stop_event.set()

        # Joined outside the lock so a tick blocked on it can finish
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

        with self._lock:
            self._uninstall_writers()
            try:
                self._engine.final_render(self._render_state, line, bool(self._pending))
                if self._interactive:
                    self._writer.write(SHOW_CURSOR)
            finally:
                self._render_state.reset()
                self._pending.clear()
                if self._interactive:
                    atexit.unregister(self._restore_on_exit)

        logger.debug("Stopped spinner")
        return self

    def _abort_start(self, previous_state: SpinnerState):
        """Undo a start whose first frame could not be written."""
        self._uninstall_writers()
        self._render_state.reset()
        self._pending.clear()
        self._state = previous_state
        if self._interactive:
            atexit.unregister(self._restore_on_exit)
            # The original error is re-raised by the caller
            with suppress(OSError, ValueError):
                self._writer.write(SHOW_CURSOR)

    def _uninstall_writers(self):
        for writer in reversed(self._writers):
            writer.uninstall()

    def _create_writers(self) -> List[PassthroughWriter]:
        if not self._interactive:
            return [PassthroughWriter(self._stream)]
        streams = [self._stream]
        if self._companion_stream is not None:
            streams.append(self._companion_stream)
        return [
            InterceptingWriter(
                stream,
                self._render_state,
                self._pending,
                self._lock,
                erase=lambda: self._engine.erase(self._render_state),
                redraw=self._redraw,
            )
            for stream in streams
        ]

    def _find_companion_stream(self):
        """Return the other standard stream when it shares the spinner's terminal.

        A spinner on stderr also steps aside for prints to stdout, and the other
        way round, as long as both are interactive.
        """
        if not self._interactive:
            return None
        if self._stream is sys.stderr:
            companion = sys.stdout
        elif self._stream is sys.stdout:
            companion = sys.stderr
        else:
            return None
        if companion is None or companion is self._stream or not is_interactive(companion):
            return None
        return companion

    def _next_glyph(self) -> str:
        self._render_state.current_frame_index = self._frames.index
        glyph = self._frames.next()
        if self._interactive:
            return colorize(glyph, self._color)
        return glyph

    def _redraw(self):
        if self._state is SpinnerState.RUNNING:
            glyph = self._frames.current()
            self._engine.frame_render(self._render_state, colorize(glyph, self._color), self._text)

    def _start_ticker(self):
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._animate,
            args=(self._stop_event,),
            name="spinline-ticker",
            daemon=True,
        )
        self._thread.start()

    def _animate(self, stop_event: threading.Event):
        """Render one frame per interval until stopped."""
        interval = self._style.interval_ms / 1000
        while not stop_event.wait(interval):
            failure = None
            with self._lock:
                if stop_event.is_set() or self._state is not SpinnerState.RUNNING:
                    break
                # Never draw into the middle of someone else's line
                if self._pending:
                    continue
                try:
                    self._engine.frame_render(self._render_state, self._next_glyph(), self._text)
                except (OSError, ValueError) as exc:
                    failure = exc
            # Logged outside the lock, handlers may write to the hooked stream
            if failure is not None:
                logger.debug("Spinner frame could not be written", exc_info=failure)

    def _restore_on_exit(self):
        if self.is_spinning:
            self.stop()

    def __enter__(self) -> 'Spinner':
        return self.start()

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is not None:
            self.error()
        else:
            self.stop()
        return False

    def __repr__(self) -> str:
        return f"Spinner(text={self._text!r}, state={self._state.value})"


@contextmanager
def spinner(text: str = "", **kwargs) -> Iterator[Spinner]:
    """Context manager for spinner usage.

    The spinner stops with the error symbol if the block raises.
    """
    s = Spinner(text, **kwargs)
    s.start()
    try:
        yield s
    except BaseException:
        s.error()
        raise
    finally:
        s.stop()

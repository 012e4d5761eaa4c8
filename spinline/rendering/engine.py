"""Erase and draw sequences for the spinner line."""

from typing import Optional

from ..models.render_state import RenderState
from ..utils.terminal import (
    BEGIN_SYNCHRONIZED_UPDATE,
    CLEAR_LINE,
    CURSOR_TO_COLUMN_0,
    CURSOR_UP,
    END_SYNCHRONIZED_UPDATE,
    terminal_columns,
)
from ..utils.text_metrics import rows_occupied


class RenderEngine:
    """Produces the exact output needed to erase and redraw the spinner.

    All output goes through ``writer.write``, which for an intercepted stream is
    the stream's original write function rather than the interception wrapper.
    """

    def __init__(self, writer, interactive: bool, columns: Optional[int] = None):
        """Initialize the engine.

        Args:
            writer: Writer capability used for every spinner write
            interactive: Whether the stream supports cursor control
            columns: Fixed terminal width, queried from the stream when None
        """
        self.writer = writer
        self.interactive = interactive
        self.columns = columns

    @property
    def terminal_columns(self) -> int:
        """Current terminal width of the underlying stream."""
        if self.columns:
            return self.columns
        return terminal_columns(self.writer.stream)

    @staticmethod
    def compose(glyph: str, text: str) -> str:
        """Join a glyph and text into a single spinner line."""
        if not glyph:
            return text
        return f"{glyph} {text}"

    def erase_sequence(self, state: RenderState) -> str:
        """Return the sequence clearing the previous frame and mark it erased.

        The cursor sits on the last row of the frame, so the sequence clears
        that row and then climbs one row at a time until every row the frame
        occupied is blank, ending at column 0 of its first row.
        """
        count = state.last_rendered_line_count
        state.last_rendered_line_count = 0
        state.is_frame_on_screen = False

        if count <= 0:
            return ""
        return CURSOR_TO_COLUMN_0 + CLEAR_LINE + (CURSOR_UP + CLEAR_LINE) * (count - 1)

    def erase(self, state: RenderState):
        """Erase the frame currently on screen, if any."""
        sequence = self.erase_sequence(state)
        if sequence:
            self._emit(sequence)

    def draw(self, state: RenderState, glyph: str, text: str):
        """Draw a frame without erasing first.

        Interactive streams keep the cursor at the end of the frame so the next
        erase can find it. Non-interactive streams get an appended log line and
        nothing is left to erase.
        """
        line = self.compose(glyph, text)
        if self.interactive:
            self._emit(line)
            self._record_draw(state, line)
        else:
            self._emit(line + "\n")
            state.last_rendered_text = line

    def frame_render(self, state: RenderState, glyph: str, text: str):
        """Erase and redraw as one synchronized update."""
        if not self.interactive:
            self.draw(state, glyph, text)
            return

        line = self.compose(glyph, text)
        erase = self.erase_sequence(state)
        self._emit(BEGIN_SYNCHRONIZED_UPDATE + erase + line + END_SYNCHRONIZED_UPDATE)
        self._record_draw(state, line)

    def final_render(self, state: RenderState, line: Optional[str], pending_partial: bool = False):
        """Replace the spinner with its final line, leaving the cursor on a new row.

        Args:
            state: Render state to clear
            line: Final line to print, or None to only erase the frame
            pending_partial: Whether a foreign write left an unterminated line
        """
        if not self.interactive:
            if line is not None:
                self._emit(line + "\n")
            state.reset()
            return

        if line is None:
            self.erase(state)
            state.reset()
            return

        erase = self.erase_sequence(state)
        separator = "\n" if pending_partial else ""
        self._emit(
            BEGIN_SYNCHRONIZED_UPDATE + erase + separator + line + "\n" + END_SYNCHRONIZED_UPDATE
        )
        state.reset()

    def _record_draw(self, state: RenderState, line: str):
        state.last_rendered_line_count = rows_occupied(line, self.terminal_columns)
        state.last_rendered_text = line
        state.is_frame_on_screen = True

    def _emit(self, data: str):
        self.writer.write(data)
        flush = getattr(self.writer.stream, 'flush', None)
        if flush is not None:
            flush()

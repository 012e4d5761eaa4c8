"""Tests for spinner styles and the frame source."""

import pytest

from spinline.errors import ConfigurationError
from spinline.models.render_state import DEFAULT_FRAMES, SpinnerStyle
from spinline.rendering.frame_source import FrameSource


class TestSpinnerStyle:
    """Test style validation."""

    def test_defaults(self):
        style = SpinnerStyle()
        assert style.frames == DEFAULT_FRAMES
        assert style.interval_ms == 80

    def test_empty_frames_rejected(self):
        with pytest.raises(ConfigurationError, match="frames cannot be empty"):
            SpinnerStyle(frames=())

    @pytest.mark.parametrize("interval", [0, -10, 1.5, "80", True, None])
    def test_invalid_interval_rejected(self, interval):
        with pytest.raises(ConfigurationError, match="positive integer"):
            SpinnerStyle(frames=("-",), interval_ms=interval)

    def test_from_mapping_accepts_interval_alias(self):
        style = SpinnerStyle.from_value({'frames': ['a', 'b'], 'interval': 120})
        assert style.frames == ('a', 'b')
        assert style.interval_ms == 120

    def test_from_mapping_splits_frame_string(self):
        style = SpinnerStyle.from_value({'frames': '|/-\\', 'interval_ms': 50})
        assert style.frames == ('|', '/', '-', '\\')

    def test_from_value_passes_style_through(self):
        style = SpinnerStyle(frames=("x",), interval_ms=5)
        assert SpinnerStyle.from_value(style) is style

    def test_from_value_rejects_other_types(self):
        with pytest.raises(ConfigurationError):
            SpinnerStyle.from_value(42)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            SpinnerStyle(frames=[])


class TestFrameSource:
    """Test frame cycling."""

    def setup_method(self):
        self.source = FrameSource(SpinnerStyle(frames=("a", "b", "c"), interval_ms=100))

    def test_next_cycles_and_wraps(self):
        produced = [self.source.next() for _ in range(7)]
        assert produced == ["a", "b", "c", "a", "b", "c", "a"]
        assert self.source.index == 1

    def test_current_does_not_advance(self):
        assert self.source.current() == "a"
        self.source.next()
        self.source.next()
        assert self.source.current() == "b"
        assert self.source.current() == "b"
        assert self.source.index == 2

    def test_reset_restarts_sequence(self):
        self.source.next()
        self.source.next()
        self.source.reset()
        assert self.source.index == 0
        assert self.source.next() == "a"

    def test_interval_exposed(self):
        assert self.source.interval_ms == 100

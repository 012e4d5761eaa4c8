"""Pytest configuration and common fixtures for spinline tests."""

import io
import time

import pytest


class FakeTTY(io.StringIO):
    """In-memory stream that reports itself as an 80 column terminal."""

    columns = 80

    def isatty(self):
        return True


class FailingTTY(FakeTTY):
    """Terminal stream whose writes can be switched to fail."""

    fail = False

    def write(self, data):
        if self.fail:
            raise OSError("stream is broken")
        return super().write(data)


class FlakyTTY(FakeTTY):
    """Terminal stream whose n-th write fails once."""

    def __init__(self, fail_on_write=None):
        super().__init__()
        self.fail_on_write = fail_on_write
        self.write_count = 0

    def write(self, data):
        self.write_count += 1
        if self.write_count == self.fail_on_write:
            raise OSError("stream is broken")
        return super().write(data)


def wait_for(condition, timeout=5, poll=0.01):
    """Wait for a condition to be true, with fast polling.

    Raises:
        TimeoutError: If condition not met within timeout
    """
    start = time.monotonic()
    while time.monotonic() - start < timeout:
        if condition():
            return True
        time.sleep(poll)
    raise TimeoutError(f"Condition not met within {timeout}s")


# Long enough that no tick fires during a test
STATIC_STYLE = {'frames': ['-'], 'interval_ms': 10_000}


@pytest.fixture
def tty_stream():
    """Provide an interactive in-memory stream."""
    return FakeTTY()


@pytest.fixture
def failing_stream():
    """Provide an interactive stream that can be made to fail."""
    return FailingTTY()


@pytest.fixture
def pipe_stream():
    """Provide a non-interactive in-memory stream."""
    return io.StringIO()


@pytest.fixture
def static_style():
    """Provide a single-frame spinner style that never ticks."""
    return dict(STATIC_STYLE)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Make terminal detection independent of where the tests run."""
    monkeypatch.delenv('CI', raising=False)
    monkeypatch.setenv('TERM', 'xterm-256color')
    monkeypatch.delenv('SPINLINE_COLOR', raising=False)
    monkeypatch.delenv('SPINLINE_INTERVAL_MS', raising=False)

    yield

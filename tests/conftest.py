"""Pytest fixtures for eventdispatcher tests."""

import pytest

from eventdispatcher import make_event_dispatcher, reset_reporters, set_reporters


class Host:
    """Plain object with no event capability of its own."""

    def __init__(self, name="host"):
        self.name = name

    def __repr__(self):
        return f"<Host {self.name}>"


class CapturingReporters:
    """Collects everything the dispatcher reports instead of logging it."""

    def __init__(self):
        self.warnings = []
        self.failures = []

    def warn(self, message, stack=None):
        self.warnings.append((message, stack))

    def error(self, failure):
        self.failures.append(failure)


@pytest.fixture(autouse=True)
def restore_reporters():
    """Every test starts and ends with the default logging reporters."""
    reset_reporters()
    yield
    reset_reporters()


@pytest.fixture
def reporters():
    """Route warnings and listener failures into lists."""
    capturing = CapturingReporters()
    set_reporters(warn=capturing.warn, error=capturing.error)
    return capturing


@pytest.fixture
def host():
    """A plain object with the dispatcher capability installed."""
    return make_event_dispatcher(Host())


@pytest.fixture
def calls():
    """Shared call log plus a factory for recording handlers."""

    class Calls(list):
        def recorder(self, label):
            def handler(event, *args, **kwargs):
                self.append((label, event.type, args, kwargs))

            return handler

    return Calls()


@pytest.fixture
def make_host():
    """Factory for plain objects without the dispatcher capability."""
    return Host

"""Pluggable sinks for deprecation warnings and listener failures.

Dispatchers never raise for these conditions; they hand them to the active
reporters instead. The defaults write through ``logging`` and can be replaced
with ``set_reporters()`` so a host can route them to its own diagnostics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class HandlerFailure:
    """A listener that raised while an event was being dispatched."""

    event_name: str
    target: Any
    handler: Callable[..., Any]
    error: Exception


WarningReporter = Callable[[str, str | None], None]
ErrorReporter = Callable[[HandlerFailure], None]


def log_warning(message: str, stack: str | None = None) -> None:
    """Default warning reporter: log the message, followed by the stack if given."""
    if stack:
        logging.warning(f"{message}\n{stack.rstrip()}")
    else:
        logging.warning(message)


def log_error(failure: HandlerFailure) -> None:
    """Default error reporter: log the failing listener with its traceback."""
    exc_info = failure.error if _reporters.handler_tracebacks else None
    logging.error(
        f"Exception in '{failure.event_name}' listener on {failure.target!r}: {failure.error!r}",
        exc_info=exc_info,
    )


@dataclass
class Reporters:
    """Active reporter callables and the switches the defaults honour."""

    warn: WarningReporter = log_warning
    error: ErrorReporter = log_error
    capture_stack: bool = True
    handler_tracebacks: bool = True


_reporters = Reporters()


def get_reporters() -> Reporters:
    return _reporters


def set_reporters(
    warn: WarningReporter | None = None,
    error: ErrorReporter | None = None,
    capture_stack: bool | None = None,
    handler_tracebacks: bool | None = None,
) -> Reporters:
    """Replace any of the active reporters or switches. ``None`` leaves a field as is."""
    if warn is not None:
        _reporters.warn = warn
    if error is not None:
        _reporters.error = error
    if capture_stack is not None:
        _reporters.capture_stack = capture_stack
    if handler_tracebacks is not None:
        _reporters.handler_tracebacks = handler_tracebacks
    return _reporters


def reset_reporters() -> Reporters:
    """Restore the logging reporters and default switches."""
    defaults = Reporters()
    _reporters.warn = defaults.warn
    _reporters.error = defaults.error
    _reporters.capture_stack = defaults.capture_stack
    _reporters.handler_tracebacks = defaults.handler_tracebacks
    return _reporters

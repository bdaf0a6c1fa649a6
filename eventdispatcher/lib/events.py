"""Event dispatch capability that can be added to any object.

- Listeners are attached with on() and detached with off()
- A listener can attach to several events at once via a space-separated list
- Listeners can carry a ".namespace" suffix, used by off() for bulk removal
- Events are fired with trigger(); handlers run synchronously, in the order they were added
- The same listener attached twice is called twice, but off() detaches every copy at once
- A listener that raises does not stop the other listeners, and trigger() still returns
  normally; the failure goes to the error reporter
- Events can be marked deprecated, causing on() to issue a warning

Handlers are never bound to the dispatcher. They receive an Event carrying ``type`` and
``target`` followed by whatever extra arguments trigger() was given.

To add the methods to an existing object or class, call make_event_dispatcher(obj), or
inherit from EventDispatcher.
"""

from __future__ import annotations

import traceback
import types
from dataclasses import dataclass
from typing import Any, Callable

from eventdispatcher.lib.namespaces import InvalidArgumentError, parse_events
from eventdispatcher.lib.reporters import HandlerFailure, get_reporters

# Per-instance: dict[str, list[HandlerEntry]], created by the first on()
_HANDLERS_ATTR = "_event_handlers"
# Per-instance or per-class: dict[str, str | bool], created by mark_deprecated()
_DEPRECATED_ATTR = "_deprecated_events"
_MARKER_ATTR = "_event_dispatcher"

_MIXIN_METHODS = ("on", "off", "trigger")


@dataclass(frozen=True)
class Event:
    """Descriptor passed as the first argument to every handler."""

    type: str
    target: Any


@dataclass(frozen=True)
class HandlerEntry:
    event_name: str
    namespace: str | None
    handler: Callable[..., Any]

    def matches(self, namespace: str | None, fn: Callable[..., Any] | None) -> bool:
        """Check the namespace and handler filters; the caller has already picked the event."""
        if namespace is not None and namespace != self.namespace:
            return False
        if fn is None or self.handler is fn:
            return True
        # Each attribute access creates a new bound method, so those compare by equality
        return isinstance(fn, types.MethodType) and self.handler == fn


def _handler_table(obj: Any) -> dict[str, list[HandlerEntry]] | None:
    # Look only at the instance's own attributes so a class never shares its table
    return vars(obj).get(_HANDLERS_ATTR)


def _deprecation_info(obj: Any, event_name: str) -> str | bool | None:
    owners = obj.__mro__ if isinstance(obj, type) else (obj, *type(obj).__mro__)
    for owner in owners:
        deprecated = vars(owner).get(_DEPRECATED_ATTR)
        if deprecated and event_name in deprecated:
            return deprecated[event_name]
    return None


def _remove_matches(
    handlers: dict[str, list[HandlerEntry]],
    event_name: str,
    namespace: str | None,
    fn: Callable[..., Any] | None,
) -> None:
    handler_list = handlers.get(event_name)
    if not handler_list:
        return

    # Rebuild rather than splice, so a dispatch iterating the old list is unaffected
    survivors = [entry for entry in handler_list if not entry.matches(namespace, fn)]
    if survivors:
        handlers[event_name] = survivors
    else:
        del handlers[event_name]


class EventDispatcher:
    """Mixin providing on(), off() and trigger().

    State is stored lazily on each instance, so an object that never registers a
    handler carries no extra data.
    """

    _event_dispatcher = True

    def on(self, events: str, fn: Callable[..., Any]):
        """Add ``fn`` as a handler for every event in ``events``.

        Args:
            events: Space-separated event names, each with an optional ".namespace" part.
            fn: Called as ``fn(event, *args, **kwargs)`` on trigger. If it is already
                listening to an event, another copy is added.

        Returns:
            The dispatcher, for chaining.

        Raises:
            InvalidArgumentError: If ``events`` is empty or not a string, if a token has
                no event name (a bare ".namespace"), or if ``fn`` is not callable.
        """
        events_list = parse_events(events)
        if not callable(fn):
            raise InvalidArgumentError(f"Event handler must be callable, got {fn!r}")
        for spec in events_list:
            if not spec.event_name:
                raise InvalidArgumentError(
                    f"Cannot register for bare namespace '{spec.namespace}', an event name is required"
                )

        # Deprecation warnings are advisory and never block registration
        reporters = get_reporters()
        for spec in events_list:
            deprecation = _deprecation_info(self, spec.event_name)
            if deprecation:
                message = f"Registering for deprecated event '{spec.event_name}'."
                if isinstance(deprecation, str):
                    message += f" Use {deprecation} instead."
                stack = "".join(traceback.format_stack()[:-1]) if reporters.capture_stack else None
                reporters.warn(message, stack)

        handlers = _handler_table(self)
        if handlers is None:
            handlers = {}
            setattr(self, _HANDLERS_ATTR, handlers)
        for spec in events_list:
            handlers.setdefault(spec.event_name, []).append(
                HandlerEntry(spec.event_name, spec.namespace, fn)
            )

        return self

    def off(self, events: str, fn: Callable[..., Any] | None = None):
        """Remove the handlers selected by ``events``.

        Each item in ``events`` can be a bare event name, a bare ".namespace" or an
        "event.namespace" pair. A bare namespace applies to every event. If ``fn`` is
        omitted, all matching handlers are removed. Otherwise only handlers that are
        ``fn`` itself are removed (there may still be more than one, if duplicates were added).

        Returns:
            The dispatcher, for chaining.
        """
        events_list = parse_events(events)
        if fn is not None and not callable(fn):
            raise InvalidArgumentError(f"Event handler must be callable, got {fn!r}")

        handlers = _handler_table(self)
        if not handlers:
            return self

        for spec in events_list:
            if spec.event_name:
                _remove_matches(handlers, spec.event_name, spec.namespace, fn)
            else:
                for event_name in list(handlers):
                    _remove_matches(handlers, event_name, spec.namespace, fn)

        return self

    def trigger(self, event_name: str, *args: Any, **kwargs: Any) -> None:
        """Invoke all handlers for ``event_name``, in the order they were added.

        Handlers added while the event is being dispatched are not called until the
        next trigger; handlers removed mid-dispatch still run for this one.
        """
        handlers = _handler_table(self)
        handler_list = handlers.get(event_name) if handlers else None
        if not handler_list:
            return

        event = Event(event_name, self)
        for entry in list(handler_list):
            try:
                entry.handler(event, *args, **kwargs)
            except Exception as e:
                get_reporters().error(HandlerFailure(event_name, self, entry.handler, e))


def make_event_dispatcher(obj):
    """Add the EventDispatcher methods to ``obj``.

    ``obj`` may be a single instance or a class. When given a class, each instance
    still keeps its own handlers. Returns ``obj``, so it also works as a class decorator.
    """
    for name in _MIXIN_METHODS:
        method = getattr(EventDispatcher, name)
        if not isinstance(obj, type):
            method = types.MethodType(method, obj)
        setattr(obj, name, method)
    setattr(obj, _MARKER_ATTR, True)
    return obj


def is_event_dispatcher(obj: Any) -> bool:
    return getattr(obj, _MARKER_ATTR, False) is True


def mark_deprecated(obj: Any, event_name: str, instead: str | None = None) -> None:
    """Mark an event name as deprecated, so on() warns when it is registered.

    May be called before make_event_dispatcher(), or on a class whose instances get the
    capability separately. Marking the same event again replaces the earlier info.

    Args:
        obj: Dispatcher object or class.
        event_name: Name of the deprecated event.
        instead: Suggested replacement, included in the warning.
    """
    if not isinstance(event_name, str) or not event_name:
        raise InvalidArgumentError(f"Deprecated event name must be a non-empty string, got {event_name!r}")

    deprecated = vars(obj).get(_DEPRECATED_ATTR)
    if deprecated is None:
        deprecated = {}
        setattr(obj, _DEPRECATED_ATTR, deprecated)
    deprecated[event_name] = instead or True

"""Forward dispatcher events to Socket.IO clients."""

from __future__ import annotations

import logging
from typing import Any

from flask_socketio import SocketIO

from eventdispatcher.lib.events import Event, is_event_dispatcher
from eventdispatcher.lib.namespaces import InvalidArgumentError, parse_events


class SocketIORelay:
    """Re-emits dispatcher events on a SocketIO server.

    Relay handlers are registered under a dot-namespace tag, so detach() removes
    them without touching the dispatcher's other listeners.
    """

    def __init__(self, socketio: SocketIO, namespace: str = "/", tag: str = ".socketio") -> None:
        if not tag.startswith(".") or len(tag) < 2:
            raise InvalidArgumentError(f"Relay tag must look like '.name', got {tag!r}")
        self.socketio = socketio
        self.namespace = namespace
        self.tag = tag

    def _relay(self, event: Event, *args: Any, **kwargs: Any) -> None:
        logging.debug(f"Relaying event to socketio: {event.type}")
        if args:
            self.socketio.emit(event.type, args[0], namespace=self.namespace)
        else:
            self.socketio.emit(event.type, namespace=self.namespace)

    def attach(self, dispatcher, events: str):
        """Relay each event in the space-separated ``events`` list. Returns the dispatcher."""
        if not is_event_dispatcher(dispatcher):
            raise InvalidArgumentError(f"{dispatcher!r} is not an event dispatcher")
        tagged = " ".join(f"{spec.event_name}{self.tag}" for spec in parse_events(events))
        return dispatcher.on(tagged, self._relay)

    def detach(self, dispatcher):
        """Stop relaying every event this relay was attached to; other relays are kept."""
        return dispatcher.off(self.tag, self._relay)

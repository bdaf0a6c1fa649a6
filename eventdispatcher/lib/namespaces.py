"""Parsing for event specification strings such as ``"change.myPlugin resize"``."""

from __future__ import annotations

from dataclasses import dataclass


class InvalidArgumentError(ValueError):
    """Raised for a malformed event specification or a non-callable handler."""


@dataclass(frozen=True)
class EventSpec:
    """One token of an event specification, split into event name and namespace.

    ``namespace`` keeps its leading dot (``".ns"``). A bare namespace token
    such as ``".ns"`` has an empty ``event_name``.
    """

    event_name: str
    namespace: str | None = None


def split_ns(token: str) -> EventSpec:
    """Split a single token on its first dot."""
    dot = token.find(".")
    if dot == -1:
        return EventSpec(token)
    return EventSpec(token[:dot], token[dot:])


def parse_events(events: str) -> list[EventSpec]:
    """Parse a whitespace-separated list of event tokens.

    Raises:
        InvalidArgumentError: If ``events`` is not a string or holds no tokens.
    """
    if not isinstance(events, str):
        raise InvalidArgumentError(f"Event specification must be a string, got {events!r}")
    tokens = events.split()
    if not tokens:
        raise InvalidArgumentError("Event specification must name at least one event")
    return [split_ns(token) for token in tokens]

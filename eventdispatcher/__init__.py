from eventdispatcher.config import ConfigType, configure
from eventdispatcher.lib.events import (
    Event,
    EventDispatcher,
    HandlerEntry,
    is_event_dispatcher,
    make_event_dispatcher,
    mark_deprecated,
)
from eventdispatcher.lib.namespaces import EventSpec, InvalidArgumentError
from eventdispatcher.lib.reporters import (
    HandlerFailure,
    get_reporters,
    reset_reporters,
    set_reporters,
)
from eventdispatcher.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    ConfigType.__name__,
    Event.__name__,
    EventDispatcher.__name__,
    EventSpec.__name__,
    HandlerEntry.__name__,
    HandlerFailure.__name__,
    InvalidArgumentError.__name__,
    configure.__name__,
    get_reporters.__name__,
    is_event_dispatcher.__name__,
    make_event_dispatcher.__name__,
    mark_deprecated.__name__,
    reset_reporters.__name__,
    set_reporters.__name__,
]

"""Event source capability for classes that own an emitter.

Rather than inheriting from EventEmitter, a class can be decorated with
``extend``. Each instance then lazily creates its own EventEmitter and
the emitter operations are forwarded to it:

    @extend
    class Downloader:
        def finish(self):
            self.emit('done', self)

    downloader = Downloader()
    downloader.on('done', print)
"""

import functools
from typing import Any, Callable, Hashable, List, Optional, Protocol, runtime_checkable

from .emitter import EMITTER_ATTR, EventEmitter


# Operations forwarded by ``extend``.
FORWARDED_METHODS = (
    "on",
    "add_listener",
    "once",
    "off",
    "remove_listener",
    "remove_all_listeners",
    "emit",
    "emit_args",
    "emit_async",
    "listen_to",
    "listeners",
    "listener_count",
    "event_names",
    "set_max_listeners",
)


@runtime_checkable
class EventSource(Protocol):
    """Anything offering the emitter operations."""

    def on(self, name: Hashable, listener: Callable[..., Any]) -> Any: ...

    def once(self, name: Hashable, listener: Callable[..., Any]) -> Callable[..., Any]: ...

    def off(self, name: Hashable, listener: Optional[Callable[..., Any]] = None) -> Any: ...

    def remove_all_listeners(self) -> Any: ...

    def emit(self, name: Hashable, *args: Any) -> Any: ...

    def emit_args(self, name: Hashable, args) -> Any: ...

    def emit_async(self, name: Hashable, *args: Any) -> Any: ...

    def listen_to(self, source: Any, name: Hashable, local_name: Optional[Hashable] = None) -> Callable[..., None]: ...

    def listeners(self, name: Hashable) -> List[Callable[..., Any]]: ...

    def listener_count(self, name: Hashable) -> int: ...

    def set_max_listeners(self, value) -> Any: ...


def emitter_of(obj: Any, emitter_class: type = EventEmitter) -> EventEmitter:
    """Return the emitter owned by obj, creating it on first use."""
    emitter = getattr(obj, EMITTER_ATTR, None)
    if emitter is None:
        emitter = emitter_class()
        setattr(obj, EMITTER_ATTR, emitter)
    return emitter


def _forwarder(method_name: str, emitter_class: type):
    method = getattr(emitter_class, method_name)

    @functools.wraps(method)
    def forward(self, *args, **kwargs):
        emitter = emitter_of(self, emitter_class)
        result = getattr(emitter, method_name)(*args, **kwargs)
        # Keep chaining on the owner rather than leaking the inner emitter.
        return self if result is emitter else result

    return forward


def extend(child: type, emitter_class: type = EventEmitter) -> type:
    """Add the emitter operations to child, backed by a per-instance emitter.

    Methods child already defines are left alone.

    Args:
        child: Class to decorate
        emitter_class: EventEmitter subclass to instantiate per object

    Returns:
        child itself, so this works as a class decorator
    """
    if not isinstance(child, type):
        raise TypeError(f"extend(child) child must be a class, got {child!r}")

    for method_name in FORWARDED_METHODS:
        if method_name not in vars(child):
            setattr(child, method_name, _forwarder(method_name, emitter_class))
    return child

"""Listener registry and emission API."""

import inspect
import logging
import math
from numbers import Integral, Real
from typing import Any, Callable, Dict, Hashable, List, Optional

from ..config import (
    InvalidArgumentError,
    InvalidCallbackError,
    InvalidListenerError,
    InvalidSourceError,
)
from .dispatch import AsyncPipeline, Listener, dispatch

logger = logging.getLogger(__name__)

REMOVE_LISTENER = "removeListener"
UNLIMITED = -1

# Attribute holding the emitter of a class decorated with source.extend.
EMITTER_ATTR = "_event_emitter"


def _coerce_threshold(value: Any, caller: str):
    """Validate a listener threshold; negative values mean unlimited."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgumentError(f"{caller} value must be a number, got {value!r}")

    if isinstance(value, Integral):
        number = int(value)
        return UNLIMITED if number < 0 else number

    try:
        number = float(value)
    except OverflowError:
        number = math.inf if value > 0 else -math.inf
    if math.isnan(number):
        raise InvalidArgumentError(f"{caller} value must be a number, got {value!r}")

    if number < 0:
        return UNLIMITED
    if number.is_integer():
        return int(number)
    return number


def _same_listener(entry: Listener, listener: Listener) -> bool:
    if entry is listener:
        return True
    # Bound methods are rebuilt on every attribute access; match them on
    # the identity of their instance and function.
    return (
        inspect.ismethod(entry)
        and inspect.ismethod(listener)
        and entry.__self__ is listener.__self__
        and entry.__func__ is listener.__func__
    )


class OnceListener:
    """Adapter installed by ``EventEmitter.once``.

    Removes itself from the emitter, then calls the wrapped listener.
    Runs at most once even if an emission snapshot still holds it.
    """

    __slots__ = ("emitter", "name", "listener", "fired")

    def __init__(self, emitter: 'EventEmitter', name: Hashable, listener: Listener):
        self.emitter = emitter
        self.name = name
        self.listener = listener
        self.fired = False

    def __call__(self, *args: Any) -> Any:
        if self.fired:
            return None
        self.fired = True
        self.emitter.off(self.name, self)
        return self.listener(*args)

    def __repr__(self) -> str:
        return f"<OnceListener {self.name!r} {self.listener!r}>"


def _registry_of(obj: Any) -> Dict[Hashable, List[Listener]]:
    """Return the live registry owned by obj, or an empty dict."""
    if obj is None:
        raise InvalidArgumentError("obj is required")
    if not isinstance(obj, EventEmitter):
        obj = getattr(obj, EMITTER_ATTR, None)
        if not isinstance(obj, EventEmitter):
            return {}
    return obj._events


class EventEmitter:
    """Registry of named events mapped to ordered listener lists.

    Listeners run in registration order. ``emit`` runs them all
    synchronously; ``emit_async`` runs them one after another, each one
    deciding when the next may start through a continuation.

    Example:
        >>> emitter = EventEmitter()
        >>> _ = emitter.on('tick', lambda n: print(f"tick {n}"))
        >>> _ = emitter.emit('tick', 1)
        tick 1

    When an event collects more listeners than ``max_listeners`` a
    warning is logged; registration still succeeds.
    """

    default_max_listeners = 10

    def __init__(self, max_listeners: Optional[int] = None):
        """Create an empty registry.

        Args:
            max_listeners: Leak warning threshold. Defaults to the current
                ``EventEmitter.default_max_listeners``, captured now.
        """
        self._events: Dict[Hashable, List[Listener]] = {}
        if max_listeners is None:
            max_listeners = EventEmitter.default_max_listeners
        self._max_listeners = _coerce_threshold(max_listeners, "EventEmitter(max_listeners)")

    @property
    def max_listeners(self):
        return self._max_listeners

    # --- REGISTRATION ---

    def on(self, name: Hashable, listener: Listener) -> 'EventEmitter':
        """Append listener to the list for name.

        Args:
            name: Event name
            listener: Callable to invoke when name is emitted

        Returns:
            Self for method chaining

        Raises:
            InvalidListenerError: If listener is not callable
        """
        if not callable(listener):
            raise InvalidListenerError(
                f"EventEmitter.on(name, listener) listener must be callable, got {listener!r}"
            )

        event_list = self._events.setdefault(name, [])
        event_list.append(listener)

        # A threshold of 0 disables the check, like UNLIMITED.
        max_listeners = self._max_listeners or UNLIMITED
        if max_listeners != UNLIMITED and len(event_list) > max_listeners:
            logger.warning(
                "Possible EventEmitter memory leak detected. %d %r listeners added "
                "(limit is %s). Use set_max_listeners() to increase the limit.",
                len(event_list), name, max_listeners
            )

        return self

    add_listener = on

    def once(self, name: Hashable, listener: Listener) -> OnceListener:
        """Register listener to run on the next emission of name only.

        The adapter removes itself before calling listener, so an emission
        triggered from inside listener cannot run it again.

        Returns:
            The registered adapter; pass it to ``off`` to cancel early.
        """
        if not callable(listener):
            raise InvalidListenerError(
                f"EventEmitter.once(name, listener) listener must be callable, got {listener!r}"
            )

        adapter = OnceListener(self, name, listener)
        self.on(name, adapter)
        return adapter

    def listen_to(
        self,
        source: Any,
        name: Hashable,
        local_name: Optional[Hashable] = None,
    ) -> Callable[..., None]:
        """Re-emit every name event of source on this emitter.

        Args:
            source: Object with an ``on`` or ``add_listener`` method
            name: Event name to subscribe to on source
            local_name: Name to re-emit under, defaults to name

        Returns:
            The handler installed on source, for detaching later

        Raises:
            InvalidSourceError: If source cannot register listeners
        """
        register = None
        if source is not None:
            for attr in ("on", "add_listener"):
                candidate = getattr(source, attr, None)
                if callable(candidate):
                    register = candidate
                    break
        if register is None:
            raise InvalidSourceError(
                "EventEmitter.listen_to(source, name) source must have an on(name, listener) method"
            )

        target = name if local_name is None else local_name

        def handler(*args):
            self.emit_args(target, args)

        register(name, handler)
        return handler

    # --- REMOVAL ---

    def off(self, name: Hashable, listener: Optional[Listener] = None) -> 'EventEmitter':
        """Remove listener from name, or every listener when omitted.

        A ``"removeListener"`` event ``(name, listener)`` is emitted for
        each entry before it is removed. Entries are scanned from the tail
        so removal never skips one; every occurrence of listener goes.

        Returns:
            Self for method chaining
        """
        event_list = self._events.get(name)
        if not event_list:
            return self

        if listener is None:
            i = len(event_list)
            while i:
                i -= 1
                if i < len(event_list):
                    self.emit(REMOVE_LISTENER, name, event_list[i])
            event_list.clear()
            self._drop(name, event_list)
            return self

        i = len(event_list)
        while i:
            i -= 1
            if i >= len(event_list):
                continue
            entry = event_list[i]
            if _same_listener(entry, listener):
                self.emit(REMOVE_LISTENER, name, entry)
                if i < len(event_list) and event_list[i] is entry:
                    del event_list[i]

        if not event_list:
            self._drop(name, event_list)

        return self

    remove_listener = off

    def remove_all_listeners(self) -> 'EventEmitter':
        """Remove every listener of every event.

        Event names are visited in registry order, as captured when the
        call starts. Each entry is announced on ``"removeListener"`` and
        then deleted, tail first. Listeners registered on
        ``"removeListener"`` itself are therefore told about their own
        removal while they are still registered.

        Returns:
            Self for method chaining
        """
        for name in list(self._events):
            event_list = self._events.get(name)
            if event_list:
                j = len(event_list)
                while j:
                    j -= 1
                    if j >= len(event_list):
                        continue
                    self.emit(REMOVE_LISTENER, name, event_list[j])
                    if j < len(event_list):
                        del event_list[j]
            self._events.pop(name, None)
        return self

    def _drop(self, name: Hashable, event_list: List[Listener]) -> None:
        if self._events.get(name) is event_list:
            del self._events[name]

    # --- EMISSION ---

    def emit(self, name: Hashable, *args: Any) -> 'EventEmitter':
        """Call every listener of name with args, in registration order.

        Returns:
            Self for method chaining
        """
        return self.emit_args(name, args)

    def emit_args(self, name: Hashable, args) -> 'EventEmitter':
        """Like ``emit`` but takes the arguments as one sequence."""
        event_list = self._events.get(name)
        if not event_list:
            return self

        dispatch(tuple(event_list), tuple(args))
        return self

    def emit_async(self, name: Hashable, *args: Any) -> 'EventEmitter':
        """Run the listeners of name one at a time.

        The last positional argument is the completion callback
        ``callback(err)``. Every listener is called with the remaining
        arguments plus a continuation ``next(err=None)``; the next
        listener starts only when the continuation is called. A truthy
        err skips the remaining listeners and is passed to callback.
        callback runs exactly once, with ``None`` on success.

        Example:
            >>> def step(value, next_listener):
            ...     next_listener()
            >>> _ = emitter.on('save', step)
            >>> _ = emitter.emit_async('save', 42, lambda err: print(err))
            None

        Returns:
            Self for method chaining

        Raises:
            InvalidCallbackError: If the last argument is not callable
        """
        callback = args[-1] if args else None
        if not callable(callback):
            raise InvalidCallbackError(
                "EventEmitter.emit_async(name, *args, callback) callback must be callable"
            )
        args = args[:-1]

        event_list = self._events.get(name)
        if not event_list:
            callback(None)
        else:
            AsyncPipeline(name, event_list, args, callback).start()

        return self

    # --- INTROSPECTION ---

    def listeners(self, name: Hashable) -> List[Listener]:
        """Return a copy of the listener list for name."""
        return list(self._events.get(name, ()))

    def listener_count(self, name: Hashable) -> int:
        return len(self._events.get(name, ()))

    def event_names(self) -> List[Hashable]:
        return list(self._events)

    def set_max_listeners(self, value) -> 'EventEmitter':
        """Set the leak warning threshold; negative means unlimited.

        Raises:
            InvalidArgumentError: If value is not a number
        """
        self._max_listeners = _coerce_threshold(value, "EventEmitter.set_max_listeners(value)")
        return self

    # --- CLASS-LEVEL ACCESSORS ---
    # These read the registry directly and never call instance methods.

    @classmethod
    def listeners_of(cls, obj: Any, name: Hashable) -> List[Listener]:
        """Return a copy of obj's listener list for name."""
        return list(_registry_of(obj).get(name, ()))

    @classmethod
    def listener_count_of(cls, obj: Any, name: Hashable) -> int:
        return len(_registry_of(obj).get(name, ()))

    @classmethod
    def event_names_of(cls, obj: Any) -> List[Hashable]:
        return list(_registry_of(obj))

    @classmethod
    def max_listeners_of(cls, obj: Any):
        if isinstance(obj, EventEmitter):
            return obj._max_listeners
        inner = getattr(obj, EMITTER_ATTR, None)
        if isinstance(inner, EventEmitter):
            return inner._max_listeners
        return EventEmitter.default_max_listeners

    @classmethod
    def set_default_max_listeners(cls, value):
        """Change the shared threshold used by emitters created afterwards.

        Returns:
            The normalized threshold
        """
        value = _coerce_threshold(value, "EventEmitter.set_default_max_listeners(value)")
        EventEmitter.default_max_listeners = value
        return value

    @classmethod
    def extend(cls, child: type) -> type:
        """Give child the emitter operations by composition.

        See ``event_emitter.core.source.extend``.
        """
        from .source import extend
        return extend(child, emitter_class=cls)

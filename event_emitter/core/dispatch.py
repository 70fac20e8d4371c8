"""Dispatch engines used by EventEmitter.

Two ways of running a list of listeners:

- ``dispatch`` calls every listener in order, synchronously.
- ``AsyncPipeline`` calls listeners one at a time, handing each a
  continuation; the next listener runs only after the previous one calls
  its continuation, and the first reported error ends the run.

Both engines work on a copy of the listener list taken when the emission
starts, so listeners added or removed while it runs do not shift the
positions of the remaining ones.
"""

import logging
from typing import Any, Callable, Optional, Sequence

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]
Continuation = Callable[..., None]


def dispatch(listeners: Sequence[Listener], args: Sequence[Any]) -> None:
    """Invoke each listener with args, in order.

    Args:
        listeners: Listener snapshot to run
        args: Positional arguments passed to every listener
    """
    for listener in listeners:
        listener(*args)


class AsyncPipeline:
    """Sequential continuation-driven run over a listener snapshot.

    Each listener receives the emission arguments followed by a
    continuation ``next(err=None)``. A falsy err advances to the next
    listener, a truthy err stops the run. The completion callback is
    invoked exactly once with the error, or ``None`` after the last
    listener.

    Each continuation is single use. Calling it again, or calling any
    continuation after the pipeline finished, is ignored.

    Continuations called synchronously from inside a listener are
    drained by a loop rather than by recursion, so long listener lists
    do not grow the call stack.
    """

    def __init__(
        self,
        name: Any,
        listeners: Sequence[Listener],
        args: Sequence[Any],
        callback: Callable[[Optional[Any]], Any],
    ):
        self.name = name
        self._listeners = list(listeners)
        self._args = tuple(args)
        self._callback = callback
        self._index = 0
        self._done = False
        self._running = False
        self._pending = False

    @property
    def done(self) -> bool:
        return self._done

    @property
    def position(self) -> int:
        """Number of listeners started so far."""
        return self._index

    def start(self) -> 'AsyncPipeline':
        self._advance(None)
        return self

    def _make_continuation(self) -> Continuation:
        used = False

        def next_listener(err: Optional[Any] = None) -> None:
            nonlocal used
            if used or self._done:
                logger.debug(
                    "Ignoring repeated continuation call for event %r", self.name
                )
                return
            used = True
            self._advance(err)

        return next_listener

    def _advance(self, err: Optional[Any]) -> None:
        if err:
            self._finish(err)
            return

        if self._running:
            # Called from inside the listener currently running; the loop
            # below picks it up once that listener returns.
            self._pending = True
            return

        self._running = True
        try:
            while not self._done:
                self._pending = False
                if self._index == len(self._listeners):
                    self._finish(None)
                    return

                listener = self._listeners[self._index]
                self._index += 1
                listener(*self._args, self._make_continuation())

                if not self._pending:
                    return
        finally:
            self._running = False

    def _finish(self, err: Optional[Any]) -> None:
        if self._done:
            return
        self._done = True
        self._callback(err)

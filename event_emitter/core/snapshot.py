"""Read-only registry snapshots for tooling."""

from dataclasses import dataclass, field
from typing import Any, Callable, Hashable

from .emitter import EventEmitter, OnceListener


@dataclass(frozen=True)
class ListenerInfo:
    """One registered listener."""
    event: Hashable
    position: int
    listener: Callable[..., Any]
    once: bool

    @property
    def target(self) -> Callable[..., Any]:
        """The user callable, unwrapped from a once adapter."""
        if self.once:
            return self.listener.listener
        return self.listener


@dataclass(frozen=True)
class RegistrySnapshot:
    """All listeners of one emitter at a point in time."""
    max_listeners: Any
    entries: tuple[ListenerInfo, ...] = field(default_factory=tuple)

    @property
    def event_names(self) -> list[Hashable]:
        names = []
        for info in self.entries:
            if info.event not in names:
                names.append(info.event)
        return names

    @property
    def total(self) -> int:
        return len(self.entries)

    def for_event(self, name: Hashable) -> list[ListenerInfo]:
        return [info for info in self.entries if info.event == name]

    def over_limit(self) -> list[Hashable]:
        """Event names holding more listeners than max_listeners."""
        limit = self.max_listeners
        if not limit or limit < 0:
            return []
        return [name for name in self.event_names if len(self.for_event(name)) > limit]


def take_snapshot(obj: Any) -> RegistrySnapshot:
    """Capture obj's registry through the class-level accessors.

    Works for EventEmitter instances and objects of classes decorated
    with ``extend``. No listener or instance method is called.
    """
    entries = []
    for name in EventEmitter.event_names_of(obj):
        for position, listener in enumerate(EventEmitter.listeners_of(obj, name)):
            entries.append(ListenerInfo(
                event=name,
                position=position,
                listener=listener,
                once=isinstance(listener, OnceListener),
            ))
    return RegistrySnapshot(
        max_listeners=EventEmitter.max_listeners_of(obj),
        entries=tuple(entries),
    )

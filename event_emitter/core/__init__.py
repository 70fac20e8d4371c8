"""Listener registry and dispatch engines."""

from .dispatch import AsyncPipeline, dispatch
from .emitter import EventEmitter, OnceListener, REMOVE_LISTENER, UNLIMITED
from .snapshot import ListenerInfo, RegistrySnapshot, take_snapshot
from .source import EventSource, emitter_of, extend

__all__ = [
    'AsyncPipeline',
    'dispatch',
    'EventEmitter',
    'OnceListener',
    'REMOVE_LISTENER',
    'UNLIMITED',
    'ListenerInfo',
    'RegistrySnapshot',
    'take_snapshot',
    'EventSource',
    'emitter_of',
    'extend',
]

"""In-process event emitter with synchronous and sequential async dispatch."""

from .config import (
    AppConfig,
    ConfigError,
    EventEmitterError,
    InvalidArgumentError,
    InvalidCallbackError,
    InvalidListenerError,
    InvalidSourceError,
)
from .core import (
    REMOVE_LISTENER,
    UNLIMITED,
    EventEmitter,
    EventSource,
    extend,
    take_snapshot,
)

__version__ = "1.0.0"

__all__ = [
    'AppConfig',
    'ConfigError',
    'EventEmitterError',
    'InvalidArgumentError',
    'InvalidCallbackError',
    'InvalidListenerError',
    'InvalidSourceError',
    'REMOVE_LISTENER',
    'UNLIMITED',
    'EventEmitter',
    'EventSource',
    'extend',
    'take_snapshot',
]

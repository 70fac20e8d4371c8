"""Formatting utilities for presenting registries."""

from typing import Any, Callable

from ..core import OnceListener


def format_listener(listener: Callable[..., Any]) -> str:
    """Format a listener for display.
    
    Uses the qualified name where there is one:
    - module-level function -> 'pkg.mod.handler'
    - bound method -> 'pkg.mod.Widget.refresh'
    - once adapter -> 'once(pkg.mod.handler)'
    
    Args:
        listener: Registered callable
        
    Returns:
        Formatted string representation
    """
    if isinstance(listener, OnceListener):
        return f"once({format_listener(listener.listener)})"

    qualname = getattr(listener, "__qualname__", None)
    if qualname is None:
        return repr(listener)
    module = getattr(listener, "__module__", None)
    if module and module != "builtins":
        return f"{module}.{qualname}"
    return qualname


def format_threshold(value: Any) -> str:
    """Format a max_listeners threshold for display.
    
    Negative and zero thresholds disable the leak warning:
    - -1 -> 'unlimited'
    - 10 -> '10'
    
    Args:
        value: Threshold value
        
    Returns:
        Formatted string representation
    """
    if not value or value < 0:
        return "unlimited"
    return str(value)


def format_event_name(name: Any) -> str:
    """Strings print as-is, anything else through repr()."""
    if isinstance(name, str):
        return name
    return repr(name)

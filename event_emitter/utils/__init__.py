"""Utility functions for the event emitter."""

from .formatters import format_listener, format_threshold, format_event_name
from .tree_builder import build_registry_tree
from .cli_helpers import print_message, print_warning, print_info

__all__ = [
    'format_listener',
    'format_threshold',
    'format_event_name',
    'build_registry_tree',
    'print_message',
    'print_warning',
    'print_info',
]

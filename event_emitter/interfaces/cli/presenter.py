"""CLI presentation layer for listener registries.

This module renders registries with rich tables and subscribes to
``"removeListener"`` notifications to report removals.
"""

from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core import REMOVE_LISTENER, take_snapshot
from ...utils import (
    build_registry_tree,
    format_event_name,
    format_listener,
    format_threshold,
    print_info,
    print_warning,
)


class RegistryPresenter:
    """Displays emitter registries in the CLI.

    Reads registries through the class-level accessors, so showing an
    emitter never runs its listeners or re-checks its leak threshold.

    Example:
        emitter = EventEmitter()
        presenter = RegistryPresenter()
        presenter.attach_to_emitter(emitter)

        emitter.on('tick', handler)
        presenter.print_table(emitter)
        emitter.off('tick')  # prints a removal notice
    """

    def __init__(self, console: Optional[Console] = None):
        """Initialize presenter.

        Args:
            console: Rich console to print to (defaults to a new one)
        """
        self.console = console or Console()

    def attach_to_emitter(self, emitter):
        """Subscribe to removal notifications.

        Args:
            emitter: Emitter to watch

        Returns:
            The installed handler, for ``emitter.off(REMOVE_LISTENER, handler)``
        """
        handler = self._on_remove_listener
        emitter.on(REMOVE_LISTENER, handler)
        return handler

    def _on_remove_listener(self, name: Any, listener: Any):
        """Handle removal notification - print a notice.

        Args:
            name: Event the listener is removed from
            listener: Listener being removed
        """
        print_info(
            f"Removed {format_listener(listener)} from {format_event_name(name)}",
            console=self.console,
        )

    def build_table(self, obj) -> Table:
        """Build a table with one row per registered listener.

        Args:
            obj: EventEmitter or extended object

        Returns:
            Rich table, rows in dispatch order
        """
        snapshot = take_snapshot(obj)
        over_limit = set(snapshot.over_limit())

        table = Table(
            box=box.SIMPLE,
            header_style=None,
            caption=f"max listeners: {format_threshold(snapshot.max_listeners)}",
        )
        table.add_column("Event", no_wrap=True)
        table.add_column("#", no_wrap=True, justify="right")
        table.add_column("Listener")
        table.add_column("Once", no_wrap=True)

        for info in snapshot.entries:
            event = escape(format_event_name(info.event))
            if info.event in over_limit:
                event = f"[bold red]{event}[/bold red]"
            table.add_row(
                event,
                str(info.position),
                escape(format_listener(info.target)),
                "yes" if info.once else "",
            )

        return table

    def print_table(self, obj):
        """Print the listener table for obj."""
        self.console.print(self.build_table(obj))
        over_limit = take_snapshot(obj).over_limit()
        if over_limit:
            names = ", ".join(format_event_name(name) for name in over_limit)
            print_warning(f"Over the listener limit: {names}", console=self.console)

    def print_tree(self, obj):
        """Print a tree view of obj's registry."""
        tree = build_registry_tree(take_snapshot(obj))
        self.console.print(tree, markup=False, highlight=False)

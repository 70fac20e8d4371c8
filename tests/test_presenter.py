import io
import unittest
from unittest.mock import MagicMock
import sys
import os

from rich.console import Console

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from event_emitter import EventEmitter, REMOVE_LISTENER, take_snapshot
from event_emitter.interfaces.cli.presenter import RegistryPresenter
from event_emitter.utils import (
    build_registry_tree,
    format_event_name,
    format_listener,
    format_threshold,
)


def handle_tick(value):
    pass


def handle_done():
    pass


class Widget:
    def refresh(self):
        pass


class TestHelpers(unittest.TestCase):
    def test_format_listener(self):
        self.assertTrue(format_listener(handle_tick).endswith(".handle_tick"))
        self.assertTrue(format_listener(Widget().refresh).endswith(".Widget.refresh"))
        self.assertEqual(format_listener(print), "print")

    def test_format_once_adapter(self):
        adapter = EventEmitter().once("x", handle_tick)
        label = format_listener(adapter)
        self.assertTrue(label.startswith("once("))
        self.assertTrue(label.endswith(".handle_tick)"))

    def test_format_threshold(self):
        self.assertEqual(format_threshold(-1), "unlimited")
        self.assertEqual(format_threshold(0), "unlimited")
        self.assertEqual(format_threshold(10), "10")

    def test_format_event_name(self):
        self.assertEqual(format_event_name("tick"), "tick")
        self.assertEqual(format_event_name(("tick", 1)), "('tick', 1)")


class TestSnapshot(unittest.TestCase):
    def test_snapshot_rows_in_dispatch_order(self):
        emitter = EventEmitter(max_listeners=1)
        emitter.on("tick", handle_tick)
        emitter.once("tick", handle_done)
        emitter.on("done", handle_done)

        snapshot = take_snapshot(emitter)

        self.assertEqual(snapshot.total, 3)
        self.assertEqual(snapshot.event_names, ["tick", "done"])
        self.assertEqual(
            [(info.event, info.position, info.once) for info in snapshot.entries],
            [("tick", 0, False), ("tick", 1, True), ("done", 0, False)],
        )
        self.assertIs(snapshot.entries[1].target, handle_done)
        self.assertEqual(snapshot.over_limit(), ["tick"])

    def test_snapshot_does_not_call_listeners(self):
        emitter = EventEmitter()
        fn = MagicMock()
        emitter.on("x", fn)
        take_snapshot(emitter)
        fn.assert_not_called()

    def test_unlimited_has_nothing_over_limit(self):
        emitter = EventEmitter(max_listeners=-1)
        for _ in range(20):
            emitter.on("x", handle_tick)
        self.assertEqual(take_snapshot(emitter).over_limit(), [])


class TestTreeBuilder(unittest.TestCase):
    def test_build_registry_tree(self):
        emitter = EventEmitter(max_listeners=1)
        emitter.on("tick", handle_tick)
        emitter.on("tick", handle_done)
        emitter.on("done", handle_done)

        tree = build_registry_tree(take_snapshot(emitter))
        lines = tree.splitlines()

        self.assertEqual(lines[0], ". (max listeners: 1)")
        self.assertEqual(lines[1], "├── tick/ # over limit")
        self.assertTrue(lines[2].startswith("│   ├── "))
        self.assertTrue(lines[2].endswith("handle_tick"))
        self.assertTrue(lines[3].startswith("│   └── "))
        self.assertEqual(lines[4], "└── done/")
        self.assertTrue(lines[5].startswith("    └── "))

    def test_empty_registry(self):
        tree = build_registry_tree(take_snapshot(EventEmitter(max_listeners=-1)))
        self.assertEqual(tree, ". (max listeners: unlimited)")


class TestRegistryPresenter(unittest.TestCase):
    def setUp(self):
        self.output = io.StringIO()
        console = Console(file=self.output, width=120, color_system=None)
        self.presenter = RegistryPresenter(console)

    def test_print_table(self):
        emitter = EventEmitter()
        emitter.on("tick", handle_tick)
        emitter.once("done", handle_done)

        self.presenter.print_table(emitter)
        text = self.output.getvalue()

        self.assertIn("Event", text)
        self.assertIn("handle_tick", text)
        self.assertIn("handle_done", text)
        self.assertIn("yes", text)
        self.assertIn("max listeners: 10", text)
        self.assertNotIn("Over the listener limit", text)

    def test_print_table_warns_over_limit(self):
        emitter = EventEmitter(max_listeners=1)
        emitter.on("[tick]", handle_tick)
        emitter.on("[tick]", handle_done)

        self.presenter.print_table(emitter)

        text = self.output.getvalue()
        self.assertIn("[tick]", text)
        self.assertIn("Over the listener limit: [tick]", text)

    def test_print_tree(self):
        emitter = EventEmitter()
        emitter.on("tick", handle_tick)
        self.presenter.print_tree(emitter)
        self.assertIn("tick/", self.output.getvalue())

    def test_attach_reports_removals(self):
        emitter = EventEmitter()
        handler = self.presenter.attach_to_emitter(emitter)
        emitter.on("tick", handle_tick)

        emitter.off("tick", handle_tick)

        self.assertIn("Removed", self.output.getvalue())
        self.assertIn("handle_tick from tick", self.output.getvalue())
        self.assertEqual(emitter.listeners(REMOVE_LISTENER), [handler])


if __name__ == '__main__':
    unittest.main()

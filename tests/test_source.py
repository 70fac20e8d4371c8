import unittest
from unittest.mock import MagicMock
import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from event_emitter import EventEmitter, EventSource, extend


@extend
class Downloader:
    def __init__(self, url):
        self.url = url

    def finish(self):
        self.emit("done", self.url)


class QuietEmitter(EventEmitter):
    pass


class TestExtend(unittest.TestCase):
    def test_instances_get_emitter_operations(self):
        downloader = Downloader("http://example.invalid/file")
        fn = MagicMock()

        result = downloader.on("done", fn)
        downloader.finish()

        self.assertIs(result, downloader)
        fn.assert_called_once_with("http://example.invalid/file")
        self.assertEqual(downloader.listeners("done"), [fn])

    def test_each_instance_owns_its_registry(self):
        first, second = Downloader("a"), Downloader("b")
        fn = MagicMock()
        first.on("done", fn)

        second.finish()
        fn.assert_not_called()
        self.assertEqual(second.listener_count("done"), 0)

    def test_satisfies_event_source_protocol(self):
        self.assertIsInstance(Downloader("a"), EventSource)
        self.assertIsInstance(EventEmitter(), EventSource)
        self.assertNotIsInstance(object(), EventSource)

    def test_once_and_async_are_forwarded(self):
        downloader = Downloader("a")
        fn = MagicMock()
        callback = MagicMock()
        downloader.once("done", fn)
        downloader.on("save", lambda next_listener: next_listener())

        downloader.finish()
        downloader.finish()
        downloader.emit_async("save", callback)

        fn.assert_called_once_with("a")
        callback.assert_called_once_with(None)

    def test_class_level_accessors_see_composed_registry(self):
        downloader = Downloader("a")
        fn = MagicMock()
        downloader.on("done", fn)

        self.assertEqual(EventEmitter.listeners_of(downloader, "done"), [fn])
        self.assertEqual(EventEmitter.listener_count_of(downloader, "done"), 1)
        self.assertEqual(EventEmitter.event_names_of(downloader), ["done"])

    def test_existing_methods_are_kept(self):
        class Custom:
            def emit(self, name, *args):
                return "custom"

        extend(Custom)
        self.assertEqual(Custom().emit("x"), "custom")
        self.assertTrue(callable(Custom.on))

    def test_classmethod_uses_subclass(self):
        @QuietEmitter.extend
        class Widget:
            pass

        widget = Widget()
        widget.on("x", MagicMock())
        self.assertIsInstance(widget._event_emitter, QuietEmitter)

    def test_can_forward_to_another_emitter(self):
        downloader = Downloader("a")
        bridge = EventEmitter()
        fn = MagicMock()
        bridge.on("done", fn)

        bridge.listen_to(downloader, "done")
        downloader.finish()

        fn.assert_called_once_with("a")

    def test_rejects_non_class(self):
        with self.assertRaises(TypeError):
            extend(Downloader("a"))


if __name__ == '__main__':
    unittest.main()

"""Tests for logging bootstrap and bus log events."""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
import unittest

import structlog

from observer_bus.events.bus import Event, EventBus
from observer_bus.logging_utils import configure_logging
from observer_bus.observers import EchoObserver, RecordingObserver


class BusLogEventTests(unittest.TestCase):
    """Validate dotted log events emitted by the bus."""

    def test_subscribe_and_publish_emit_debug_events(self) -> None:
        bus = EventBus(demo_delay_seconds=0.0)
        recorder = RecordingObserver()
        with self.assertLogs("observer_bus.events.bus", level="DEBUG") as logs:
            bus.subscribe(recorder)
            bus.publish(Event(name="windowOpen", payload="Vessel:1"))
            bus.unsubscribe(recorder)
            bus.unsubscribe(recorder)

        output = "\n".join(logs.output)
        for event_name in (
            "bus.subscribed",
            "bus.publish",
            "bus.unsubscribed",
            "bus.unsubscribe.missing",
        ):
            self.assertIn(event_name, output)

    def test_demo_action_logs_state(self) -> None:
        bus = EventBus(demo_delay_seconds=0.0)
        with self.assertLogs("observer_bus.events.bus", level="INFO") as logs:
            bus.trigger_demo_action("Vessel:1")
        self.assertEqual(logs.records[0].state, bus.state)
        self.assertEqual(logs.records[0].payload, "Vessel:1")


class ConfigureLoggingTests(unittest.TestCase):
    """Validate configure_logging() handler setup behavior."""

    def setUp(self) -> None:
        root = logging.getLogger()
        self._original_level = root.level
        self._original_handlers = list(root.handlers)

    def tearDown(self) -> None:
        root = logging.getLogger()
        for handler in root.handlers:
            if handler not in self._original_handlers:
                handler.close()
        root.setLevel(self._original_level)
        root.handlers.clear()
        root.handlers.extend(self._original_handlers)

    def test_configure_logging_adds_stderr_handler(self) -> None:
        configure_logging({"level": "DEBUG", "structured": False, "log_to_file": False})
        stream_handlers = [
            h
            for h in logging.getLogger().handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(stream_handlers), 1)
        self.assertEqual(stream_handlers[0].level, logging.WARNING)

    def test_structured_uses_processor_formatter(self) -> None:
        configure_logging({"level": "INFO", "structured": True, "log_to_file": False})
        formatters = [h.formatter for h in logging.getLogger().handlers]
        self.assertTrue(
            any(isinstance(f, structlog.stdlib.ProcessorFormatter) for f in formatters)
        )

    def test_structured_output_keeps_observer_reaction_text(self) -> None:
        configure_logging({"level": "INFO", "structured": True, "log_to_file": False})
        formatter = logging.getLogger().handlers[0].formatter

        with self.assertLogs("observer_bus.observers", level="INFO") as logs:
            EchoObserver("ObserverA").react(Event(name="windowOpen", payload="Vessel:1"))

        data = json.loads(formatter.format(logs.records[0]))
        self.assertEqual(data["event"], "observer.reacted")
        self.assertEqual(
            data["line"],
            "ObserverA: Reacted to the event. Event Name: windowOpen Event: Vessel:1",
        )

    def test_plain_formatter_when_not_structured(self) -> None:
        configure_logging({"level": "INFO", "structured": False, "log_to_file": False})
        formatters = [h.formatter for h in logging.getLogger().handlers]
        self.assertFalse(
            any(isinstance(f, structlog.stdlib.ProcessorFormatter) for f in formatters)
        )

    def test_sets_root_level(self) -> None:
        configure_logging({"level": "DEBUG", "structured": False, "log_to_file": False})
        self.assertEqual(logging.getLogger().level, logging.DEBUG)

    def test_stderr_filter_only_passes_app_records(self) -> None:
        configure_logging({"level": "INFO", "structured": False, "log_to_file": False})
        handler = logging.getLogger().handlers[0]

        def record(name: str) -> logging.LogRecord:
            return logging.LogRecord(name, logging.ERROR, __file__, 1, "msg", (), None)

        self.assertTrue(handler.filter(record("observer_bus.events.bus")))
        self.assertFalse(handler.filter(record("somelib")))

    def test_log_to_file_creates_file_handler(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_path = Path(temp_dir) / "logs" / "app.log"
            configure_logging(
                {
                    "level": "INFO",
                    "structured": False,
                    "log_to_file": True,
                    "log_file_path": str(log_path),
                }
            )
            file_handlers = [
                h
                for h in logging.getLogger().handlers
                if isinstance(h, logging.FileHandler)
            ]
            self.assertEqual(len(file_handlers), 1)
            self.assertTrue(log_path.exists())
            for h in file_handlers:
                logging.getLogger().removeHandler(h)
                h.close()


if __name__ == "__main__":
    unittest.main()

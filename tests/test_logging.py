"""
Tests for the JSON logging setup.
"""

import json
import logging

from pythonjsonlogger.json import JsonFormatter

from weather_intel import logging_config


def test_setup_logging_installs_json_handler(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    try:
        logging_config.setup_logging(service_name="weather-test", level="debug")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)

        record = logging.LogRecord("weather_intel.test", logging.INFO, __file__, 1, "hello", None, None)
        assert handler.filter(record)
        payload = json.loads(handler.format(record))
        assert payload["message"] == "hello"
        assert payload["service"] == "weather-test"
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        logging.captureWarnings(False)

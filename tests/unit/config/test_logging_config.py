"""
Unit tests for the JSON logger factory.
"""

import json
import logging
from unittest.mock import patch

from src.config import logging_config
from src.config.logging_config import ROOT_LOGGER_NAME, setup_logger


class TestSetupLogger:
    def test_module_loggers_share_the_root_handler(self):
        root = setup_logger()
        child = setup_logger("src.tests.sample")

        assert child.name == f"{ROOT_LOGGER_NAME}.src.tests.sample"
        assert child.parent is root
        assert child.handlers == []
        assert len(root.handlers) == 1

    def test_repeated_setup_does_not_add_handlers(self):
        setup_logger("src.tests.again")
        setup_logger("src.tests.again")
        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1

    def test_explicit_level_wins(self):
        assert setup_logger("src.tests.explicit", level="error").level == logging.ERROR

    def test_default_level_comes_from_config(self):
        with patch.object(logging_config.config, "LOG_LEVEL", "DEBUG"):
            assert setup_logger("src.tests.configured").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logger("src.tests.unknown", level="chatty").level == logging.INFO

    def test_records_are_json(self):
        handler = logging.getLogger(ROOT_LOGGER_NAME).handlers[0]
        record = logging.LogRecord(ROOT_LOGGER_NAME, logging.INFO, __file__, 1, "File saved: %s", ("a.bin",), None)

        line = json.loads(handler.format(record))

        assert line["message"] == "File saved: a.bin"
        assert line["levelname"] == "INFO"

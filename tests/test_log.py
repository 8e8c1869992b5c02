from __future__ import annotations

import io
import logging
import unittest
from unittest import mock

from bundlelens.log import LOGGER_NAME, SILENT, configure_logging, parse_level


class LoggingSetupTests(unittest.TestCase):
    def setUp(self) -> None:
        self._reset_logger()
        self.addCleanup(self._reset_logger)

    def _reset_logger(self) -> None:
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_level_names(self) -> None:
        self.assertEqual(parse_level("debug"), logging.DEBUG)
        self.assertEqual(parse_level("WARN"), logging.WARNING)
        self.assertEqual(parse_level("warning"), logging.WARNING)
        self.assertEqual(parse_level("silent"), SILENT)

    def test_unknown_level(self) -> None:
        with self.assertRaisesRegex(ValueError, "silent"):
            parse_level("loud")

    def test_configure_is_idempotent_without_force(self) -> None:
        configure_logging("info")
        logger = configure_logging("debug")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.INFO)

        configure_logging("debug", force=True)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_child_loggers_write_to_stderr(self) -> None:
        stream = io.StringIO()
        with mock.patch("sys.stderr", stream):
            configure_logging("warn", force=True)
            logging.getLogger("bundlelens.analyzer").warning("bundle %s missing", "a.js")
            logging.getLogger("bundlelens.analyzer").info("hidden")
        self.assertEqual(stream.getvalue(), "WARNING: bundle a.js missing\n")

    def test_silent_suppresses_errors(self) -> None:
        stream = io.StringIO()
        with mock.patch("sys.stderr", stream):
            configure_logging("silent", force=True)
            logging.getLogger("bundlelens.cli").error("nope")
        self.assertEqual(stream.getvalue(), "")


if __name__ == "__main__":
    unittest.main()

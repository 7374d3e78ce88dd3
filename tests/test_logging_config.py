# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from inventory_tracker.config.logging_config import setup_logging
from inventory_tracker.config.settings import Settings


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Point logs at a temp dir and reset the project logger."""
        self._tmp = tempfile.TemporaryDirectory()
        patcher = patch.object(Settings, "LOGS_DIR", Path(self._tmp.name))
        patcher.start()
        self.addCleanup(patcher.stop)
        self._reset_handlers()

    def tearDown(self) -> None:
        self._reset_handlers()
        self._tmp.cleanup()

    @staticmethod
    def _reset_handlers() -> None:
        root_logger = logging.getLogger("inventory_tracker")
        for handler in list(root_logger.handlers):
            handler.close()
            root_logger.removeHandler(handler)

    def _stream_handlers(self) -> list[logging.Handler]:
        return [
            h
            for h in logging.getLogger("inventory_tracker").handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent, Path(self._tmp.name))

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_handler_level_debug(self) -> None:
        """File handler should be set to DEBUG level."""
        setup_logging()
        file_handlers = [
            h
            for h in logging.getLogger("inventory_tracker").handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)

    def test_console_handler_level_warning(self) -> None:
        """Console handler defaults to WARNING."""
        setup_logging()
        handlers = self._stream_handlers()
        self.assertEqual(len(handlers), 1)
        self.assertEqual(handlers[0].level, logging.WARNING)

    def test_console_level_override(self) -> None:
        """The server passes INFO for its console output."""
        setup_logging(logging.INFO)
        self.assertEqual(self._stream_handlers()[0].level, logging.INFO)

    def test_repeated_calls_do_not_duplicate_handlers(self) -> None:
        """Calling setup twice leaves exactly two handlers."""
        setup_logging()
        setup_logging()
        root_logger = logging.getLogger("inventory_tracker")
        self.assertEqual(len(root_logger.handlers), 2)

    def test_child_loggers_reach_file(self) -> None:
        """Module loggers propagate into the run's log file."""
        log_path = setup_logging()
        logging.getLogger("inventory_tracker.api").debug("probe line")
        for handler in logging.getLogger("inventory_tracker").handlers:
            handler.flush()
        self.assertIn("probe line", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()

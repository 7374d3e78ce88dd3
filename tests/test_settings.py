# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from inventory_tracker.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_request_timeout_is_positive_int(self) -> None:
        """REQUEST_TIMEOUT must be a positive integer."""
        self.assertIsInstance(Settings.REQUEST_TIMEOUT, int)
        self.assertGreater(Settings.REQUEST_TIMEOUT, 0)

    def test_health_timeout_below_request_timeout(self) -> None:
        """Health probes give up sooner than regular requests."""
        self.assertGreater(Settings.HEALTH_TIMEOUT, 0)
        self.assertLessEqual(
            Settings.HEALTH_TIMEOUT, Settings.REQUEST_TIMEOUT
        )

    def test_api_prefix(self) -> None:
        """Products live under /api/products."""
        self.assertEqual(Settings.API_PREFIX, "/api/products")

    def test_server_port_in_range(self) -> None:
        """SERVER_PORT must be a valid TCP port."""
        self.assertIsInstance(Settings.SERVER_PORT, int)
        self.assertTrue(0 < Settings.SERVER_PORT < 65536)

    def test_api_base_url_is_http(self) -> None:
        """API_BASE_URL must be an http(s) URL."""
        self.assertRegex(Settings.API_BASE_URL, r"^https?://")

    def test_low_stock_threshold(self) -> None:
        """Products at or below 5 units are low stock."""
        self.assertEqual(Settings.LOW_STOCK_THRESHOLD, 5)

    def test_page_size_options(self) -> None:
        """The default page size is one of the offered options."""
        self.assertEqual(Settings.ITEMS_PER_PAGE_OPTIONS, [5, 10, 20, 50])
        self.assertIn(
            Settings.DEFAULT_ITEMS_PER_PAGE,
            Settings.ITEMS_PER_PAGE_OPTIONS,
        )

    def test_default_headers_accept_json(self) -> None:
        """DEFAULT_HEADERS must ask for JSON."""
        self.assertEqual(
            Settings.DEFAULT_HEADERS["Accept"], "application/json"
        )

    def test_base_dir_exists(self) -> None:
        """BASE_DIR should point to an existing directory."""
        self.assertTrue(Path(Settings.BASE_DIR).is_dir())


if __name__ == "__main__":
    unittest.main()

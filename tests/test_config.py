"""
Unit tests for config.py (AppConfig).
"""
import json
import os
import tempfile
import unittest
from unittest.mock import patch

from dashboard.config import AppConfig, _load_app_config, app_config
from dashboard.constants import (DEFAULT_CACHE_DURATION,
                                 DEFAULT_MAX_PARALLEL_REQUESTS,
                                 DEFAULT_REQUEST_TIMEOUT, DEFAULT_UI_HOST,
                                 DEFAULT_UI_PORT)
from dashboard.error_handler import ConfigurationError, ErrorCategory


class TestAppConfig(unittest.TestCase):
    """Test AppConfig dataclass and loading."""

    def test_singleton_loaded(self):
        self.assertIsInstance(app_config, AppConfig)

    def test_defaults_from_empty_mapping(self):
        config = AppConfig.from_dict({})

        self.assertEqual(config.ui_host, DEFAULT_UI_HOST)
        self.assertEqual(config.ui_port, DEFAULT_UI_PORT)
        self.assertEqual(config.cache_duration, DEFAULT_CACHE_DURATION)
        self.assertEqual(config.request_timeout, DEFAULT_REQUEST_TIMEOUT)
        self.assertEqual(config.max_parallel_requests, DEFAULT_MAX_PARALLEL_REQUESTS)
        self.assertFalse(config.use_mock_data)

    def test_values_from_file(self):
        data = {
            "server": {"host": "0.0.0.0", "port": 9001, "open_browser": False},
            "market_data": {
                "cache_duration_seconds": 30,
                "request_delay_seconds": 0,
                "max_parallel_requests": 2,
                "use_mock_data": True,
            },
        }
        with tempfile.NamedTemporaryFile(mode='w', delete=False, suffix='.json') as f:
            json.dump(data, f)
            temp_path = f.name

        try:
            config = AppConfig.from_file(temp_path)
        finally:
            os.unlink(temp_path)

        self.assertEqual(config.ui_host, "0.0.0.0")
        self.assertEqual(config.ui_port, 9001)
        self.assertFalse(config.open_browser)
        self.assertEqual(config.cache_duration, 30.0)
        self.assertEqual(config.request_delay, 0.0)
        self.assertEqual(config.max_parallel_requests, 2)
        self.assertTrue(config.use_mock_data)

    def test_missing_file_uses_defaults(self):
        config = AppConfig.from_file("does/not/exist.json")
        self.assertEqual(config, AppConfig())

    def test_parallel_requests_at_least_one(self):
        config = AppConfig.from_dict({"market_data": {"max_parallel_requests": 0}})
        self.assertEqual(config.max_parallel_requests, 1)

    def test_non_numeric_port_raises_configuration_error(self):
        with self.assertRaises(ConfigurationError) as ctx:
            AppConfig.from_dict({"server": {"port": "eighty"}})

        self.assertIsInstance(ctx.exception.original_error, ValueError)
        self.assertEqual(ctx.exception.category, ErrorCategory.CONFIGURATION)

    def test_null_timeout_raises_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            AppConfig.from_dict({"market_data": {"request_timeout_seconds": None}})

    def test_section_must_be_object(self):
        with self.assertRaises(ConfigurationError):
            AppConfig.from_dict({"market_data": [1, 2]})
        with self.assertRaises(ConfigurationError):
            AppConfig.from_dict(["server"])

    @patch('dashboard.config.ErrorHandler.log_error')
    def test_invalid_file_falls_back_to_defaults(self, mock_log_error):
        with tempfile.NamedTemporaryFile(mode='w', delete=False, suffix='.json') as f:
            json.dump({"server": {"port": "not-a-port"}}, f)
            temp_path = f.name

        try:
            config = _load_app_config(temp_path)
        finally:
            os.unlink(temp_path)

        self.assertEqual(config, AppConfig())
        error = mock_log_error.call_args[0][0]
        self.assertIsInstance(error, ConfigurationError)

    def test_dashboard_url_format(self):
        config = AppConfig(ui_host="127.0.0.1", ui_port=8123)
        self.assertEqual(config.dashboard_url, "http://127.0.0.1:8123/")


if __name__ == '__main__':
    unittest.main()

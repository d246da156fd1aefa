"""
Application configuration loaded from config.json.
"""

import os
from dataclasses import dataclass

from .constants import (CONFIG_DIR_NAME, CONFIG_FILENAME,
                        DEFAULT_CACHE_DURATION, DEFAULT_MAX_PARALLEL_REQUESTS,
                        DEFAULT_OPEN_BROWSER, DEFAULT_REQUEST_DELAY,
                        DEFAULT_REQUEST_TIMEOUT, DEFAULT_UI_HOST,
                        DEFAULT_UI_PORT, DEFAULT_USE_MOCK_DATA)
from .error_handler import ConfigurationError, ErrorHandler
from .logging_config import logger
from .utils import load_config


@dataclass
class AppConfig:
    """Application configuration loaded from config.json."""
    ui_host: str = DEFAULT_UI_HOST
    ui_port: int = DEFAULT_UI_PORT
    open_browser: bool = DEFAULT_OPEN_BROWSER
    cache_duration: float = DEFAULT_CACHE_DURATION
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    request_delay: float = DEFAULT_REQUEST_DELAY
    max_parallel_requests: int = DEFAULT_MAX_PARALLEL_REQUESTS
    use_mock_data: bool = DEFAULT_USE_MOCK_DATA

    @property
    def dashboard_url(self) -> str:
        return f"http://{self.ui_host}:{self.ui_port}/"

    @classmethod
    def from_dict(cls, config: dict) -> 'AppConfig':
        """Build configuration from a parsed config.json mapping.

        Raises:
            ConfigurationError: If a section is not a mapping or a value
                cannot be converted to its field's type.
        """
        if not isinstance(config, dict):
            raise ConfigurationError("Config root must be an object")
        server = config.get("server", {})
        market_data = config.get("market_data", {})
        for section_name, section in (("server", server), ("market_data", market_data)):
            if not isinstance(section, dict):
                raise ConfigurationError(f"Config section '{section_name}' must be an object")

        try:
            return cls(
                ui_host=str(server.get("host", DEFAULT_UI_HOST)),
                ui_port=int(server.get("port", DEFAULT_UI_PORT)),
                open_browser=bool(server.get("open_browser", DEFAULT_OPEN_BROWSER)),
                cache_duration=float(market_data.get("cache_duration_seconds", DEFAULT_CACHE_DURATION)),
                request_timeout=float(market_data.get("request_timeout_seconds", DEFAULT_REQUEST_TIMEOUT)),
                request_delay=float(market_data.get("request_delay_seconds", DEFAULT_REQUEST_DELAY)),
                max_parallel_requests=max(1, int(market_data.get("max_parallel_requests",
                                                                 DEFAULT_MAX_PARALLEL_REQUESTS))),
                use_mock_data=bool(market_data.get("use_mock_data", DEFAULT_USE_MOCK_DATA)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}", original_error=e) from e

    @classmethod
    def from_file(cls, config_path: str) -> 'AppConfig':
        """Load and parse application configuration from config.json."""
        return cls.from_dict(load_config(config_path))


def _load_app_config(config_path: str) -> AppConfig:
    """Load config.json, falling back to defaults if it holds invalid values."""
    try:
        return AppConfig.from_file(config_path)
    except ConfigurationError as e:
        ErrorHandler.log_error(e, context=config_path)
        logger.warning("Using default configuration")
        return AppConfig()


# Module-level singleton
_project_root = os.path.dirname(os.path.dirname(__file__))
app_config = _load_app_config(os.path.join(_project_root, CONFIG_DIR_NAME, CONFIG_FILENAME))

"""
Service instance initialization, status helpers, and state broadcasting.

This module wires together the core services used throughout the application
and provides shared helper functions for status reporting.
"""

from typing import Any, Dict

from .api import (GoogleFinanceClient, LiveQuoteSource, MockQuoteSource,
                  YahooFinanceClient)
from .cache import QuoteCache
from .calculations import build_initial_rows, build_snapshot
from .config import AppConfig, app_config
from .constants import REFRESH_INTERVAL
from .holdings import PORTFOLIO_HOLDINGS
from .logging_config import logger
from .quote_service import QuoteService
from .sse import sse_manager
from .state import SnapshotStore, StateManager
from .utils import format_timestamp, is_market_open_ist

# --------------------------
# CORE SERVICES
# --------------------------


def create_quote_source(config: AppConfig):
    """Build the quote source selected by configuration."""
    if config.use_mock_data:
        logger.info("Using mock market data")
        return MockQuoteSource()
    return LiveQuoteSource(
        YahooFinanceClient(timeout=config.request_timeout),
        GoogleFinanceClient(timeout=config.request_timeout),
    )


quote_cache = QuoteCache(ttl=app_config.cache_duration)
quote_service = QuoteService(
    create_quote_source(app_config),
    quote_cache,
    max_parallel_requests=app_config.max_parallel_requests,
    request_delay=app_config.request_delay,
)
state_manager = StateManager()
snapshot_store = SnapshotStore(build_snapshot(build_initial_rows(PORTFOLIO_HOLDINGS)))


# --------------------------
# STATUS HELPERS
# --------------------------

def _build_status_response() -> Dict[str, Any]:
    """Build status response for API and SSE."""
    return {
        "state": state_manager.state,
        "last_error": state_manager.last_error,
        "last_updated": format_timestamp(state_manager.last_updated),
        "market_open": is_market_open_ist(),
        "refresh_interval": REFRESH_INTERVAL,
    }


def broadcast_state_change() -> None:
    """Broadcast current status to all connected SSE clients."""
    sse_manager.broadcast("status", _build_status_response())


def broadcast_snapshot() -> None:
    """Broadcast the latest portfolio snapshot to all connected SSE clients."""
    sse_manager.broadcast("portfolio", snapshot_store.get().to_dict())


# Register state change listener for automatic broadcasting
state_manager.add_change_listener(broadcast_state_change)

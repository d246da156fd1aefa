"""
Constants used throughout the portfolio dashboard.

This module is the single source of truth for all default values,
timeouts, paths, and tunables used across the application.
"""

# Status states
STATE_UPDATING = "updating"
STATE_UPDATED = "updated"
STATE_ERROR = "error"

# Market Hours (IST)
MARKET_OPEN_HOUR = 9
MARKET_OPEN_MINUTE = 15
MARKET_CLOSE_HOUR = 15
MARKET_CLOSE_MINUTE = 30
WEEKEND_SATURDAY = 5
MARKET_TIMEZONE = "Asia/Kolkata"

# Default server configuration values
DEFAULT_UI_HOST = "127.0.0.1"
DEFAULT_UI_PORT = 8000
DEFAULT_OPEN_BROWSER = True

# Default market data configuration values
DEFAULT_CACHE_DURATION = 60  # seconds a cached quote stays fresh
DEFAULT_REQUEST_TIMEOUT = 5  # seconds
DEFAULT_REQUEST_DELAY = 0.2  # delay between request batches to avoid rate-limiting
DEFAULT_MAX_PARALLEL_REQUESTS = 4
DEFAULT_USE_MOCK_DATA = False

# Fixed refresh cadence (seconds), not user-configurable
REFRESH_INTERVAL = 15

# File / directory paths
CONFIG_FILENAME = "config.json"
CONFIG_DIR_NAME = "config"  # directory that houses config.json

# HTTP Status codes
HTTP_OK = 200
HTTP_ACCEPTED = 202
HTTP_BAD_REQUEST = 400
HTTP_CONFLICT = 409
HTTP_INTERNAL_SERVER_ERROR = 500

# /api/stocks request validation
MAX_SYMBOLS_PER_REQUEST = 50
SYMBOL_PATTERN = r"^[A-Z0-9^][A-Z0-9.&^_=-]{0,29}$"

# Server startup / UI timing (seconds)
SERVER_STARTUP_DELAY = 0.5
BROWSER_OPEN_DELAY = 1.5
SSE_KEEPALIVE_INTERVAL = 30  # SSE client keepalive interval
SSE_CLIENT_QUEUE_SIZE = 10

# External service URLs
YAHOO_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart"
YAHOO_QUOTE_URL = "https://finance.yahoo.com/quote"
GOOGLE_FINANCE_QUOTE_URL = "https://www.google.com/finance/quote"

# Yahoo suffix -> Google Finance exchange code
GOOGLE_EXCHANGE_SUFFIXES = {
    ".NS": "NSE",
    ".BO": "BOM",
}
GOOGLE_DEFAULT_EXCHANGE = "NSE"

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

# Placeholder values shown when a field is unavailable
NOT_AVAILABLE = "N/A"
LOADING_PLACEHOLDER = "Loading..."

# Quote sources
SOURCE_LIVE = "live"
SOURCE_PARTIAL = "partial"
SOURCE_MOCK = "mock"
SOURCE_FALLBACK = "fallback"

# Time format
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CLOCK_FORMAT = "%H:%M:%S"

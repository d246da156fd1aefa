"""
Utility functions for configuration loading, symbol handling, and market hours.
"""
import json
import re
import time
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

from .constants import (MARKET_CLOSE_HOUR, MARKET_CLOSE_MINUTE,
                        MARKET_OPEN_HOUR, MARKET_OPEN_MINUTE, MARKET_TIMEZONE,
                        SYMBOL_PATTERN, TIMESTAMP_FORMAT, WEEKEND_SATURDAY)
from .logging_config import logger

_SYMBOL_RE = re.compile(SYMBOL_PATTERN)


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from JSON file; an unreadable file yields ``{}``."""
    try:
        with open(config_path, "r") as f:
            return json.load(f)
    except Exception as e:
        logger.exception("Error loading config: %s", e)
        return {}


def format_timestamp(ts: Optional[float]) -> Optional[str]:
    """Format Unix timestamp to readable format."""
    if ts is None:
        return None
    return time.strftime(TIMESTAMP_FORMAT, time.localtime(ts))


def normalize_symbols(symbols: Iterable[str]) -> List[str]:
    """Strip and upper-case symbols, dropping blanks and duplicates.

    Input order is preserved.
    """
    seen = set()
    normalized = []
    for raw in symbols:
        symbol = (raw or "").strip().upper()
        if not symbol or symbol in seen:
            continue
        seen.add(symbol)
        normalized.append(symbol)
    return normalized


def parse_symbols_param(value: Optional[str]) -> List[str]:
    """Split a comma-separated ``symbols`` query value."""
    if not value:
        return []
    return normalize_symbols(value.split(","))


def is_valid_symbol(symbol: str) -> bool:
    """Check a normalized ticker against the allowed character set."""
    return bool(_SYMBOL_RE.match(symbol))


def is_market_open_ist() -> bool:
    """Check if the Indian equity market is currently open.

    Market hours: 9:15 AM - 3:30 PM IST, Monday-Friday
    """
    now = datetime.now(ZoneInfo(MARKET_TIMEZONE))

    if now.weekday() >= WEEKEND_SATURDAY:
        return False

    market_open = now.replace(
        hour=MARKET_OPEN_HOUR,
        minute=MARKET_OPEN_MINUTE,
        second=0,
        microsecond=0
    )
    market_close = now.replace(
        hour=MARKET_CLOSE_HOUR,
        minute=MARKET_CLOSE_MINUTE,
        second=0,
        microsecond=0
    )

    return market_open <= now <= market_close

"""
Expiring quote cache and thread synchronization.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .models import Quote


@dataclass
class CacheEntry:
    """A cached quote and the clock reading when it was stored."""
    quote: Quote
    stored_at: float


class QuoteCache:
    """Per-symbol quote cache with a fixed time-to-live.

    An entry is fresh while ``clock() - stored_at < ttl``. Expired entries
    are evicted on access and never returned. The clock is injectable so
    expiry can be tested without sleeping.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at < self.ttl

    def get(self, symbol: str) -> Optional[Quote]:
        """Return the cached quote for *symbol*, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(symbol)
            if entry is None:
                return None
            if not self._is_fresh(entry):
                del self._entries[symbol]
                return None
            return entry.quote

    def set(self, symbol: str, quote: Quote) -> None:
        with self._lock:
            self._entries[symbol] = CacheEntry(quote=quote, stored_at=self._clock())

    def invalidate(self, symbol: str) -> None:
        with self._lock:
            self._entries.pop(symbol, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, symbol: str) -> bool:
        return self.get(symbol) is not None

    def __len__(self) -> int:
        # Counts stored entries, including expired ones not yet evicted
        with self._lock:
            return len(self._entries)


# Set while a portfolio refresh is running
refresh_in_progress = threading.Event()

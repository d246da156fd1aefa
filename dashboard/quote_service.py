"""
Cached, fallback-guarded quote retrieval.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List

from .cache import QuoteCache
from .constants import DEFAULT_MAX_PARALLEL_REQUESTS, DEFAULT_REQUEST_DELAY
from .error_handler import ErrorHandler
from .logging_config import logger
from .models import Quote
from .utils import normalize_symbols


class QuoteService:
    """Serves quotes from the cache, fetching misses from a quote source.

    Upstream failures never propagate: a symbol whose fetch fails gets
    ``Quote.fallback``. Only quotes with a positive price are cached, so a
    fallback or a partial quote that lost its price is asked for again on
    the next poll.
    """

    def __init__(self, source, cache: QuoteCache,
                 max_parallel_requests: int = DEFAULT_MAX_PARALLEL_REQUESTS,
                 request_delay: float = DEFAULT_REQUEST_DELAY,
                 sleep: Callable[[float], None] = time.sleep):
        self.source = source
        self.cache = cache
        self.max_parallel_requests = max(1, max_parallel_requests)
        self.request_delay = request_delay
        self._sleep = sleep

    def _fetch(self, symbol: str) -> Quote:
        try:
            quote = self.source.fetch_quote(symbol)
        except Exception as e:
            wrapped_error = ErrorHandler.wrap_external_api_error(e, type(self.source).__name__)
            ErrorHandler.log_error(wrapped_error, context=f"quote {symbol}")
            logger.info("Using fallback quote for %s", symbol)
            return Quote.fallback(symbol)

        if quote.cmp > 0:
            self.cache.set(symbol, quote)
        else:
            logger.info("Not caching %s quote for %s without a price", quote.source, symbol)
        return quote

    def get_quote(self, symbol: str) -> Quote:
        """Return a fresh cached quote or fetch one."""
        cached = self.cache.get(symbol)
        if cached is not None:
            return cached
        return self._fetch(symbol)

    def get_quotes(self, symbols: Iterable[str]) -> List[Quote]:
        """Return quotes for *symbols* in input order.

        Cache misses are fetched concurrently in batches of
        ``max_parallel_requests``, pausing ``request_delay`` between batches.
        """
        symbols = normalize_symbols(symbols)
        results: Dict[str, Quote] = {}
        pending = []

        for symbol in symbols:
            cached = self.cache.get(symbol)
            if cached is not None:
                results[symbol] = cached
            else:
                pending.append(symbol)

        if pending:
            logger.info("Fetching %d quote(s), %d served from cache",
                        len(pending), len(results))

        batch_size = self.max_parallel_requests
        with ThreadPoolExecutor(max_workers=batch_size) as executor:
            for start in range(0, len(pending), batch_size):
                if start and self.request_delay:
                    self._sleep(self.request_delay)
                batch = pending[start:start + batch_size]
                for symbol, quote in zip(batch, executor.map(self._fetch, batch)):
                    results[symbol] = quote

        return [results[symbol] for symbol in symbols]

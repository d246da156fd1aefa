"""
Quote sources: the live upstream pair and a static mock table.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Tuple

from ..constants import NOT_AVAILABLE, SOURCE_LIVE, SOURCE_MOCK, SOURCE_PARTIAL
from ..error_handler import DataError, ErrorHandler
from ..models import Quote
from .google_finance_client import GoogleFinanceClient
from .yahoo_client import YahooFinanceClient

# symbol -> (cmp, pe_ratio, latest_earnings)
MOCK_QUOTES: Dict[str, Tuple[float, str, str]] = {
    'RELIANCE.NS': (2512.40, '24.18', 'Q3 2025'),
    'TCS.NS': (3418.75, '27.63', 'Q3 2025'),
    'HDFCBANK.NS': (1702.10, '19.45', 'Q3 2025'),
    'INFY.NS': (1539.55, '23.91', 'Q3 2025'),
    'ICICIBANK.NS': (1248.30, '18.72', 'Q3 2025'),
    'BHARTIARTL.NS': (1611.05, '71.34', 'Q3 2025'),
    'ITC.NS': (408.65, '25.12', 'Q3 2025'),
    'LT.NS': (3597.20, '33.86', 'Q3 2025'),
}


class LiveQuoteSource:
    """Combines the Yahoo price with Google fundamentals for one symbol."""

    def __init__(self, price_client: YahooFinanceClient,
                 fundamentals_client: GoogleFinanceClient):
        self.price_client = price_client
        self.fundamentals_client = fundamentals_client

    def fetch_quote(self, symbol: str) -> Quote:
        """Fetch both halves of the quote in parallel.

        If one side fails its fields take their defaults and the quote is
        marked partial; if both fail the price error is raised.
        """
        with ThreadPoolExecutor(max_workers=2) as executor:
            price_future = executor.submit(self.price_client.fetch_price, symbol)
            fundamentals_future = executor.submit(self.fundamentals_client.fetch_fundamentals, symbol)

            price_error = fundamentals_error = None
            cmp = 0
            pe_ratio = latest_earnings = NOT_AVAILABLE

            try:
                cmp = price_future.result()
            except Exception as e:
                price_error = e
            try:
                pe_ratio, latest_earnings = fundamentals_future.result()
            except Exception as e:
                fundamentals_error = e

        if price_error and fundamentals_error:
            raise price_error

        for error, service in ((price_error, YahooFinanceClient.SERVICE_NAME),
                               (fundamentals_error, GoogleFinanceClient.SERVICE_NAME)):
            if error:
                ErrorHandler.log_error(
                    ErrorHandler.wrap_external_api_error(error, service),
                    context=f"fetch_quote {symbol}",
                )

        partial = price_error is not None or fundamentals_error is not None
        return Quote(
            symbol=symbol,
            cmp=cmp,
            pe_ratio=pe_ratio,
            latest_earnings=latest_earnings,
            source=SOURCE_PARTIAL if partial else SOURCE_LIVE,
        )


class MockQuoteSource:
    """Serves quotes from a static table, for offline use and demos."""

    def __init__(self, quotes: Dict[str, Tuple[float, str, str]] = None):
        self.quotes = MOCK_QUOTES if quotes is None else quotes

    def fetch_quote(self, symbol: str) -> Quote:
        try:
            cmp, pe_ratio, latest_earnings = self.quotes[symbol]
        except KeyError:
            raise DataError(f"No mock quote for {symbol}")
        return Quote(
            symbol=symbol,
            cmp=cmp,
            pe_ratio=pe_ratio,
            latest_earnings=latest_earnings,
            source=SOURCE_MOCK,
        )

"""API module for external market data integrations."""
from .google_finance_client import GoogleFinanceClient
from .quote_sources import LiveQuoteSource, MockQuoteSource
from .yahoo_client import YahooFinanceClient

__all__ = [
    'GoogleFinanceClient',
    'LiveQuoteSource',
    'MockQuoteSource',
    'YahooFinanceClient'
]

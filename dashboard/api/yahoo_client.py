"""
Yahoo Finance client for current market prices.
"""
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup

from ..constants import (BROWSER_USER_AGENT, DEFAULT_REQUEST_TIMEOUT,
                         YAHOO_CHART_URL, YAHOO_QUOTE_URL)
from ..error_handler import APIError, DashboardError, DataError, ErrorHandler
from ..logging_config import logger


def parse_price_text(text: Optional[str]) -> Optional[float]:
    """Parse a displayed price such as ``"2,512.35"``; None if not numeric."""
    if not text:
        return None
    try:
        return float(text.strip().replace(',', ''))
    except ValueError:
        return None


class YahooFinanceClient:
    """Fetches the current market price (CMP) of a symbol from Yahoo Finance."""

    SERVICE_NAME = "Yahoo Finance"

    def __init__(self, timeout: float = DEFAULT_REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.chart_url = YAHOO_CHART_URL
        self.quote_url = YAHOO_QUOTE_URL
        self.headers = {
            'User-Agent': BROWSER_USER_AGENT,
            'Accept': 'application/json,text/html;q=0.9',
            'Accept-Language': 'en-US,en;q=0.9'
        }
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_price(self, symbol: str) -> float:
        """Fetch the regular market price for *symbol*.

        Tries the chart JSON endpoint first and scrapes the quote page when
        the JSON carries no price.

        Raises:
            DashboardError: NetworkError/APIError on transport failures,
                DataError when no price could be found.
        """
        try:
            price = self._fetch_chart_price(symbol)
            if price is None:
                logger.debug("No chart price for %s, scraping quote page", symbol)
                price = self._scrape_quote_page(symbol)
        except DashboardError:
            raise
        except Exception as e:
            raise ErrorHandler.wrap_external_api_error(e, self.SERVICE_NAME) from e

        if price is None:
            raise DataError(f"{self.SERVICE_NAME} returned no price for {symbol}")
        return price

    def _get(self, url: str, **kwargs) -> requests.Response:
        response = self.session.get(url, headers=self.headers, timeout=self.timeout, **kwargs)
        if response.status_code != 200:
            raise APIError(
                f"{self.SERVICE_NAME} returned HTTP {response.status_code} for {url}",
                status_code=response.status_code,
            )
        return response

    def _fetch_chart_price(self, symbol: str) -> Optional[float]:
        url = f"{self.chart_url}/{quote(symbol)}"
        response = self._get(url, params={'interval': '1d', 'range': '1d'})
        try:
            payload = response.json()
        except ValueError:
            return None
        return self._extract_chart_price(payload)

    @staticmethod
    def _extract_chart_price(payload: Dict[str, Any]) -> Optional[float]:
        chart_result = (payload or {}).get('chart', {}).get('result') or []
        if not chart_result:
            return None
        meta = chart_result[0].get('meta', {})
        price = meta.get('regularMarketPrice')
        if isinstance(price, (int, float)) and price > 0:
            return round(float(price), 2)
        return None

    def _scrape_quote_page(self, symbol: str) -> Optional[float]:
        response = self._get(f"{self.quote_url}/{quote(symbol)}")
        soup = BeautifulSoup(response.content, 'html.parser')

        # Price is rendered in a fin-streamer element keyed by data-field
        element = soup.find('fin-streamer', attrs={'data-field': 'regularMarketPrice'})
        if not element:
            return None
        return parse_price_text(element.get('data-value') or element.get_text(strip=True))

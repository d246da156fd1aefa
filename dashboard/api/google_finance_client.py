"""
Google Finance scraper for valuation fundamentals (P/E ratio, latest earnings).
"""

import re
from typing import Optional, Tuple

import requests
from bs4 import BeautifulSoup

from ..constants import (BROWSER_USER_AGENT, DEFAULT_REQUEST_TIMEOUT,
                         GOOGLE_DEFAULT_EXCHANGE, GOOGLE_EXCHANGE_SUFFIXES,
                         GOOGLE_FINANCE_QUOTE_URL, NOT_AVAILABLE)
from ..error_handler import APIError, DashboardError, ErrorHandler
from ..logging_config import logger

PE_RATIO_LABELS = {'p/e ratio', 'pe ratio'}
_MISSING_VALUES = {'', '-', '\u2014'}
_MONTHS = ['jan', 'feb', 'mar', 'apr', 'may', 'jun',
           'jul', 'aug', 'sep', 'oct', 'nov', 'dec']
_PERIOD_RE = re.compile(r'^([A-Za-z]{3})[a-z]*\.?\s+(\d{4})$')


def to_google_symbol(symbol: str) -> str:
    """Map a Yahoo-style ticker (``TCS.NS``) to Google's ``TCS:NSE`` form."""
    upper = symbol.upper()
    for suffix, exchange in GOOGLE_EXCHANGE_SUFFIXES.items():
        if upper.endswith(suffix):
            return f"{upper[:-len(suffix)]}:{exchange}"
    if ':' in upper:
        return upper
    return f"{upper}:{GOOGLE_DEFAULT_EXCHANGE}"


def period_to_quarter(period: str) -> Optional[str]:
    """Turn a financials column header like ``Sep 2025`` into ``Q3 2025``."""
    match = _PERIOD_RE.match(period.strip())
    if not match:
        return None
    month = match.group(1).lower()
    if month not in _MONTHS:
        return None
    quarter = _MONTHS.index(month) // 3 + 1
    return f"Q{quarter} {match.group(2)}"


class GoogleFinanceClient:
    """Scrapes the Google Finance quote page of a symbol."""

    SERVICE_NAME = "Google Finance"

    def __init__(self, timeout: float = DEFAULT_REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = GOOGLE_FINANCE_QUOTE_URL
        self.headers = {
            'User-Agent': BROWSER_USER_AGENT,
            'Accept-Language': 'en-US,en;q=0.9'
        }
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_fundamentals(self, symbol: str) -> Tuple[str, str]:
        """Fetch ``(pe_ratio, latest_earnings)`` for *symbol*.

        Fields missing from the page come back as ``"N/A"``.

        Raises:
            DashboardError: when the page itself could not be fetched.
        """
        url = f"{self.base_url}/{to_google_symbol(symbol)}"
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except Exception as e:
            raise ErrorHandler.wrap_external_api_error(e, self.SERVICE_NAME) from e

        if response.status_code != 200:
            raise APIError(
                f"{self.SERVICE_NAME} returned HTTP {response.status_code} for {symbol}",
                status_code=response.status_code,
            )

        try:
            return self.parse_fundamentals(response.content)
        except DashboardError:
            raise
        except Exception as e:
            raise ErrorHandler.wrap_external_api_error(e, self.SERVICE_NAME) from e

    @classmethod
    def parse_fundamentals(cls, html) -> Tuple[str, str]:
        soup = BeautifulSoup(html, 'html.parser')
        pe_ratio = cls._find_pe_ratio(soup) or NOT_AVAILABLE
        latest_earnings = cls._find_latest_earnings(soup) or NOT_AVAILABLE
        if pe_ratio == NOT_AVAILABLE:
            logger.debug("P/E ratio not found on %s page", cls.SERVICE_NAME)
        return pe_ratio, latest_earnings

    @staticmethod
    def _find_pe_ratio(soup: BeautifulSoup) -> Optional[str]:
        # Key stats: one div.gyFHrc row per stat, label in .mfs7Fc, value in .P6K39c
        for row in soup.select('div.gyFHrc'):
            label = row.select_one('.mfs7Fc')
            value = row.select_one('.P6K39c')
            if not label or not value:
                continue
            if label.get_text(strip=True).lower() in PE_RATIO_LABELS:
                text = value.get_text(strip=True)
                return None if text in _MISSING_VALUES else text.replace(',', '')
        return None

    @staticmethod
    def _find_latest_earnings(soup: BeautifulSoup) -> Optional[str]:
        # Quarterly financials table: the first dated column is the latest report
        tables = soup.select('table.slpEwd') or soup.find_all('table')
        for table in tables:
            for header in table.find_all('th'):
                quarter = period_to_quarter(header.get_text(strip=True))
                if quarter:
                    return quarter
        return None

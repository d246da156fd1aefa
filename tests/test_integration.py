"""
Integration tests for the portfolio dashboard
"""
import unittest
from unittest.mock import patch

from dashboard.api import MockQuoteSource
from dashboard.cache import QuoteCache
from dashboard.calculations import build_initial_rows, build_snapshot
from dashboard.fetchers import refresh_portfolio
from dashboard.holdings import PORTFOLIO_HOLDINGS
from dashboard.quote_service import QuoteService
from dashboard.routes import app_ui
from dashboard.state import SnapshotStore, StateManager


class FailingSource:
    def fetch_quote(self, symbol):
        raise ConnectionError("upstream unreachable")


class TestRefreshToHttp(unittest.TestCase):
    """Refresh the portfolio from the mock source and read it back over HTTP."""

    def setUp(self):
        self.store = SnapshotStore(build_snapshot(build_initial_rows(PORTFOLIO_HOLDINGS)))
        self.state = StateManager()
        self.service = QuoteService(MockQuoteSource(), QuoteCache(ttl=60), sleep=lambda _: None)

        patchers = [
            patch('dashboard.fetchers.snapshot_store', self.store),
            patch('dashboard.routes.snapshot_store', self.store),
            patch('dashboard.fetchers.state_manager', self.state),
            patch('dashboard.fetchers.quote_service', self.service),
            patch('dashboard.routes.quote_service', self.service),
            patch('dashboard.fetchers.broadcast_snapshot'),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

        app_ui.testing = True
        self.client = app_ui.test_client()

    def test_refresh_then_portfolio_json(self):
        self.assertTrue(refresh_portfolio())

        data = self.client.get('/api/portfolio').get_json()
        self.assertTrue(data['isLive'])
        self.assertEqual(self.state.state, 'updated')

        stocks = {stock['symbol']: stock for sector in data['sectors'] for stock in sector['stocks']}
        reliance = stocks['RELIANCE.NS']
        self.assertEqual(reliance['cmp'], 2512.40)
        self.assertAlmostEqual(reliance['presentValue'], 25124.0)
        self.assertAlmostEqual(reliance['gainLoss'], 624.0)
        self.assertEqual(reliance['peRatio'], '24.18')

        total = sum(stock['portfolioPercent'] for stock in stocks.values())
        self.assertAlmostEqual(total, 100.0)

    def test_second_request_served_from_cache(self):
        refresh_portfolio()
        self.assertEqual(len(self.service.cache), len(PORTFOLIO_HOLDINGS))

        response = self.client.get('/api/stocks?symbols=TCS.NS,UNKNOWN.NS')

        self.assertEqual(response.status_code, 200)
        data = response.get_json()['data']
        self.assertEqual(data[0]['cmp'], 3418.75)
        self.assertEqual(data[1], {
            'symbol': 'UNKNOWN.NS', 'cmp': 0, 'peRatio': 'N/A', 'latestEarnings': 'N/A',
        })
        self.assertNotIn('UNKNOWN.NS', self.service.cache)

    def test_upstream_outage_renders_purchase_prices(self):
        self.service.source = FailingSource()

        self.assertTrue(refresh_portfolio())

        html = self.client.get('/portfolio_table').get_data(as_text=True)
        self.assertIn('Reliance Industries', html)
        data = self.client.get('/api/portfolio').get_json()
        for sector in data['sectors']:
            for stock in sector['stocks']:
                self.assertEqual(stock['cmp'], stock['purchasePrice'])
                self.assertEqual(stock['gainLoss'], 0)


if __name__ == '__main__':
    unittest.main()

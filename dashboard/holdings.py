"""Hardcoded portfolio holdings."""

from typing import Iterable, List, Tuple

from .models import Holding

PORTFOLIO_HOLDINGS: Tuple[Holding, ...] = (
    Holding(
        name='Reliance Industries',
        purchase_price=2450.00,
        quantity=10,
        exchange='NSE',
        sector='Energy',
        symbol='RELIANCE.NS',
    ),
    Holding(
        name='Tata Consultancy Services',
        purchase_price=3520.00,
        quantity=8,
        exchange='NSE',
        sector='Technology',
        symbol='TCS.NS',
    ),
    Holding(
        name='HDFC Bank',
        purchase_price=1650.00,
        quantity=15,
        exchange='NSE',
        sector='Financials',
        symbol='HDFCBANK.NS',
    ),
    Holding(
        name='Infosys',
        purchase_price=1480.00,
        quantity=12,
        exchange='NSE',
        sector='Technology',
        symbol='INFY.NS',
    ),
    Holding(
        name='ICICI Bank',
        purchase_price=920.00,
        quantity=20,
        exchange='NSE',
        sector='Financials',
        symbol='ICICIBANK.NS',
    ),
    Holding(
        name='Bharti Airtel',
        purchase_price=850.00,
        quantity=18,
        exchange='NSE',
        sector='Telecom',
        symbol='BHARTIARTL.NS',
    ),
    Holding(
        name='ITC Limited',
        purchase_price=420.00,
        quantity=25,
        exchange='NSE',
        sector='FMCG',
        symbol='ITC.NS',
    ),
    Holding(
        name='Larsen & Toubro',
        purchase_price=3100.00,
        quantity=7,
        exchange='NSE',
        sector='Infrastructure',
        symbol='LT.NS',
    ),
)


def portfolio_symbols(holdings: Iterable[Holding] = PORTFOLIO_HOLDINGS) -> List[str]:
    """Return the quote symbols of *holdings* in portfolio order."""
    return [holding.symbol for holding in holdings]

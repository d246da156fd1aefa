"""
Position arithmetic and sector rollups.
"""

from typing import Dict, Iterable, List, Mapping, Optional

from .constants import LOADING_PLACEHOLDER, NOT_AVAILABLE
from .models import (Holding, PortfolioRow, PortfolioSnapshot,
                     PortfolioSummary, Quote, SectorSummary)


def calculate_investment(purchase_price: float, quantity: float) -> float:
    return purchase_price * quantity


def calculate_present_value(cmp: float, quantity: float) -> float:
    return cmp * quantity


def calculate_gain_loss(present_value: float, investment: float) -> float:
    return present_value - investment


def calculate_gain_loss_percent(gain_loss: float, investment: float) -> float:
    """Gain/loss as a percentage of the amount invested (0 for no investment)."""
    if not investment:
        return 0.0
    return (gain_loss / investment) * 100


def calculate_portfolio_percent(investment: float, total_investment: float) -> float:
    """Share of the total portfolio investment held in one position."""
    if total_investment <= 0:
        return 0.0
    return (investment / total_investment) * 100


def get_total_investment(holdings: Iterable[Holding]) -> float:
    return sum(
        calculate_investment(holding.purchase_price, holding.quantity)
        for holding in holdings
    )


def _build_row(holding: Holding, cmp: float, total_investment: float,
               pe_ratio: str, latest_earnings: str) -> PortfolioRow:
    investment = calculate_investment(holding.purchase_price, holding.quantity)
    present_value = calculate_present_value(cmp, holding.quantity)
    gain_loss = calculate_gain_loss(present_value, investment)

    return PortfolioRow(
        holding=holding,
        cmp=cmp,
        investment=investment,
        present_value=present_value,
        gain_loss=gain_loss,
        gain_loss_percent=calculate_gain_loss_percent(gain_loss, investment),
        portfolio_percent=calculate_portfolio_percent(investment, total_investment),
        pe_ratio=pe_ratio,
        latest_earnings=latest_earnings,
    )


def build_rows(holdings: Iterable[Holding], quotes: Mapping[str, Quote]) -> List[PortfolioRow]:
    """Merge each holding with its quote and compute the derived values.

    A missing quote, or one without a positive price, values the position
    at its purchase price so an upstream outage never shows a total loss.

    Args:
        holdings: Portfolio holdings.
        quotes: Quotes keyed by symbol.

    Returns:
        One row per holding, in holding order.
    """
    holdings = list(holdings)
    total_investment = get_total_investment(holdings)

    rows = []
    for holding in holdings:
        quote: Optional[Quote] = quotes.get(holding.symbol)
        cmp = quote.cmp if quote and quote.cmp and quote.cmp > 0 else holding.purchase_price
        rows.append(_build_row(
            holding,
            cmp,
            total_investment,
            pe_ratio=(quote.pe_ratio if quote else None) or NOT_AVAILABLE,
            latest_earnings=(quote.latest_earnings if quote else None) or NOT_AVAILABLE,
        ))
    return rows


def build_initial_rows(holdings: Iterable[Holding]) -> List[PortfolioRow]:
    """Rows for the first render, before any quote has arrived."""
    holdings = list(holdings)
    total_investment = get_total_investment(holdings)
    return [
        _build_row(holding, holding.purchase_price, total_investment,
                   pe_ratio=LOADING_PLACEHOLDER, latest_earnings=LOADING_PLACEHOLDER)
        for holding in holdings
    ]


def group_by_sector(rows: Iterable[PortfolioRow]) -> List[SectorSummary]:
    """Group rows by sector, in the order each sector first appears."""
    groups: Dict[str, List[PortfolioRow]] = {}
    for row in rows:
        groups.setdefault(row.holding.sector, []).append(row)

    return [
        SectorSummary(
            sector_name=sector_name,
            total_investment=sum(row.investment for row in sector_rows),
            total_present_value=sum(row.present_value for row in sector_rows),
            total_gain_loss=sum(row.gain_loss for row in sector_rows),
            rows=sector_rows,
        )
        for sector_name, sector_rows in groups.items()
    ]


def summarize_portfolio(rows: Iterable[PortfolioRow]) -> PortfolioSummary:
    rows = list(rows)
    total_investment = sum(row.investment for row in rows)
    total_gain_loss = sum(row.gain_loss for row in rows)

    return PortfolioSummary(
        total_investment=total_investment,
        total_present_value=sum(row.present_value for row in rows),
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=calculate_gain_loss_percent(total_gain_loss, total_investment),
    )


def build_snapshot(rows: List[PortfolioRow], last_updated: Optional[float] = None,
                   is_live: bool = False) -> PortfolioSnapshot:
    """Assemble the sector groups and summary for a set of rows."""
    return PortfolioSnapshot(
        rows=rows,
        sectors=group_by_sector(rows),
        summary=summarize_portfolio(rows),
        last_updated=last_updated,
        is_live=is_live,
    )

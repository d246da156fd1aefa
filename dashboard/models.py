"""
Portfolio data structures: static holdings, transient quotes, and derived rows.

Every model exposes ``to_dict()`` returning the camelCase JSON shape the
dashboard page consumes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import NOT_AVAILABLE, SOURCE_FALLBACK, SOURCE_LIVE


@dataclass(frozen=True)
class Holding:
    """A position in the hardcoded portfolio."""
    name: str
    purchase_price: float
    quantity: int
    exchange: str
    sector: str
    symbol: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'purchasePrice': self.purchase_price,
            'quantity': self.quantity,
            'exchange': self.exchange,
            'sector': self.sector,
            'symbol': self.symbol,
        }


@dataclass(frozen=True)
class Quote:
    """Market data for one symbol as returned by a quote source."""
    symbol: str
    cmp: float
    pe_ratio: str = NOT_AVAILABLE
    latest_earnings: str = NOT_AVAILABLE
    source: str = SOURCE_LIVE

    @classmethod
    def fallback(cls, symbol: str) -> 'Quote':
        """Default quote substituted when the upstream fetch fails."""
        return cls(
            symbol=symbol,
            cmp=0,
            pe_ratio=NOT_AVAILABLE,
            latest_earnings=NOT_AVAILABLE,
            source=SOURCE_FALLBACK,
        )

    @property
    def is_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK

    def to_dict(self) -> Dict[str, Any]:
        return {
            'symbol': self.symbol,
            'cmp': self.cmp,
            'peRatio': self.pe_ratio,
            'latestEarnings': self.latest_earnings,
        }


@dataclass(frozen=True)
class PortfolioRow:
    """A holding merged with its quote and the computed position values."""
    holding: Holding
    cmp: float
    investment: float
    present_value: float
    gain_loss: float
    gain_loss_percent: float
    portfolio_percent: float
    pe_ratio: str
    latest_earnings: str

    @property
    def is_profit(self) -> bool:
        return self.gain_loss >= 0

    def to_dict(self) -> Dict[str, Any]:
        data = self.holding.to_dict()
        data.update({
            'investment': self.investment,
            'portfolioPercent': self.portfolio_percent,
            'cmp': self.cmp,
            'presentValue': self.present_value,
            'gainLoss': self.gain_loss,
            'gainLossPercent': self.gain_loss_percent,
            'peRatio': self.pe_ratio,
            'latestEarnings': self.latest_earnings,
        })
        return data


@dataclass(frozen=True)
class SectorSummary:
    """Rollup of all rows that share a sector."""
    sector_name: str
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    rows: List[PortfolioRow] = field(default_factory=list)

    @property
    def is_profit(self) -> bool:
        return self.total_gain_loss >= 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sectorName': self.sector_name,
            'totalInvestment': self.total_investment,
            'totalPresentValue': self.total_present_value,
            'totalGainLoss': self.total_gain_loss,
            'stocks': [row.to_dict() for row in self.rows],
        }


@dataclass(frozen=True)
class PortfolioSummary:
    """Portfolio-wide totals shown in the summary header."""
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    total_gain_loss_percent: float

    @property
    def is_profit(self) -> bool:
        return self.total_gain_loss >= 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalInvestment': self.total_investment,
            'totalPresentValue': self.total_present_value,
            'totalGainLoss': self.total_gain_loss,
            'totalGainLossPercent': self.total_gain_loss_percent,
        }


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Everything one render of the dashboard needs."""
    rows: List[PortfolioRow]
    sectors: List[SectorSummary]
    summary: PortfolioSummary
    last_updated: Optional[float] = None
    is_live: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.summary.to_dict(),
            'sectors': [sector.to_dict() for sector in self.sectors],
            'lastUpdated': self.last_updated,
            'isLive': self.is_live,
        }

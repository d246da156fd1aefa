"""
Portfolio refresh pipeline and its periodic scheduler.

One refresh fetches quotes for every holding (cache first), merges them into
display rows, stores the resulting snapshot, and pushes it to SSE clients.
"""

import threading
import time
from typing import Iterable

from .cache import refresh_in_progress
from .calculations import build_rows, build_snapshot
from .constants import REFRESH_INTERVAL
from .holdings import PORTFOLIO_HOLDINGS, portfolio_symbols
from .logging_config import logger
from .models import Holding
from .scheduler import RefreshScheduler
from .services import (broadcast_snapshot, quote_service, snapshot_store,
                       state_manager)

REFRESH_FAILED_MESSAGE = "Failed to fetch stock data"

# Guards the check-and-set of refresh_in_progress
_refresh_lock = threading.Lock()


# --------------------------
# PORTFOLIO REFRESH
# --------------------------

def _claim_refresh() -> bool:
    """Mark a refresh as running; False if one already is."""
    with _refresh_lock:
        if refresh_in_progress.is_set():
            return False
        refresh_in_progress.set()
        return True


def refresh_portfolio(holdings: Iterable[Holding] = PORTFOLIO_HOLDINGS) -> bool:
    """Refresh quotes and rebuild the portfolio snapshot.

    If the whole batch fails the previous snapshot is preserved.

    Returns:
        True if a new snapshot was stored.
    """
    if not _claim_refresh():
        logger.info("Portfolio refresh already in progress, skipping")
        return False
    return _run_claimed_refresh(holdings)


def _run_claimed_refresh(holdings: Iterable[Holding] = PORTFOLIO_HOLDINGS) -> bool:
    """Run a refresh the caller has already claimed; releases the claim."""
    holdings = list(holdings)
    error_occurred = None

    try:
        state_manager.set_updating()
        quotes = quote_service.get_quotes(portfolio_symbols(holdings))
        rows = build_rows(holdings, {quote.symbol: quote for quote in quotes})
        snapshot_store.set(build_snapshot(rows, last_updated=time.time(), is_live=True))

        fallback_count = sum(1 for quote in quotes if quote.is_fallback)
        if fallback_count:
            logger.warning("Portfolio refreshed with %d fallback quote(s)", fallback_count)
        logger.info("Portfolio data updated: %d holdings", len(rows))
    except Exception as e:
        logger.exception("Error refreshing portfolio: %s", e)
        error_occurred = REFRESH_FAILED_MESSAGE
        logger.info("Preserved previous portfolio snapshot after refresh failure")
    finally:
        state_manager.set_updated(error=error_occurred)
        refresh_in_progress.clear()

    if error_occurred:
        return False
    broadcast_snapshot()
    return True


# --------------------------
# SCHEDULING
# --------------------------

refresh_scheduler = RefreshScheduler(refresh_portfolio, REFRESH_INTERVAL, name="PortfolioRefresh")


def request_refresh() -> bool:
    """Ask for an immediate refresh outside the regular cadence.

    Returns:
        False if a refresh is already running.
    """
    if refresh_scheduler.is_running:
        with _refresh_lock:
            if refresh_in_progress.is_set():
                return False
            refresh_scheduler.trigger()
        return True

    if not _claim_refresh():
        return False
    threading.Thread(target=_run_claimed_refresh, name="ManualRefresh", daemon=True).start()
    return True

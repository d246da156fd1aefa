"""
Display formatting helpers, registered as Jinja filters.
"""

import time
from typing import Optional

from .constants import CLOCK_FORMAT

CURRENCY_SYMBOL = "₹"


def format_inr(value: float) -> str:
    """``1234.5`` -> ``₹1,234.50``; negatives keep the sign in front."""
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.2f}"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def gain_loss_class(value: float) -> str:
    """CSS class for a gain/loss figure; zero counts as profit."""
    return "profit" if value >= 0 else "loss"


def format_clock_time(ts: Optional[float]) -> str:
    if ts is None:
        return "-"
    return time.strftime(CLOCK_FORMAT, time.localtime(ts))


def register_filters(app) -> None:
    """Install the formatting helpers on a Flask app's Jinja environment."""
    app.jinja_env.filters['inr'] = format_inr
    app.jinja_env.filters['percent'] = format_percent
    app.jinja_env.filters['gain_loss_class'] = gain_loss_class
    app.jinja_env.filters['clock_time'] = format_clock_time

"""
Analytics module for the portfolio dashboard.

Provides gainer/loser ranking, gain/loss breakdowns and 52-week range
positioning for aggregated portfolios.
"""

from portfolio_dash.analytics.performance import (
    get_gainers_and_losers,
    summarize_gain_loss,
    calculate_52_week_position,
    largest_sector,
)

__all__ = [
    "get_gainers_and_losers",
    "summarize_gain_loss",
    "calculate_52_week_position",
    "largest_sector",
]

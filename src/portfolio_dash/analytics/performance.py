"""
Performance analytics for an aggregated portfolio.

Provides top gainers/losers, a gain/loss breakdown and 52-week range
positioning on top of the rows produced by the aggregator.
"""

from decimal import Decimal
from typing import Optional

from portfolio_dash.models import (
    Portfolio,
    PortfolioRow,
    SectorSummary,
    Stock,
    percent_of,
)


def get_gainers_and_losers(
    rows: list[PortfolioRow],
    top_n: int = 5,
) -> tuple[list[PortfolioRow], list[PortfolioRow]]:
    """
    Get top gainers and losers by gain/loss percentage.

    Only rows with a positive percentage count as gainers and only rows
    with a negative percentage count as losers.

    Args:
        rows: Portfolio rows
        top_n: Number of rows to return on each side

    Returns:
        Tuple of (top_gainers best first, top_losers worst first)
    """
    sorted_by_pct = sorted(
        rows,
        key=lambda r: r.gain_loss_percent,
        reverse=True,
    )

    top_gainers = [r for r in sorted_by_pct if r.gain_loss_percent > Decimal("0")][:top_n]
    top_losers = [r for r in reversed(sorted_by_pct) if r.gain_loss_percent < Decimal("0")][:top_n]

    return top_gainers, top_losers


def summarize_gain_loss(portfolio: Portfolio) -> dict:
    """
    Break down portfolio gain/loss into gains and losses.

    Args:
        portfolio: Aggregated portfolio

    Returns:
        Dictionary with:
        - total_gain: Sum of positive row gains
        - total_loss: Sum of negative row gains (negative)
        - net_gain_loss: total_gain + total_loss
        - winners / losers / flat: Row counts by sign of gain_loss
        - return_pct: Portfolio gain/loss percentage
    """
    total_gain = Decimal("0")
    total_loss = Decimal("0")
    winners = 0
    losers = 0
    flat = 0

    for row in portfolio.rows:
        if row.gain_loss > Decimal("0"):
            total_gain += row.gain_loss
            winners += 1
        elif row.gain_loss < Decimal("0"):
            total_loss += row.gain_loss
            losers += 1
        else:
            flat += 1

    return {
        "total_gain": total_gain,
        "total_loss": total_loss,
        "net_gain_loss": total_gain + total_loss,
        "winners": winners,
        "losers": losers,
        "flat": flat,
        "return_pct": portfolio.total_gain_loss_percent,
    }


def calculate_52_week_position(stock: Stock) -> Optional[Decimal]:
    """
    Locate the current price within the 52-week range.

    0 means the price is at the 52-week low and 100 at the 52-week high;
    prices outside the range give values below 0 or above 100.

    Args:
        stock: Stock snapshot

    Returns:
        Position in percent, or None if the range is missing or empty
    """
    high = stock.high_52_week
    low = stock.low_52_week

    if high is None or low is None:
        return None

    if not (high.is_finite() and low.is_finite()) or high <= low:
        return None

    return percent_of(stock.cmp - low, high - low)


def largest_sector(portfolio: Portfolio) -> Optional[SectorSummary]:
    """Get the sector with the largest present value, if any."""
    if not portfolio.sector_summaries:
        return None
    return portfolio.sector_summaries[0]

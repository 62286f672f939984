"""
Portfolio aggregation module for the portfolio dashboard.

Provides the aggregation engine that derives rows, sector summaries
and totals from raw holdings.
"""

from portfolio_dash.portfolio.aggregator import (
    aggregate,
    AggregationError,
    InvalidQuantityError,
    InvalidPurchasePriceError,
    InvalidMarketPriceError,
)
from portfolio_dash.portfolio.holdings import (
    group_rows_by_sector,
    get_distinct_symbols,
    calculate_average_pe_ratio,
)

__all__ = [
    "aggregate",
    "AggregationError",
    "InvalidQuantityError",
    "InvalidPurchasePriceError",
    "InvalidMarketPriceError",
    "group_rows_by_sector",
    "get_distinct_symbols",
    "calculate_average_pe_ratio",
]

"""
Reporting module for the portfolio dashboard.

Provides DataFrame views and text summaries of aggregated portfolios.
"""

from portfolio_dash.reports.tables import (
    rows_to_frame,
    sectors_to_frame,
    format_portfolio_summary,
)

__all__ = [
    "rows_to_frame",
    "sectors_to_frame",
    "format_portfolio_summary",
]

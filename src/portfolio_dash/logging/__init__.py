"""
Decision logging module for the portfolio dashboard.

Provides append-only decision logging for audit and reproducibility.
"""

from portfolio_dash.logging.decision_log import (
    DecisionLogger,
    get_logger,
)

__all__ = [
    "DecisionLogger",
    "get_logger",
]

"""
Investment Portfolio Dashboard (portfolio-dash)

Aggregation engine for an investment portfolio dashboard. Takes stock
holdings with purchase data and current market prices and derives
per-position gains and losses, per-sector summaries and portfolio totals
for display.
"""

__version__ = "0.1.0"
__author__ = "Portfolio Dashboard Team"

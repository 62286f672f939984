"""
Data module for the portfolio dashboard.

Provides record parsing for holdings and market-data snapshots, and the
open sector taxonomy used for grouping.
"""

from portfolio_dash.data.loaders import (
    DataLoadError,
    parse_stock,
    parse_holding,
    parse_holdings,
    load_holdings_document,
)
from portfolio_dash.data.schemas import (
    STOCK_SCHEMA,
    HOLDING_SCHEMA,
)
from portfolio_dash.data.sectors import (
    SectorTaxonomy,
    FALLBACK_SECTOR,
    DEFAULT_SECTORS,
    DEFAULT_EXCHANGES,
)

__all__ = [
    "DataLoadError",
    "parse_stock",
    "parse_holding",
    "parse_holdings",
    "load_holdings_document",
    "STOCK_SCHEMA",
    "HOLDING_SCHEMA",
    "SectorTaxonomy",
    "FALLBACK_SECTOR",
    "DEFAULT_SECTORS",
    "DEFAULT_EXCHANGES",
]

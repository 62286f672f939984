"""
Pytest fixtures for the portfolio dashboard tests.

Provides common test data and utilities used across test modules.
"""

import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

import pytest

from portfolio_dash.models import Holding, Stock


def build_holding(
    symbol: str,
    sector: Optional[str],
    cmp: str,
    purchase_price: str,
    quantity: str,
    pe_ratio: Optional[str] = "20",
    average_price: Optional[str] = None,
) -> Holding:
    """Build a Holding from string amounts."""
    stock = Stock(
        symbol=symbol,
        company_name=f"{symbol} Corp",
        exchange="NYSE",
        sector=sector,
        cmp=Decimal(cmp),
        pe_ratio=Decimal(pe_ratio) if pe_ratio is not None else None,
        earnings=Decimal("5"),
    )
    return Holding(
        stock=stock,
        purchase_price=Decimal(purchase_price),
        quantity=Decimal(quantity),
        average_price=Decimal(average_price) if average_price is not None else None,
    )


@pytest.fixture
def make_holding():
    """
    Factory fixture for creating holdings.

    Usage:
        def test_something(make_holding):
            holding = make_holding("AAPL", "Technology", "150", "100", "10")
    """
    return build_holding


@pytest.fixture
def sample_holdings() -> list[Holding]:
    """
    Create a sample batch of holdings across four sectors.

    Totals: investment 5650, present value 5650, gain/loss 0.
    Sector present values: Technology 3450, Finance 1400,
    Healthcare 800, Other 0.
    """
    return [
        build_holding("AAPL", "Technology", "150", "100", "10", pe_ratio="28"),   # +500
        build_holding("MSFT", "Technology", "300", "250", "4", pe_ratio="35"),    # +200
        build_holding("JNJ", "Healthcare", "160", "170", "5", pe_ratio="15"),     # -50
        build_holding("JPM", "Finance", "140", "120", "10", pe_ratio="12"),       # +200
        build_holding("AAPL", "Technology", "150", "120", "5", pe_ratio="28"),    # +150
        build_holding("XYZ", None, "0", "20", "50", pe_ratio=None),               # -1000
    ]


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed aggregation timestamp."""
    return datetime(2024, 6, 14, 16, 0, 0)


@pytest.fixture
def sample_feed_records() -> list[dict]:
    """Holding records in the market-data feed shape."""
    return [
        {
            "symbol": "aapl",
            "companyName": "Apple Inc.",
            "exchange": "NASDAQ",
            "sector": "Technology",
            "industry": "Consumer Electronics",
            "currentPrice": 150.25,
            "peRatio": 28.4,
            "earnings": 6.13,
            "marketCap": 2900000000000,
            "high52Week": 199.62,
            "low52Week": 124.17,
            "purchasePrice": 100,
            "quantity": 10,
            "purchaseDate": "2023-03-15",
            "lastUpdated": "2024-06-14T16:00:00",
        },
        {
            "stock": {
                "symbol": "INFY",
                "companyName": "Infosys Ltd",
                "exchange": "NSE",
                "sector": "Technology",
                "cmp": 1450,
                "peRatio": 24,
                "earnings": 58.4,
            },
            "purchasePrice": 1500,
            "quantity": 2.5,
            "averagePrice": 1480,
        },
    ]


@pytest.fixture
def temp_output_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)

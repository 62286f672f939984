"""
Tests for portfolio table views.
"""

from datetime import datetime

import pandas as pd
import pytest

from portfolio_dash.models import Holding
from portfolio_dash.portfolio.aggregator import aggregate
from portfolio_dash.reports.tables import (
    ROW_COLUMNS,
    SECTOR_COLUMNS,
    format_portfolio_summary,
    rows_to_frame,
    sectors_to_frame,
)


class TestRowsToFrame:
    """Tests for rows_to_frame."""

    def test_columns_and_order(self, sample_holdings: list[Holding]):
        df = rows_to_frame(aggregate(sample_holdings))

        assert list(df.columns) == ROW_COLUMNS
        assert df["symbol"].tolist() == ["AAPL", "MSFT", "JNJ", "JPM", "AAPL", "XYZ"]
        assert df.loc[0, "gain_loss_percent"] == pytest.approx(50.0)
        assert df["investment"].sum() == pytest.approx(5650.0)

    def test_empty(self):
        df = rows_to_frame(aggregate([]))

        assert df.empty
        assert list(df.columns) == ROW_COLUMNS


class TestSectorsToFrame:
    """Tests for sectors_to_frame."""

    def test_columns_and_order(self, sample_holdings: list[Holding]):
        df = sectors_to_frame(aggregate(sample_holdings))

        assert list(df.columns) == SECTOR_COLUMNS
        assert df["sector"].tolist() == ["Technology", "Finance", "Healthcare", "Other"]
        assert df["portfolio_weight"].sum() == pytest.approx(100.0)
        assert df.loc[0, "stocks"] == "AAPL, MSFT"
        assert pd.isna(df.loc[3, "average_pe_ratio"])


class TestFormatPortfolioSummary:
    def test_summary_text(self, sample_holdings: list[Holding], fixed_time: datetime):
        text = format_portfolio_summary(aggregate(sample_holdings, as_of=fixed_time))

        assert "Portfolio Summary (2024-06-14 16:00:00)" in text
        assert "Investment:     $5,650.00" in text
        assert "Gain/Loss:      $0.00 (0.00%)" in text
        assert "Positions:      6" in text
        assert "Sectors:        4" in text

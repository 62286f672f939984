"""
Tests for core data models.
"""

from decimal import Decimal

import pytest

from portfolio_dash.models import (
    Holding,
    PortfolioRow,
    Stock,
    percent_of,
    to_decimal,
)

from conftest import build_holding


class TestToDecimal:
    """Tests for the to_decimal helper."""

    def test_float_uses_string_form(self):
        """Test that floats convert without binary artifacts."""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_decimal_passthrough(self):
        """Test that Decimals are returned unchanged."""
        value = Decimal("12.5")
        assert to_decimal(value) is value

    def test_bool_rejected(self):
        """Test that booleans are not silently treated as numbers."""
        with pytest.raises(TypeError):
            to_decimal(True)


class TestPercentOf:
    """Tests for the zero-guarded percentage."""

    def test_basic(self):
        assert percent_of(Decimal("25"), Decimal("200")) == Decimal("12.5")

    def test_zero_denominator(self):
        """Test that a zero denominator gives exactly zero."""
        result = percent_of(Decimal("5"), Decimal("0"))
        assert result == Decimal("0")
        assert result.is_finite()


class TestStockFromFeed:
    """Tests for Stock.from_feed."""

    def test_feed_record(self, sample_feed_records: list[dict]):
        """Test parsing a full feed record."""
        stock = Stock.from_feed(sample_feed_records[0])

        assert stock.symbol == "AAPL"
        assert stock.company_name == "Apple Inc."
        assert stock.exchange == "NASDAQ"
        assert stock.sector == "Technology"
        assert stock.industry == "Consumer Electronics"
        assert stock.cmp == Decimal("150.25")
        assert stock.pe_ratio == Decimal("28.4")
        assert stock.high_52_week == Decimal("199.62")
        assert stock.low_52_week == Decimal("124.17")

    def test_cmp_alias(self):
        """Test that "cmp" is accepted for the current market price."""
        stock = Stock.from_feed({"symbol": "TCS", "cmp": 3900, "sector": "Technology"})

        assert stock.cmp == Decimal("3900")
        assert stock.pe_ratio is None
        assert stock.market_cap is None

    def test_symbol_key_is_case_insensitive(self):
        stock = Stock(symbol=" aapl ", company_name="", exchange="", sector=None, cmp=Decimal("1"))
        assert stock.symbol_key == "AAPL"

    def test_blank_symbol_rejected(self):
        with pytest.raises(ValueError, match="symbol cannot be empty"):
            Stock.from_feed({"symbol": None, "cmp": 10})

        with pytest.raises(ValueError, match="symbol cannot be empty"):
            Stock.from_feed({"symbol": "  ", "cmp": 10})


class TestPortfolioRow:
    """Tests for PortfolioRow.from_holding."""

    def test_loss(self):
        """Test a row with a loss."""
        holding = build_holding("TSLA", "Consumer Discretionary", "180", "250", "4")

        row = PortfolioRow.from_holding(holding)

        assert row.investment == Decimal("1000")
        assert row.present_value == Decimal("720")
        assert row.gain_loss == Decimal("-280")
        assert row.gain_loss_percent == Decimal("-28")

    def test_breakeven(self):
        """Test a row with no gain or loss."""
        row = PortfolioRow.from_holding(build_holding("KO", "Consumer Staples", "60", "60", "10"))

        assert row.gain_loss == Decimal("0")
        assert row.gain_loss_percent == Decimal("0")

    def test_cost_basis_prefers_average_price(self):
        holding = build_holding("KO", "Consumer Staples", "60", "50", "10", average_price="55")
        assert holding.cost_basis == Decimal("55")

    def test_rows_are_immutable(self):
        """Test that derived fields cannot be set after construction."""
        row = PortfolioRow.from_holding(build_holding("KO", "Consumer Staples", "60", "60", "10"))

        with pytest.raises(AttributeError):
            row.investment = Decimal("1")

    def test_holding_carries_dates(self):
        """Test that optional holding fields are copied to the row."""
        from datetime import date, datetime

        holding = Holding(
            stock=build_holding("KO", "Consumer Staples", "60", "60", "10").stock,
            purchase_price=Decimal("60"),
            quantity=Decimal("10"),
            purchase_date=date(2023, 1, 5),
            last_updated=datetime(2024, 6, 14, 16, 0),
        )

        row = PortfolioRow.from_holding(holding)

        assert row.purchase_date == date(2023, 1, 5)
        assert row.last_updated == datetime(2024, 6, 14, 16, 0)

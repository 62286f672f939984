"""
Tests for performance analytics.
"""

from decimal import Decimal

from portfolio_dash.analytics.performance import (
    calculate_52_week_position,
    get_gainers_and_losers,
    largest_sector,
    summarize_gain_loss,
)
from portfolio_dash.models import Holding, Stock
from portfolio_dash.portfolio.aggregator import aggregate


def _stock(cmp: str, high: str | None, low: str | None) -> Stock:
    return Stock(
        symbol="TEST",
        company_name="Test Corp",
        exchange="NYSE",
        sector="Technology",
        cmp=Decimal(cmp),
        high_52_week=Decimal(high) if high is not None else None,
        low_52_week=Decimal(low) if low is not None else None,
    )


class TestGainersAndLosers:
    """Tests for get_gainers_and_losers."""

    def test_ranking(self, sample_holdings: list[Holding]):
        portfolio = aggregate(sample_holdings)

        gainers, losers = get_gainers_and_losers(list(portfolio.rows), top_n=2)

        # AAPL +50%, AAPL +25%, MSFT +20%, JPM +16.7%; XYZ -100%, JNJ -5.9%
        assert [r.gain_loss_percent for r in gainers] == [Decimal("50"), Decimal("25")]
        assert [r.stock.symbol for r in losers] == ["XYZ", "JNJ"]

    def test_flat_rows_excluded(self, make_holding):
        portfolio = aggregate([make_holding("KO", "Consumer Staples", "60", "60", "10")])

        gainers, losers = get_gainers_and_losers(list(portfolio.rows))

        assert gainers == []
        assert losers == []


class TestSummarizeGainLoss:
    """Tests for summarize_gain_loss."""

    def test_breakdown(self, sample_holdings: list[Holding]):
        summary = summarize_gain_loss(aggregate(sample_holdings))

        assert summary["total_gain"] == Decimal("1050")
        assert summary["total_loss"] == Decimal("-1050")
        assert summary["net_gain_loss"] == Decimal("0")
        assert summary["winners"] == 4
        assert summary["losers"] == 2
        assert summary["flat"] == 0
        assert summary["return_pct"] == Decimal("0")

    def test_empty_portfolio(self):
        summary = summarize_gain_loss(aggregate([]))

        assert summary["winners"] == 0
        assert summary["total_gain"] == Decimal("0")


class TestFiftyTwoWeekPosition:
    """Tests for calculate_52_week_position."""

    def test_midpoint(self):
        assert calculate_52_week_position(_stock("150", "200", "100")) == Decimal("50")

    def test_at_low_and_high(self):
        assert calculate_52_week_position(_stock("100", "200", "100")) == Decimal("0")
        assert calculate_52_week_position(_stock("200", "200", "100")) == Decimal("100")

    def test_missing_bound(self):
        assert calculate_52_week_position(_stock("150", None, "100")) is None
        assert calculate_52_week_position(_stock("150", "200", None)) is None

    def test_empty_range(self):
        assert calculate_52_week_position(_stock("150", "150", "150")) is None


class TestLargestSector:
    def test_largest(self, sample_holdings: list[Holding]):
        assert largest_sector(aggregate(sample_holdings)).sector == "Technology"

    def test_empty(self):
        assert largest_sector(aggregate([])) is None

"""
Portfolio aggregation.

Turns a batch of holdings into a fully derived Portfolio: per-row
investment and gain/loss, per-sector summaries and portfolio totals.
Aggregation is a pure function. The only non-deterministic output is
Portfolio.last_updated, which defaults to the time of the call.
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from portfolio_dash.data.sectors import SectorTaxonomy
from portfolio_dash.models import (
    Holding,
    Portfolio,
    PortfolioRow,
    SectorSummary,
    percent_of,
    to_decimal,
)
from portfolio_dash.portfolio.holdings import (
    calculate_average_pe_ratio,
    get_distinct_symbols,
    group_rows_by_sector,
    sum_field,
)


class AggregationError(Exception):
    """
    Raised when a batch of holdings cannot be aggregated.

    Attributes:
        index: Position of the offending holding in the batch
        symbol: Symbol of the offending holding
        value: The rejected value
    """

    def __init__(self, message: str, index: int, symbol: str, value):
        super().__init__(message)
        self.index = index
        self.symbol = symbol
        self.value = value


class InvalidQuantityError(AggregationError):
    """Raised when a holding has a quantity <= 0."""
    pass


class InvalidPurchasePriceError(AggregationError):
    """Raised when a holding has a purchase or average price <= 0."""
    pass


class InvalidMarketPriceError(AggregationError):
    """Raised when a stock snapshot has a negative current market price."""
    pass


def _is_positive(value: Decimal) -> bool:
    return value.is_finite() and value > Decimal("0")


def validate_holding(holding: Holding, index: int) -> Holding:
    """
    Validate one holding and normalize its numeric fields to Decimal.

    Args:
        holding: Holding to validate
        index: Position of the holding in its batch

    Returns:
        Holding with Decimal quantity, prices, cmp and P/E

    Raises:
        InvalidQuantityError: If quantity is not > 0
        InvalidPurchasePriceError: If purchase_price or average_price is not > 0
        InvalidMarketPriceError: If stock.cmp is negative or non-finite
    """
    symbol = holding.stock.symbol

    quantity = to_decimal(holding.quantity)
    if not _is_positive(quantity):
        raise InvalidQuantityError(
            f"Holding {index} ({symbol}): quantity must be > 0, got {quantity}",
            index=index, symbol=symbol, value=quantity,
        )

    purchase_price = to_decimal(holding.purchase_price)
    if not _is_positive(purchase_price):
        raise InvalidPurchasePriceError(
            f"Holding {index} ({symbol}): purchase price must be > 0, got {purchase_price}",
            index=index, symbol=symbol, value=purchase_price,
        )

    average_price = None
    if holding.average_price is not None:
        average_price = to_decimal(holding.average_price)
        if not _is_positive(average_price):
            raise InvalidPurchasePriceError(
                f"Holding {index} ({symbol}): average price must be > 0, got {average_price}",
                index=index, symbol=symbol, value=average_price,
            )

    cmp = to_decimal(holding.stock.cmp)
    # A halted or delisted security may legitimately be priced at zero
    if not cmp.is_finite() or cmp < Decimal("0"):
        raise InvalidMarketPriceError(
            f"Holding {index} ({symbol}): current market price must be >= 0, got {cmp}",
            index=index, symbol=symbol, value=cmp,
        )

    pe_ratio = holding.stock.pe_ratio
    if pe_ratio is not None:
        pe_ratio = to_decimal(pe_ratio)

    return replace(
        holding,
        stock=replace(holding.stock, cmp=cmp, pe_ratio=pe_ratio),
        purchase_price=purchase_price,
        quantity=quantity,
        average_price=average_price,
    )


def summarize_sector(
    sector: str,
    rows: list[PortfolioRow],
    total_present_value: Decimal,
) -> SectorSummary:
    """
    Build the summary for one sector.

    Args:
        sector: Sector label
        rows: Rows belonging to the sector
        total_present_value: Present value of the whole portfolio

    Returns:
        SectorSummary for the sector
    """
    total_investment = sum_field(rows, "investment")
    sector_present_value = sum_field(rows, "present_value")
    total_gain_loss = sum_field(rows, "gain_loss")
    symbols = get_distinct_symbols(rows)

    return SectorSummary(
        sector=sector,
        stock_count=len(symbols),
        total_investment=total_investment,
        total_present_value=sector_present_value,
        total_gain_loss=total_gain_loss,
        gain_loss_percent=percent_of(total_gain_loss, total_investment),
        portfolio_weight=percent_of(sector_present_value, total_present_value),
        average_pe_ratio=calculate_average_pe_ratio(rows),
        stocks=tuple(symbols),
    )


def sort_sector_summaries(summaries: list[SectorSummary]) -> list[SectorSummary]:
    """Order summaries by present value descending, then sector name ascending."""
    return sorted(summaries, key=lambda s: (-s.total_present_value, s.sector))


def aggregate(
    holdings: Sequence[Holding],
    taxonomy: Optional[SectorTaxonomy] = None,
    as_of: Optional[datetime] = None,
) -> Portfolio:
    """
    Aggregate holdings into a Portfolio.

    Every holding is validated before anything is computed, so a batch
    is either aggregated completely or rejected as a whole.

    Args:
        holdings: Holdings in display order
        taxonomy: Sector taxonomy (defaults to the open default taxonomy)
        as_of: Timestamp for last_updated (defaults to now)

    Returns:
        Portfolio with rows in input order and sorted sector summaries

    Raises:
        InvalidQuantityError: If any holding has quantity <= 0
        InvalidPurchasePriceError: If any holding has a cost basis <= 0
        InvalidMarketPriceError: If any stock has a negative market price
    """
    if taxonomy is None:
        taxonomy = SectorTaxonomy()

    validated = [validate_holding(h, i) for i, h in enumerate(holdings)]

    rows = [PortfolioRow.from_holding(h) for h in validated]

    total_investment = sum_field(rows, "investment")
    total_present_value = sum_field(rows, "present_value")
    total_gain_loss = sum_field(rows, "gain_loss")

    sector_groups = group_rows_by_sector(rows, taxonomy.resolve)
    summaries = [
        summarize_sector(sector, sector_rows, total_present_value)
        for sector, sector_rows in sector_groups.items()
    ]

    return Portfolio(
        rows=tuple(rows),
        sector_summaries=tuple(sort_sector_summaries(summaries)),
        total_investment=total_investment,
        total_present_value=total_present_value,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=percent_of(total_gain_loss, total_investment),
        last_updated=as_of if as_of is not None else datetime.now(),
    )

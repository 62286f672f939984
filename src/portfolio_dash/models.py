"""
Core data models for the portfolio dashboard.

This module defines the stock snapshots, holdings, derived portfolio rows,
sector summaries and the portfolio aggregate, plus the configuration and
decision log records. All monetary and share quantities use Decimal.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class ActionType(Enum):
    """Types of logged actions for the decision log."""
    CONFIG_LOADED = "CONFIG_LOADED"
    PORTFOLIO_AGGREGATED = "PORTFOLIO_AGGREGATED"
    AGGREGATION_REJECTED = "AGGREGATION_REJECTED"
    LOAD_REJECTED = "LOAD_REJECTED"


def to_decimal(value) -> Decimal:
    """Convert an int, float, str or Decimal to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got bool: {value!r}")
    return Decimal(str(value))


def _optional_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return to_decimal(value)


def percent_of(numerator: Decimal, denominator: Decimal) -> Decimal:
    """
    Express numerator as a percentage of denominator.

    Returns exactly Decimal("0") when the denominator is zero so that empty
    or zero-cost positions never produce NaN or Infinity.
    """
    if denominator == Decimal("0"):
        return Decimal("0")
    return numerator / denominator * Decimal("100")


@dataclass(frozen=True)
class Stock:
    """
    Point-in-time snapshot of a listed security.

    A snapshot is replaced wholesale on refresh, never mutated.

    Attributes:
        symbol: Ticker symbol (unique, compared case-insensitively)
        company_name: Company name for display
        exchange: Exchange label (e.g. "NYSE", "NSE")
        sector: Sector label; blank or None falls back to "Other"
        cmp: Current market price, >= 0
        pe_ratio: Price-to-earnings ratio (may be None or non-finite)
        earnings: Earnings per share
        industry: Finer-grained classification
        market_cap: Market capitalization in currency units
        high_52_week: 52-week high price
        low_52_week: 52-week low price
    """
    symbol: str
    company_name: str
    exchange: str
    sector: Optional[str]
    cmp: Decimal
    pe_ratio: Optional[Decimal] = None
    earnings: Optional[Decimal] = None
    industry: Optional[str] = None
    market_cap: Optional[Decimal] = None
    high_52_week: Optional[Decimal] = None
    low_52_week: Optional[Decimal] = None

    @property
    def symbol_key(self) -> str:
        """Case-insensitive identity of the symbol."""
        return self.symbol.strip().upper()

    @classmethod
    def from_feed(cls, record: dict) -> "Stock":
        """
        Build a Stock from a market-data feed record.

        Accepts the feed's camelCase keys; "currentPrice" and "cmp" are
        both recognised for the current market price.

        Raises:
            ValueError: If the symbol is missing or blank
        """
        symbol = record.get("symbol")
        if symbol is None or not str(symbol).strip():
            raise ValueError("symbol cannot be empty")

        price = record["currentPrice"] if "currentPrice" in record else record["cmp"]
        return cls(
            symbol=str(symbol).upper().strip(),
            company_name=str(record.get("companyName") or ""),
            exchange=str(record.get("exchange") or ""),
            sector=record.get("sector"),
            cmp=to_decimal(price),
            pe_ratio=_optional_decimal(record.get("peRatio")),
            earnings=_optional_decimal(record.get("earnings")),
            industry=record.get("industry"),
            market_cap=_optional_decimal(record.get("marketCap")),
            high_52_week=_optional_decimal(record.get("high52Week")),
            low_52_week=_optional_decimal(record.get("low52Week")),
        )


@dataclass(frozen=True)
class Holding:
    """
    A raw position as supplied to the aggregator.

    Attributes:
        stock: Stock snapshot for the position
        purchase_price: Per-share purchase price, > 0
        quantity: Number of shares, > 0 (fractional allowed)
        average_price: Average per-share price across purchases; when
            present it is the cost basis instead of purchase_price
        purchase_date: Date the position was acquired
        last_updated: When the position data was last refreshed
    """
    stock: Stock
    purchase_price: Decimal
    quantity: Decimal
    average_price: Optional[Decimal] = None
    purchase_date: Optional[date] = None
    last_updated: Optional[datetime] = None

    @property
    def cost_basis(self) -> Decimal:
        """Per-share cost basis (average price if present, else purchase price)."""
        if self.average_price is not None:
            return self.average_price
        return self.purchase_price


@dataclass(frozen=True)
class PortfolioRow:
    """
    One displayed position with its derived financial metrics.

    Derived fields are only ever produced by from_holding and are never
    set independently of the position data they come from.

    Attributes:
        stock: Stock snapshot
        purchase_price: Per-share purchase price
        quantity: Number of shares
        investment: cost basis * quantity
        present_value: stock.cmp * quantity
        gain_loss: present_value - investment
        gain_loss_percent: gain_loss / investment * 100 (0 if investment is 0)
        average_price: Average price, if supplied
        purchase_date: Acquisition date, if supplied
        last_updated: Refresh timestamp, if supplied
    """
    stock: Stock
    purchase_price: Decimal
    quantity: Decimal
    investment: Decimal
    present_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    average_price: Optional[Decimal] = None
    purchase_date: Optional[date] = None
    last_updated: Optional[datetime] = None

    @classmethod
    def from_holding(cls, holding: Holding) -> "PortfolioRow":
        """Create a PortfolioRow by recomputing every derived field."""
        investment = holding.cost_basis * holding.quantity
        present_value = holding.stock.cmp * holding.quantity
        gain_loss = present_value - investment

        return cls(
            stock=holding.stock,
            purchase_price=holding.purchase_price,
            quantity=holding.quantity,
            investment=investment,
            present_value=present_value,
            gain_loss=gain_loss,
            gain_loss_percent=percent_of(gain_loss, investment),
            average_price=holding.average_price,
            purchase_date=holding.purchase_date,
            last_updated=holding.last_updated,
        )


@dataclass(frozen=True)
class SectorSummary:
    """
    Aggregated figures for all rows in one sector.

    Attributes:
        sector: Sector label
        stock_count: Number of distinct symbols in the sector
        total_investment: Sum of row investments
        total_present_value: Sum of row present values
        total_gain_loss: Sum of row gains/losses
        gain_loss_percent: total_gain_loss / total_investment * 100
        portfolio_weight: Share of portfolio present value, in percent
        average_pe_ratio: Mean P/E over distinct symbols with a finite P/E
        stocks: Distinct symbols in first-seen order
    """
    sector: str
    stock_count: int
    total_investment: Decimal
    total_present_value: Decimal
    total_gain_loss: Decimal
    gain_loss_percent: Decimal
    portfolio_weight: Decimal
    average_pe_ratio: Optional[Decimal] = None
    stocks: tuple[str, ...] = ()


@dataclass(frozen=True)
class Portfolio:
    """
    Complete aggregated portfolio.

    Attributes:
        rows: Positions in input (display) order
        sector_summaries: One summary per sector, largest present value first
        total_investment: Sum of row investments
        total_present_value: Sum of row present values
        total_gain_loss: Sum of row gains/losses
        total_gain_loss_percent: total_gain_loss / total_investment * 100
        last_updated: When the aggregation ran (the only non-deterministic field)
    """
    rows: tuple[PortfolioRow, ...]
    sector_summaries: tuple[SectorSummary, ...]
    total_investment: Decimal
    total_present_value: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    last_updated: datetime


@dataclass
class DashboardConfig:
    """
    Dashboard configuration loaded from YAML.

    Attributes:
        sectors: Known sector labels
        exchanges: Known exchange labels
        fallback_sector: Label for holdings with no sector
        strict_sectors: Map labels outside `sectors` to the fallback
        top_n: Number of gainers/losers to report
        output_dir: Directory for the decision log
    """
    sectors: list[str] = field(default_factory=list)
    exchanges: list[str] = field(default_factory=list)
    fallback_sector: str = "Other"
    strict_sectors: bool = False
    top_n: int = 5
    output_dir: str = "output"


@dataclass
class DecisionLogEntry:
    """
    Entry for the append-only decision log.

    Attributes:
        timestamp: When the action occurred
        action_type: Type of action
        details: JSON-serializable details dictionary
    """
    timestamp: datetime
    action_type: ActionType
    details: dict

    @classmethod
    def create(
        cls,
        action_type: ActionType,
        details: dict,
    ) -> "DecisionLogEntry":
        """Factory method with auto-generated timestamp."""
        return cls(
            timestamp=datetime.now(),
            action_type=action_type,
            details=details,
        )

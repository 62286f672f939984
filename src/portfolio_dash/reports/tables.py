"""
Tabular views of an aggregated portfolio.

Builds pandas DataFrames of rows and sector summaries for a read-only
presentation layer, and a plain-text summary for the CLI. Values are
converted to float here and nowhere earlier.
"""

from typing import Optional

import pandas as pd

from portfolio_dash.models import Portfolio


ROW_COLUMNS = [
    "symbol",
    "company_name",
    "exchange",
    "sector",
    "quantity",
    "purchase_price",
    "cmp",
    "investment",
    "present_value",
    "gain_loss",
    "gain_loss_percent",
]

SECTOR_COLUMNS = [
    "sector",
    "stock_count",
    "total_investment",
    "total_present_value",
    "total_gain_loss",
    "gain_loss_percent",
    "portfolio_weight",
    "average_pe_ratio",
    "stocks",
]


def rows_to_frame(portfolio: Portfolio) -> pd.DataFrame:
    """
    Build a DataFrame with one line per portfolio row, in display order.

    Args:
        portfolio: Aggregated portfolio

    Returns:
        DataFrame with ROW_COLUMNS
    """
    records = []
    for row in portfolio.rows:
        records.append({
            "symbol": row.stock.symbol,
            "company_name": row.stock.company_name,
            "exchange": row.stock.exchange,
            "sector": row.stock.sector,
            "quantity": float(row.quantity),
            "purchase_price": float(row.purchase_price),
            "cmp": float(row.stock.cmp),
            "investment": float(row.investment),
            "present_value": float(row.present_value),
            "gain_loss": float(row.gain_loss),
            "gain_loss_percent": float(row.gain_loss_percent),
        })

    return pd.DataFrame(records, columns=ROW_COLUMNS)


def sectors_to_frame(portfolio: Portfolio) -> pd.DataFrame:
    """
    Build a DataFrame with one line per sector, largest first.

    Args:
        portfolio: Aggregated portfolio

    Returns:
        DataFrame with SECTOR_COLUMNS
    """
    records = []
    for summary in portfolio.sector_summaries:
        records.append({
            "sector": summary.sector,
            "stock_count": summary.stock_count,
            "total_investment": float(summary.total_investment),
            "total_present_value": float(summary.total_present_value),
            "total_gain_loss": float(summary.total_gain_loss),
            "gain_loss_percent": float(summary.gain_loss_percent),
            "portfolio_weight": float(summary.portfolio_weight),
            "average_pe_ratio": _optional_float(summary.average_pe_ratio),
            "stocks": ", ".join(summary.stocks),
        })

    return pd.DataFrame(records, columns=SECTOR_COLUMNS)


def format_portfolio_summary(portfolio: Portfolio) -> str:
    """
    Format portfolio totals as plain text.

    Args:
        portfolio: Aggregated portfolio

    Returns:
        Multi-line summary
    """
    lines = []
    lines.append(f"Portfolio Summary ({portfolio.last_updated:%Y-%m-%d %H:%M:%S}):")
    lines.append(f"  Investment:     ${portfolio.total_investment:,.2f}")
    lines.append(f"  Present Value:  ${portfolio.total_present_value:,.2f}")
    lines.append(
        f"  Gain/Loss:      ${portfolio.total_gain_loss:,.2f} "
        f"({portfolio.total_gain_loss_percent:.2f}%)"
    )
    lines.append(f"  Positions:      {len(portfolio.rows)}")
    lines.append(f"  Sectors:        {len(portfolio.sector_summaries)}")
    return "\n".join(lines)


def _optional_float(value) -> Optional[float]:
    if value is None:
        return None
    return float(value)

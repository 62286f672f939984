"""
Row grouping utilities for portfolio aggregation.

Provides helpers for partitioning portfolio rows by sector and
summarizing the distinct symbols within a group.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Callable, Optional

from portfolio_dash.models import PortfolioRow


def group_rows_by_sector(
    rows: list[PortfolioRow],
    resolve: Callable[[Optional[str]], str],
) -> dict[str, list[PortfolioRow]]:
    """
    Group rows by their resolved sector label.

    Args:
        rows: Portfolio rows
        resolve: Maps a raw sector label to its grouping label

    Returns:
        Dictionary mapping sector label to its rows, in first-seen order
    """
    groups: dict[str, list[PortfolioRow]] = defaultdict(list)
    for row in rows:
        groups[resolve(row.stock.sector)].append(row)
    return dict(groups)


def get_distinct_symbols(rows: list[PortfolioRow]) -> list[str]:
    """
    Get distinct symbols in insertion order.

    Symbols are compared case-insensitively; the first spelling seen is kept.

    Args:
        rows: Portfolio rows

    Returns:
        List of distinct symbols
    """
    seen: set[str] = set()
    symbols = []
    for row in rows:
        key = row.stock.symbol_key
        if key not in seen:
            seen.add(key)
            symbols.append(row.stock.symbol)
    return symbols


def calculate_average_pe_ratio(rows: list[PortfolioRow]) -> Optional[Decimal]:
    """
    Calculate the mean P/E ratio across distinct symbols.

    The first snapshot of each symbol is used. Symbols with a missing or
    non-finite P/E are excluded.

    Args:
        rows: Portfolio rows

    Returns:
        Mean P/E, or None if no symbol has a usable P/E
    """
    seen: set[str] = set()
    ratios = []
    for row in rows:
        key = row.stock.symbol_key
        if key in seen:
            continue
        seen.add(key)
        pe_ratio = row.stock.pe_ratio
        if pe_ratio is not None and pe_ratio.is_finite():
            ratios.append(pe_ratio)

    if not ratios:
        return None

    return sum(ratios, Decimal("0")) / Decimal(len(ratios))


def sum_field(rows: list[PortfolioRow], field_name: str) -> Decimal:
    """Sum a Decimal field across rows, starting from Decimal zero."""
    return sum((getattr(row, field_name) for row in rows), Decimal("0"))

"""
Sector and exchange taxonomy for portfolio grouping.

Sector taxonomies vary by data source, so the set of labels is open and
configurable. Holdings without a sector are grouped under a fallback label.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from portfolio_dash.models import DashboardConfig, Holding


FALLBACK_SECTOR = "Other"

# Common sector labels; any other label is still accepted as its own group
DEFAULT_SECTORS = [
    "Technology",
    "Healthcare",
    "Finance",
    "Consumer Discretionary",
    "Consumer Staples",
    "Energy",
    "Industrials",
    "Materials",
    "Real Estate",
    "Utilities",
    "Communication",
]

DEFAULT_EXCHANGES = [
    "NYSE",
    "NASDAQ",
    "BSE",
    "NSE",
    "AMEX",
]


@dataclass(frozen=True)
class SectorTaxonomy:
    """
    Known sector and exchange labels with a fallback bucket.

    Attributes:
        sectors: Known sector labels (matched case-sensitively)
        exchanges: Known exchange labels (matched case-insensitively)
        fallback: Label used for missing sectors
        strict: If True, sectors outside `sectors` also use the fallback
    """
    sectors: tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_SECTORS))
    exchanges: tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_EXCHANGES))
    fallback: str = FALLBACK_SECTOR
    strict: bool = False

    @classmethod
    def from_config(cls, config: DashboardConfig) -> "SectorTaxonomy":
        """Build a taxonomy from dashboard config, keeping defaults for empty lists."""
        return cls(
            sectors=tuple(config.sectors) if config.sectors else tuple(DEFAULT_SECTORS),
            exchanges=tuple(config.exchanges) if config.exchanges else tuple(DEFAULT_EXCHANGES),
            fallback=config.fallback_sector,
            strict=config.strict_sectors,
        )

    def resolve(self, label: Optional[str]) -> str:
        """
        Map a raw sector label to its grouping label.

        Args:
            label: Sector label from the stock snapshot

        Returns:
            The label unchanged, or the fallback if it is missing/blank
            (or unknown, in strict mode)
        """
        if label is None or not label.strip():
            return self.fallback
        if self.strict and label not in self.sectors:
            return self.fallback
        return label

    def is_known_sector(self, label: Optional[str]) -> bool:
        """Check whether a sector label is part of the taxonomy."""
        return label is not None and label in self.sectors

    def is_known_exchange(self, label: Optional[str]) -> bool:
        """Check whether an exchange label is part of the taxonomy."""
        if not label:
            return False
        return label.upper() in {e.upper() for e in self.exchanges}

    def unknown_sectors(self, holdings: Iterable[Holding]) -> list[str]:
        """
        List non-blank sector labels that are not in the taxonomy.

        Args:
            holdings: Holdings to inspect

        Returns:
            Unknown labels in first-seen order, without duplicates
        """
        unknown: list[str] = []
        for holding in holdings:
            label = holding.stock.sector
            if label is None or not label.strip():
                continue
            if label not in self.sectors and label not in unknown:
                unknown.append(label)
        return unknown


def format_taxonomy_table(taxonomy: SectorTaxonomy) -> str:
    """Format the taxonomy as an ASCII table for the CLI."""
    lines = []
    lines.append("| Sector |")
    lines.append("|--------|")
    for sector in taxonomy.sectors:
        lines.append(f"| {sector} |")
    lines.append(f"| {taxonomy.fallback} (fallback) |")
    lines.append("")
    lines.append(f"Exchanges: {', '.join(taxonomy.exchanges)}")
    lines.append(f"Strict mode: {'on' if taxonomy.strict else 'off'}")
    return "\n".join(lines)

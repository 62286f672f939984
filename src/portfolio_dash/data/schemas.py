"""
Record schemas for holding and market-data feed records.

Defines the expected keys and value kinds of the records that callers
hand to the dashboard, so malformed records are rejected up front.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any


# Python types accepted for each field kind. Numbers and dates may also
# arrive as strings and are converted by the loaders.
KIND_TYPES = {
    "str": (str,),
    "number": (int, float, Decimal, str),
    "date": (date, str),
}


@dataclass
class FieldSchema:
    """Schema definition for a single record key."""
    name: str
    kind: str  # "str", "number" or "date"
    required: bool = True

    def accepts(self, value: Any) -> bool:
        """Check whether a non-null value matches this field's kind."""
        if isinstance(value, bool):
            return False
        return isinstance(value, KIND_TYPES[self.kind])


@dataclass
class RecordSchema:
    """Schema definition for a record type."""
    name: str
    fields: list[FieldSchema]
    description: str

    @property
    def required_fields(self) -> list[str]:
        """Get list of required key names."""
        return [f.name for f in self.fields if f.required]

    def validate_keys(self, record_keys: list[str]) -> tuple[bool, list[str]]:
        """
        Validate that a record has the required keys.

        Args:
            record_keys: Keys present in the record

        Returns:
            Tuple of (is_valid, list of missing keys)
        """
        missing = [key for key in self.required_fields if key not in record_keys]
        return len(missing) == 0, missing

    def invalid_fields(self, record: dict[str, Any]) -> list[str]:
        """
        Find keys whose values do not match their declared kind.

        Null values are skipped; missing required keys are reported by
        validate_keys.

        Args:
            record: Record to check

        Returns:
            Names of mistyped keys, in schema order
        """
        return [
            f.name for f in self.fields
            if record.get(f.name) is not None and not f.accepts(record[f.name])
        ]


# Market-data feed record (one stock snapshot)
STOCK_SCHEMA = RecordSchema(
    name="stock",
    description="Stock snapshot from the market-data feed",
    fields=[
        FieldSchema(name="symbol", kind="str"),
        FieldSchema(name="currentPrice", kind="number"),
        FieldSchema(name="companyName", kind="str", required=False),
        FieldSchema(name="exchange", kind="str", required=False),
        FieldSchema(name="sector", kind="str", required=False),
        FieldSchema(name="industry", kind="str", required=False),
        FieldSchema(name="peRatio", kind="number", required=False),
        FieldSchema(name="earnings", kind="number", required=False),
        FieldSchema(name="marketCap", kind="number", required=False),
        FieldSchema(name="high52Week", kind="number", required=False),
        FieldSchema(name="low52Week", kind="number", required=False),
    ],
)

# Holding record (purchase data for one position)
HOLDING_SCHEMA = RecordSchema(
    name="holding",
    description="Position purchase data paired with a stock snapshot",
    fields=[
        FieldSchema(name="purchasePrice", kind="number"),
        FieldSchema(name="quantity", kind="number"),
        FieldSchema(name="averagePrice", kind="number", required=False),
        FieldSchema(name="purchaseDate", kind="date", required=False),
        FieldSchema(name="lastUpdated", kind="date", required=False),
    ],
)

"""
Record parsing and holdings document loading.

Converts feed-shaped holding records into Holding objects. Records are
expected in the shape the market-data feed and position store already
produce; no spreadsheet column mapping is attempted here.
"""

from datetime import date, datetime
from decimal import InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from portfolio_dash.models import Holding, Stock, to_decimal
from portfolio_dash.data.schemas import (
    HOLDING_SCHEMA,
    STOCK_SCHEMA,
    RecordSchema,
)


class DataLoadError(Exception):
    """Raised when records cannot be loaded or are structurally invalid."""
    pass


def parse_stock(record: dict[str, Any], index: int = 0) -> Stock:
    """
    Parse a market-data feed record into a Stock.

    Args:
        record: Feed record with camelCase keys
        index: Position of the record, for error messages

    Returns:
        Stock snapshot

    Raises:
        DataLoadError: If required keys are missing, the symbol is blank
            or a value has the wrong type
    """
    keys = list(record.keys())
    if "cmp" in record:
        keys.append("currentPrice")
    _require_keys(STOCK_SCHEMA, keys, index)
    _require_kinds(STOCK_SCHEMA, record, index)

    symbol = record["symbol"]
    if symbol is None or not symbol.strip():
        raise DataLoadError(f"Record {index}: symbol cannot be empty")

    try:
        return Stock.from_feed(record)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise DataLoadError(f"Record {index}: invalid stock value: {e}")


def parse_holding(record: dict[str, Any], index: int = 0) -> Holding:
    """
    Parse a holding record into a Holding.

    The stock snapshot may be nested under a "stock" key or given inline
    alongside the purchase fields.

    Args:
        record: Holding record with camelCase keys
        index: Position of the record, for error messages

    Returns:
        Holding

    Raises:
        DataLoadError: If required keys are missing or values are invalid
    """
    if not isinstance(record, dict):
        raise DataLoadError(f"Record {index}: expected a mapping, got {type(record).__name__}")

    _require_keys(HOLDING_SCHEMA, list(record.keys()), index)
    _require_kinds(HOLDING_SCHEMA, record, index)

    stock_record = record.get("stock", record)
    if not isinstance(stock_record, dict):
        raise DataLoadError(f"Record {index}: 'stock' must be a mapping")
    stock = parse_stock(stock_record, index)

    try:
        purchase_price = to_decimal(record["purchasePrice"])
        quantity = to_decimal(record["quantity"])
        average_price = None
        if record.get("averagePrice") is not None:
            average_price = to_decimal(record["averagePrice"])
    except (InvalidOperation, TypeError, ValueError) as e:
        raise DataLoadError(f"Record {index}: invalid numeric value: {e}")

    purchase_date = None
    if record.get("purchaseDate") is not None:
        purchase_date = _parse_date(record["purchaseDate"], "purchaseDate", index)

    last_updated = None
    if record.get("lastUpdated") is not None:
        last_updated = _parse_datetime(record["lastUpdated"], "lastUpdated", index)

    return Holding(
        stock=stock,
        purchase_price=purchase_price,
        quantity=quantity,
        average_price=average_price,
        purchase_date=purchase_date,
        last_updated=last_updated,
    )


def parse_holdings(records: list[dict[str, Any]]) -> list[Holding]:
    """
    Parse a list of holding records, preserving order.

    Args:
        records: Holding records

    Returns:
        List of Holding objects

    Raises:
        DataLoadError: If any record is invalid
    """
    return [parse_holding(record, i) for i, record in enumerate(records)]


def load_holdings_document(file_path: str | Path) -> list[Holding]:
    """
    Load holdings from a YAML or JSON document.

    The document is either a list of holding records or a mapping with
    a "holdings" list.

    Args:
        file_path: Path to the document

    Returns:
        List of Holding objects in document order

    Raises:
        DataLoadError: If the file cannot be read or is invalid
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, "r") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"Failed to parse holdings file {file_path}: {e}")

    if document is None:
        return []

    if isinstance(document, dict):
        if "holdings" not in document:
            raise DataLoadError(f"File {file_path} has no 'holdings' list")
        document = document["holdings"] or []

    if not isinstance(document, list):
        raise DataLoadError(f"File {file_path} must contain a list of holdings")

    return parse_holdings(document)


def _require_keys(schema: RecordSchema, keys: list[str], index: int) -> None:
    is_valid, missing = schema.validate_keys(keys)
    if not is_valid:
        raise DataLoadError(
            f"Record {index} is missing required {schema.name} keys: {missing}"
        )


def _require_kinds(schema: RecordSchema, record: dict[str, Any], index: int) -> None:
    invalid = schema.invalid_fields(record)
    if invalid:
        raise DataLoadError(
            f"Record {index} has mistyped {schema.name} values: "
            + ", ".join(f"{name}={record[name]!r}" for name in invalid)
        )


def _parse_date(value: Any, field_name: str, index: int) -> date:
    """
    Parse a date value from a date, datetime or ISO string.

    Raises:
        DataLoadError: If the date cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            pass

        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            pass

    raise DataLoadError(
        f"Record {index}: invalid date for {field_name}: {value!r}. Expected YYYY-MM-DD"
    )


def _parse_datetime(value: Any, field_name: str, index: int) -> datetime:
    """
    Parse a timestamp from a datetime, date or ISO string.

    Raises:
        DataLoadError: If the timestamp cannot be parsed
    """
    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass

    raise DataLoadError(
        f"Record {index}: invalid timestamp for {field_name}: {value!r}. Expected ISO 8601"
    )


"""
Append-only decision logging for the portfolio dashboard.

Configuration loads, completed aggregations, rejected batches and
failed loads are logged with timestamps to support auditability and
reproducibility.
"""

import json
from datetime import datetime, date
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from portfolio_dash.models import (
    ActionType,
    DashboardConfig,
    DecisionLogEntry,
    Portfolio,
)


class DecisionLogger:
    """
    Append-only decision logger.

    Writes all decisions to a JSONL file for audit purposes.
    Each line is a complete JSON object representing one action.
    """

    def __init__(self, log_path: str | Path):
        """
        Initialize the decision logger.

        Args:
            log_path: Path to the log file (will be created if not exists)
        """
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, entry: DecisionLogEntry) -> None:
        """
        Write a decision log entry.

        Args:
            entry: DecisionLogEntry to write
        """
        record = {
            "timestamp": entry.timestamp.isoformat(),
            "action_type": entry.action_type.value,
            "details": entry.details,
        }

        with open(self.log_path, "a") as f:
            f.write(json.dumps(record, cls=DecimalEncoder) + "\n")

    def log_portfolio_aggregated(
        self,
        portfolio: Portfolio,
        source: Optional[str] = None,
    ) -> None:
        """
        Log a completed aggregation.

        Args:
            portfolio: Aggregated portfolio
            source: Where the holdings came from (e.g. a file path)
        """
        details = {
            "source": source,
            "last_updated": portfolio.last_updated.isoformat(),
            "num_rows": len(portfolio.rows),
            "num_sectors": len(portfolio.sector_summaries),
            "total_investment": str(portfolio.total_investment),
            "total_present_value": str(portfolio.total_present_value),
            "total_gain_loss": str(portfolio.total_gain_loss),
            "total_gain_loss_percent": str(portfolio.total_gain_loss_percent),
            "sectors": [s.sector for s in portfolio.sector_summaries],
        }

        entry = DecisionLogEntry.create(
            action_type=ActionType.PORTFOLIO_AGGREGATED,
            details=details,
        )
        self.log(entry)

    def log_aggregation_rejected(
        self,
        error: Exception,
        num_holdings: int,
        source: Optional[str] = None,
    ) -> None:
        """
        Log a rejected batch.

        Args:
            error: The validation error that rejected the batch
            num_holdings: Number of holdings in the rejected batch
            source: Where the holdings came from
        """
        details = {
            "source": source,
            "error_type": type(error).__name__,
            "message": str(error),
            "num_holdings": num_holdings,
            "index": getattr(error, "index", None),
            "symbol": getattr(error, "symbol", None),
        }

        entry = DecisionLogEntry.create(
            action_type=ActionType.AGGREGATION_REJECTED,
            details=details,
        )
        self.log(entry)

    def log_load_rejected(
        self,
        error: Exception,
        stage: str,
        source: Optional[str] = None,
    ) -> None:
        """
        Log a config or holdings document that could not be loaded.

        Args:
            error: The load error
            stage: "config" or "holdings"
            source: Path of the file that failed to load
        """
        details = {
            "stage": stage,
            "source": source,
            "error_type": type(error).__name__,
            "message": str(error),
        }

        entry = DecisionLogEntry.create(
            action_type=ActionType.LOAD_REJECTED,
            details=details,
        )
        self.log(entry)

    def log_config_loaded(
        self,
        config: DashboardConfig,
        config_path: Optional[str],
    ) -> None:
        """
        Log configuration loading.

        Args:
            config: Loaded configuration
            config_path: Path to configuration file (None for defaults)
        """
        details = {
            "config_path": config_path,
            "sectors": list(config.sectors),
            "exchanges": list(config.exchanges),
            "fallback_sector": config.fallback_sector,
            "strict_sectors": config.strict_sectors,
            "top_n": config.top_n,
        }

        entry = DecisionLogEntry.create(
            action_type=ActionType.CONFIG_LOADED,
            details=details,
        )
        self.log(entry)

    def read_log(self) -> list[DecisionLogEntry]:
        """
        Read all entries from the log file.

        Returns:
            List of DecisionLogEntry objects
        """
        if not self.log_path.exists():
            return []

        entries = []
        with open(self.log_path, "r") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                record = json.loads(line)
                entries.append(
                    DecisionLogEntry(
                        timestamp=datetime.fromisoformat(record["timestamp"]),
                        action_type=ActionType(record["action_type"]),
                        details=record.get("details", {}),
                    )
                )

        return entries

    def filter_by_action_type(
        self,
        action_type: ActionType,
    ) -> list[DecisionLogEntry]:
        """
        Get log entries of a specific action type.

        Args:
            action_type: Action type to filter by

        Returns:
            Filtered list of entries
        """
        return [e for e in self.read_log() if e.action_type == action_type]


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, (date, datetime)):
            return obj.isoformat()
        return super().default(obj)


# Global logger instance (initialized on first use)
_global_logger: Optional[DecisionLogger] = None


def get_logger(log_path: Optional[str | Path] = None) -> DecisionLogger:
    """
    Get or create the global decision logger.

    Args:
        log_path: Optional path to initialize logger

    Returns:
        DecisionLogger instance
    """
    global _global_logger

    if _global_logger is None:
        if log_path is None:
            log_path = "output/decision_log.jsonl"
        _global_logger = DecisionLogger(log_path)
    elif log_path is not None:
        # Allow reinitializing with new path
        _global_logger = DecisionLogger(log_path)

    return _global_logger

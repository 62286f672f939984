"""
Configuration loading and management for the portfolio dashboard.

This module handles loading the dashboard configuration (sector and
exchange taxonomy, reporting options) from YAML files and validating it.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from portfolio_dash.models import DashboardConfig


CONFIG_ENV_VAR = "PORTFOLIO_DASH_CONFIG"


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""
    pass


def get_default_config_path() -> Optional[Path]:
    """
    Get the config path named by the PORTFOLIO_DASH_CONFIG environment variable.

    Returns:
        Path to the config file, or None if the variable is unset
    """
    value = os.environ.get(CONFIG_ENV_VAR)
    if not value:
        return None
    return Path(value)


def load_dashboard_config(config_path: str | Path) -> DashboardConfig:
    """
    Load dashboard configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        DashboardConfig object with validated settings

    Raises:
        ConfigurationError: If the file cannot be loaded or is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ConfigurationError("Configuration file must contain a mapping")

    return _parse_dashboard_config(raw_config)


def _parse_dashboard_config(raw: dict[str, Any]) -> DashboardConfig:
    """
    Parse and validate raw configuration dictionary into DashboardConfig.

    Args:
        raw: Dictionary loaded from YAML

    Returns:
        Validated DashboardConfig

    Raises:
        ConfigurationError: If any field is invalid
    """
    sectors = _parse_label_list(raw.get("sectors", []), "sectors")
    exchanges = _parse_label_list(raw.get("exchanges", []), "exchanges")

    fallback_sector = str(raw.get("fallback_sector", "Other")).strip()
    if not fallback_sector:
        raise ConfigurationError("fallback_sector cannot be empty")

    strict_sectors = raw.get("strict_sectors", False)
    if not isinstance(strict_sectors, bool):
        raise ConfigurationError(
            f"strict_sectors must be true or false, got {strict_sectors!r}"
        )

    top_n = _parse_int(raw.get("top_n", 5), "top_n", min_val=1)

    output_dir = str(raw.get("output_dir", "output"))

    return DashboardConfig(
        sectors=sectors,
        exchanges=exchanges,
        fallback_sector=fallback_sector,
        strict_sectors=strict_sectors,
        top_n=top_n,
        output_dir=output_dir,
    )


def _parse_label_list(value: Any, field_name: str) -> list[str]:
    """
    Parse a list of non-empty string labels, dropping duplicates.

    Raises:
        ConfigurationError: If the value is not a list of strings
    """
    if value is None:
        return []

    if not isinstance(value, list):
        raise ConfigurationError(f"{field_name} must be a list of labels")

    labels: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise ConfigurationError(
                f"{field_name} entries must be non-empty strings, got {item!r}"
            )
        label = item.strip()
        if label not in labels:
            labels.append(label)

    return labels


def _parse_int(
    value: Any,
    field_name: str,
    min_val: Optional[int] = None,
) -> int:
    """
    Parse an integer value with optional lower bound.

    Raises:
        ConfigurationError: If the value is invalid or out of range
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid integer value for {field_name}: {value}")

    try:
        int_value = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid integer value for {field_name}: {value}")

    if min_val is not None and int_value < min_val:
        raise ConfigurationError(
            f"{field_name} must be >= {min_val}, got {int_value}"
        )

    return int_value


def write_config(config: DashboardConfig, output_path: str | Path) -> None:
    """
    Write a DashboardConfig to a YAML file.

    Args:
        config: The configuration to write
        output_path: Path to write the YAML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = {
        "sectors": list(config.sectors),
        "exchanges": list(config.exchanges),
        "fallback_sector": config.fallback_sector,
        "strict_sectors": config.strict_sectors,
        "top_n": config.top_n,
        "output_dir": config.output_dir,
    }

    with open(output_path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

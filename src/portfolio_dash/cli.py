"""
Command-line interface for the portfolio dashboard.

Provides commands for:
- aggregate: Aggregate holdings into rows, sector summaries and totals
- sectors: Show the configured sector and exchange taxonomy
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from portfolio_dash import __version__
from portfolio_dash.analytics import (
    get_gainers_and_losers,
    summarize_gain_loss,
)
from portfolio_dash.config import (
    ConfigurationError,
    get_default_config_path,
    load_dashboard_config,
)
from portfolio_dash.data import DataLoadError, SectorTaxonomy, load_holdings_document
from portfolio_dash.data.sectors import format_taxonomy_table
from portfolio_dash.logging import get_logger
from portfolio_dash.models import DashboardConfig
from portfolio_dash.portfolio import AggregationError, aggregate
from portfolio_dash.reports import (
    format_portfolio_summary,
    rows_to_frame,
    sectors_to_frame,
)


log = logging.getLogger(__name__)


def _load_config(config_path: Optional[str]) -> tuple[DashboardConfig, Optional[str]]:
    """Load config from the given path, the environment, or defaults."""
    path = Path(config_path) if config_path else get_default_config_path()
    if path is None:
        log.debug("No config file given, using defaults")
        return DashboardConfig(), None

    log.debug("Loading config from %s", path)
    return load_dashboard_config(path), str(path)


@click.group()
@click.version_option(version=__version__, prog_name="portfolio-dash")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """
    Investment Portfolio Dashboard.

    Aggregates stock holdings into per-position gains and losses,
    sector summaries and portfolio totals.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


@main.command(name="aggregate")
@click.option(
    "--holdings", "-h",
    required=True,
    type=click.Path(exists=True),
    help="Path to holdings YAML/JSON document",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    default=None,
    help="Path to dashboard configuration YAML file",
)
@click.option(
    "--output-dir", "-o",
    type=click.Path(),
    default=None,
    help="Directory for the decision log. Defaults to config output_dir.",
)
@click.option(
    "--top", "-t",
    type=int,
    default=None,
    help="Number of gainers/losers to show. Defaults to config top_n.",
)
def aggregate_command(
    holdings: str,
    config: Optional[str],
    output_dir: Optional[str],
    top: Optional[int],
):
    """
    Aggregate holdings into a portfolio.

    Computes investment, present value and gain/loss per position, sums
    them by sector and for the whole portfolio, and prints the result.
    """
    try:
        dashboard_config, config_path = _load_config(config)
    except ConfigurationError as e:
        # The config never loaded, so its output_dir is unknown
        out_dir = Path(output_dir or DashboardConfig().output_dir)
        source = config or str(get_default_config_path())
        get_logger(out_dir / "decision_log.jsonl").log_load_rejected(e, "config", source)
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    out_dir = Path(output_dir or dashboard_config.output_dir)
    logger = get_logger(out_dir / "decision_log.jsonl")
    logger.log_config_loaded(dashboard_config, config_path)

    taxonomy = SectorTaxonomy.from_config(dashboard_config)
    top_n = top if top is not None else dashboard_config.top_n

    click.echo(f"Loading holdings from {holdings}...")
    try:
        holding_list = load_holdings_document(holdings)
    except DataLoadError as e:
        logger.log_load_rejected(e, "holdings", source=holdings)
        click.echo(f"Error loading holdings: {e}", err=True)
        sys.exit(1)

    for label in taxonomy.unknown_sectors(holding_list):
        log.warning("Sector %r is not in the configured taxonomy", label)

    click.echo(f"Aggregating {len(holding_list)} holdings...")
    try:
        portfolio = aggregate(holding_list, taxonomy=taxonomy)
    except AggregationError as e:
        logger.log_aggregation_rejected(e, len(holding_list), source=holdings)
        click.echo(f"Error aggregating holdings: {e}", err=True)
        sys.exit(1)

    logger.log_portfolio_aggregated(portfolio, source=holdings)

    click.echo()
    click.echo(format_portfolio_summary(portfolio))

    if not portfolio.rows:
        return

    click.echo()
    click.echo("Positions:")
    click.echo(rows_to_frame(portfolio).to_string(index=False, float_format="{:,.2f}".format))

    click.echo()
    click.echo("Sectors:")
    click.echo(sectors_to_frame(portfolio).to_string(index=False, float_format="{:,.2f}".format))

    breakdown = summarize_gain_loss(portfolio)
    gainers, losers = get_gainers_and_losers(list(portfolio.rows), top_n=top_n)

    click.echo()
    click.echo(
        f"Winners: {breakdown['winners']}  Losers: {breakdown['losers']}  "
        f"Flat: {breakdown['flat']}"
    )
    if gainers:
        click.echo("  Top gainers:")
        for row in gainers:
            click.echo(f"    {row.stock.symbol}: {row.gain_loss_percent:+.2f}%")
    if losers:
        click.echo("  Top losers:")
        for row in losers:
            click.echo(f"    {row.stock.symbol}: {row.gain_loss_percent:+.2f}%")


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    default=None,
    help="Path to dashboard configuration YAML file",
)
def sectors(config: Optional[str]):
    """
    Show the sector and exchange taxonomy.

    Lists the known sector labels, the fallback bucket and known exchanges.
    """
    try:
        dashboard_config, _ = _load_config(config)
    except ConfigurationError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    click.echo(format_taxonomy_table(SectorTaxonomy.from_config(dashboard_config)))


if __name__ == "__main__":
    main()

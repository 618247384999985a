"""Option Calc CLI - Command-line interface for option grant value estimates."""

import json
import logging
from datetime import datetime

import click
from rich.console import Console

from optcalc import __version__

from .config_commands import config as config_group
from .errors import user_errors


def _parse_as_of(as_of):
    """Parse an --as-of value (YYYY-MM-DD); None means today."""
    if not as_of:
        return None
    try:
        return datetime.strptime(as_of, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date format '{as_of}'. Use YYYY-MM-DD.", param_hint="--as-of")


@click.group()
@click.version_option(version=__version__, prog_name="option-calc")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging (quote requests and responses).")
def cli(verbose):
    """Option Calc - Stock option grant value estimates.

    Fetches the latest share price and estimates the vested options'
    profit before and after tax.

    The grant is loaded from (in order):

    \b
    1. --grant PATH option
    2. settings.json 'grant' key (if set via CLI)
    3. grant.yaml in the config directory
       (OPTION_CALC_CONFIG_PATH or ~/.config/option-calc/)

    Run 'option-calc config init' to create a starter grant file.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


cli.add_command(config_group)


@cli.command("show")
@click.option("--grant", "grant_path", type=click.Path(dir_okay=False), help="Grant file (default: configured grant.yaml).")
@click.option("--price", type=click.FloatRange(min=0, min_open=True), help="Use this share price instead of fetching a quote.")
@click.option("--fallback-price", type=click.FloatRange(min=0, min_open=True),
              help="Price used if no quote can be fetched (default: fallbackPrice, else the strike price).")
@click.option("--as-of", type=str, help="Reference date (YYYY-MM-DD). Defaults to today.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def show(grant_path, price, fallback_price, as_of, as_json):
    """Show vested options and profit at the current share price.

    \b
    Examples:
      option-calc show                          # Live quote, today
      option-calc show --price 25               # Manual price
      option-calc show --as-of 2027-09-01       # Projected vesting
      option-calc show --grant ~/grants/hk.yaml --json
    """
    from optcalc.sdk import (
        PriceQuote,
        compute_profit,
        fetch_quote,
        get_fallback_price,
        get_http_timeout,
        load_grant_config,
        normalize_symbol,
    )
    from .renderers.profit_renderer import render_profit

    as_of_date = _parse_as_of(as_of)

    with user_errors("show"):
        grant = load_grant_config(grant_path)

        if price is not None:
            quote = PriceQuote(
                symbol=grant.symbol,
                quote_symbol=normalize_symbol(grant.symbol),
                price=price,
                source="manual",
            )
        else:
            if fallback_price is None:
                fallback_price = get_fallback_price(grant_path) or grant.strike_price
            quote = fetch_quote(grant.symbol, fallback_price, timeout=get_http_timeout())

        profit = compute_profit(grant, quote.price, as_of_date)

    if as_json:
        output = {
            "as_of": (as_of_date or datetime.now().date()).isoformat(),
            "grant": grant.model_dump(mode="json"),
            "quote": quote.model_dump(mode="json"),
            "profit": profit.model_dump(mode="json"),
        }
        click.echo(json.dumps(output, indent=2))
        return

    render_profit(Console(), grant, quote, profit)


@cli.command("quote")
@click.argument("symbol")
@click.option("--fallback-price", type=click.FloatRange(min=0, min_open=True),
              help="Price to print if no quote can be fetched.")
def quote_cmd(symbol, fallback_price):
    """Get the latest price for a ticker.

    SYMBOL is a ticker such as 0700, 9863.hk or 600000.sh.
    Prints the price followed by the source (primary, backup or fallback).
    """
    from optcalc.sdk import QuoteError, fetch_quote, get_http_timeout

    with user_errors("quote"):
        try:
            quote = fetch_quote(symbol, fallback_price, timeout=get_http_timeout())
        except QuoteError as e:
            raise click.ClickException(str(e))

    click.echo(f"{quote.price:.2f}\t{quote.source}")


@cli.command("schedule")
@click.option("--grant", "grant_path", type=click.Path(dir_okay=False), help="Grant file (default: configured grant.yaml).")
@click.option("--as-of", type=str, help="Reference date (YYYY-MM-DD). Defaults to today.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def schedule(grant_path, as_of, as_json):
    """Show the grant's vesting schedule."""
    from optcalc.sdk import get_vesting_schedule, load_grant_config
    from .renderers.profit_renderer import render_schedule

    as_of_date = _parse_as_of(as_of)

    with user_errors("schedule"):
        grant = load_grant_config(grant_path)
        events = get_vesting_schedule(grant, as_of_date)

    if as_json:
        click.echo(json.dumps([e.model_dump(mode="json") for e in events], indent=2))
        return

    render_schedule(Console(), grant, events)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

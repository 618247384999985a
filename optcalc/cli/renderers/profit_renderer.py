"""Rich renderer for grant profit estimates.

Transforms SDK values into formatted Rich tables.
"""

from typing import List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box
from rich.markup import escape

from optcalc.sdk import GrantConfig, PriceQuote, ProfitBreakdown, VestEvent, currency_symbol


def format_formula(grant: GrantConfig, quote: PriceQuote, profit: ProfitBreakdown) -> str:
    """One-line formula behind the net profit figure.

    e.g. ``30000 × (HK$25.00 - HK$20) × (1 - 20%)``
    """
    cur = currency_symbol(grant.symbol)
    return (
        f"{profit.vested_options_count} × ({cur}{quote.price:.2f} - {cur}{grant.strike_price:g}) "
        f"× (1 - {grant.tax_rate * 100:g}%)"
    )


def render_profit(
    console: Console,
    grant: GrantConfig,
    quote: PriceQuote,
    profit: ProfitBreakdown,
) -> None:
    """Render the price, profit and vesting progress for a grant.

    Args:
        console: Rich Console instance
        grant: Grant terms
        quote: Price used for the estimate
        profit: SDK output from compute_profit()
    """
    cur = currency_symbol(grant.symbol)

    if quote.is_fallback:
        console.print(Panel(
            f"[yellow]No live quote for {quote.quote_symbol}; "
            f"using fallback price {cur}{quote.price:.2f}[/yellow]",
            title="Note",
            border_style="yellow"
        ))

    header = Table(show_header=False, box=None, padding=(0, 2), expand=True)
    header.add_column("left")
    header.add_column("right", justify="right")

    title = grant.symbol.upper()
    if quote.name:
        title = f"{title}  [dim]{escape(quote.name)}[/dim]"
    header.add_row(f"[bold]{title}[/bold]", f"[bold green]{cur}{quote.price:.2f}[/bold green]")

    net_style = "green" if profit.net_profit >= 0 else "red"
    header.add_row(
        f"Profit: [bold {net_style}]{cur}{profit.net_profit:,.2f}[/bold {net_style}]",
        f"[cyan]{profit.vested_ratio * 100:.0f}%[/cyan]",
    )
    console.print(Panel(header, border_style="dim"))

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("label", style="dim")
    table.add_column("value", justify="right")
    table.add_row("Vested options", f"{profit.vested_options_count:,} / {grant.total_options:,}")
    table.add_row("Years completed", f"{profit.completed_periods} / {profit.total_periods}")
    table.add_row("Tranches vested", f"{profit.effective_periods} × {profit.per_period_count:,}")
    table.add_row("Strike price", f"{cur}{grant.strike_price:,.2f}")
    table.add_row("Gross profit", f"{cur}{profit.gross_profit:,.2f}")
    table.add_row(f"Tax ({grant.tax_rate * 100:g}%)", f"{cur}{profit.gross_profit - profit.net_profit:,.2f}")
    table.add_row("Net profit", f"[{net_style}]{cur}{profit.net_profit:,.2f}[/{net_style}]")
    console.print(table)

    console.print("[cyan]Formula[/cyan]")
    console.print(f"[dim]{format_formula(grant, quote, profit)}[/dim]")


def render_schedule(console: Console, grant: GrantConfig, events: List[VestEvent]) -> None:
    """Render a grant's vesting schedule as a table."""
    table = Table(title=f"Vesting schedule: {grant.symbol.upper()}", box=box.SIMPLE_HEAD)
    table.add_column("Period", justify="right")
    table.add_column("Vest date")
    table.add_column("Options", justify="right")
    table.add_column("Cumulative", justify="right")
    table.add_column("Status")

    cumulative = 0
    for event in events:
        cumulative += event.shares
        status = "[green]vested[/green]" if event.vested else "[dim]pending[/dim]"
        table.add_row(
            str(event.period),
            event.vest_date.isoformat(),
            f"{event.shares:,}",
            f"{cumulative:,}",
            status,
        )

    console.print(table)

    unvested = grant.total_options - cumulative
    if unvested:
        console.print(f"[dim]{unvested:,} option(s) from the uneven split never vest.[/dim]")

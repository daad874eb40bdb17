"""Settings commands for TradeJournal CLI.

Shows and updates the projection settings (initial capital, start
date) and the display theme.
"""

from datetime import datetime
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, fail, open_gateway
from tradejournal.formatting import THEMES, format_inr


@click.group()
def settings() -> None:
    """View or change journal settings."""
    pass


@settings.command("show")
def show() -> None:
    """Show the current settings and backend.

    \b
    Examples:
      tradejournal settings show
    """
    from tradejournal.config import backend_kind, get_config_dir, load_config
    from tradejournal.gateway import GatewayError, LocalGateway
    from tradejournal.preferences import load_settings

    gateway = open_gateway()
    current = load_settings(gateway)
    console.push_theme(THEMES[current.theme])

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Setting", style="muted")
    table.add_column("Value")

    table.add_row(
        "Initial capital",
        format_inr(current.initial_capital) if current.initial_capital > 0 else "[muted]not set[/muted]",
    )
    table.add_row("Start date", str(current.start_date) if current.start_date else "[muted]not set[/muted]")
    table.add_row("Theme", current.theme)
    table.add_row("Backend", backend_kind(load_config()))
    table.add_row("User", gateway.user_id)
    table.add_row("Config dir", str(get_config_dir()))

    if isinstance(gateway, LocalGateway):
        try:
            stats = gateway.get_stats()
        except GatewayError as e:
            console.print(f"[yellow]⚠ Could not read database stats: {e}[/yellow]")
        else:
            table.add_row("Days recorded", str(stats.get("journal_entries", 0)))
            table.add_row("Weekly notes", str(stats.get("weekly_journal_notes", 0)))

    console.print(Panel(table, title="[bold cyan]Settings[/bold cyan]", border_style="cyan"))

    if not current.is_complete:
        console.print(
            "[dim]Projected capital needs both an initial capital and a start date.[/dim]"
        )


@settings.command("set")
@click.option("--capital", type=float, default=None, help="Initial capital on the start date.")
@click.option(
    "--start-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="First journal day (YYYY-MM-DD).",
)
@click.option(
    "--theme",
    type=click.Choice(["light", "dark", "system"]),
    default=None,
    help="Display theme.",
)
def set_settings(
    capital: Optional[float],
    start_date: Optional[datetime],
    theme: Optional[str],
) -> None:
    """Update journal settings.

    Only the options given are changed.

    \b
    Examples:
      tradejournal settings set --capital 100000 --start-date 2026-01-05
      tradejournal settings set --theme light
    """
    from tradejournal.gateway import GatewayError
    from tradejournal.preferences import update_settings

    changes = {}
    if capital is not None:
        if capital <= 0:
            fail("[red]Initial capital must be greater than zero.[/red]", title="Invalid Value")
        changes["initial_capital"] = capital
    if start_date is not None:
        changes["start_date"] = start_date.date()
    if theme is not None:
        changes["theme"] = theme

    if not changes:
        fail(
            "[yellow]Nothing to update.[/yellow]\n\n"
            "Use [cyan]--capital[/cyan], [cyan]--start-date[/cyan] or [cyan]--theme[/cyan].",
            title="No Changes",
        )

    gateway = open_gateway()
    try:
        saved = update_settings(gateway, **changes)
    except GatewayError as e:
        fail(f"[red]Failed to save settings:[/red]\n\n{e}")

    if start_date is not None and start_date.weekday() >= 5:
        console.print("[yellow]⚠ Start date falls on a weekend; projections begin the next Monday.[/yellow]")

    console.print(Panel(
        f"Initial capital: {format_inr(saved.initial_capital)}\n"
        f"Start date:      {saved.start_date or '-'}\n"
        f"Theme:           {saved.theme}",
        title="[bold green]Settings saved[/bold green]",
        border_style="green",
    ))

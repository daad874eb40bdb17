"""Journal commands for TradeJournal CLI.

Shows the monthly journal table and records days and weekly notes.
"""

from datetime import date
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, fail, open_gateway, parse_day
from tradejournal.formatting import THEMES, format_inr, pnl_style, status_markup, styled_inr
from tradejournal.models import SELECTABLE_STATUSES, DayStatus

STATUS_CHOICES = [s.value for s in SELECTABLE_STATUSES]


def _load_settings(gateway):
    from tradejournal.preferences import load_settings

    settings = load_settings(gateway)
    console.push_theme(THEMES[settings.theme])
    return settings


def _week_table(week, today: date) -> Table:
    """Build the table for one week of rows."""
    table = Table(
        title=f"Week {week.key} ({week.date_range})",
        title_justify="left",
        show_header=True,
        header_style="header",
        expand=True,
    )

    table.add_column("Day", style="bold", no_wrap=True)
    table.add_column("Capital", justify="right")
    table.add_column("Capital 1%", justify="right", style="muted")
    table.add_column("Target", justify="right", style="muted")
    table.add_column("Max Brok.", justify="right", style="muted")
    table.add_column("Max SL", justify="right", style="muted")
    table.add_column("Status")
    table.add_column("Profit", justify="right")
    table.add_column("Brokerage", justify="right")
    table.add_column("Brok. %", justify="right", style="muted")
    table.add_column("Profit %", justify="right")

    for row in week.rows:
        cells = row.display()
        profit_pct = cells["profit_percent"]
        style = pnl_style(row.net_profit)
        if profit_pct and style:
            profit_pct = f"[{style}]{profit_pct}[/{style}]"

        table.add_row(
            row.date.strftime("%a, %d %b"),
            cells["capital"],
            cells["projected_capital"],
            cells["target"],
            cells["max_brokerage"],
            cells["max_stop_loss"],
            status_markup(row.status),
            cells["profit"],
            cells["brokerage"],
            cells["brokerage_percent"],
            profit_pct,
            style="today" if row.date == today else None,
        )

    return table


@click.command()
@click.argument("month_arg", metavar="[YYYY-MM]", required=False)
def month(month_arg: Optional[str]) -> None:
    """Display the journal for a month.

    Shows every trading day with its capital, projected capital,
    risk limits, status and results, grouped by week with weekly
    totals and notes.

    \b
    Examples:
      tradejournal month           # Current month
      tradejournal month 2026-01   # January 2026
    """
    from tradejournal.board import load_month
    from tradejournal.dates import can_navigate_to, parse_month
    from tradejournal.gateway import GatewayError
    from tradejournal.quotes import random_quote

    try:
        target = parse_month(month_arg) if month_arg else date.today().replace(day=1)
    except ValueError as e:
        fail(f"[red]{e}[/red]")

    gateway = open_gateway()
    settings = _load_settings(gateway)

    if not can_navigate_to(target, settings.start_date):
        fail(
            f"[red]{target:%B %Y} is before your journal start date "
            f"({settings.start_date}).[/red]",
            title="Out of Range",
        )

    try:
        board = load_month(gateway, target, settings)
    except GatewayError as e:
        fail(f"[red]Failed to fetch journal entries:[/red]\n\n{e}")

    console.print(Panel(
        f"[bold]{board.title}[/bold]\n\n"
        f"Realized Profit: {styled_inr(board.totals.realized_profit)}\n"
        f"Brokerage:       {format_inr(board.totals.total_brokerage)}",
        title="[bold cyan]Trading Journal[/bold cyan]",
        border_style="cyan",
    ))

    if not board.weeks:
        console.print(Panel(
            "[dim]No trading days in this month[/dim]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return

    today = date.today()
    for week in board.weeks:
        console.print(_week_table(week, today))
        console.print(
            f"  [bold]Realized Profit:[/bold] {styled_inr(week.totals.realized_profit)}"
            f"   [bold]Brokerage:[/bold] {format_inr(week.totals.total_brokerage)}"
        )
        if week.note:
            console.print(Panel(
                week.note,
                title="[dim]Weekly Notes & Lessons[/dim]",
                title_align="left",
                border_style="dim",
            ))
        console.print()

    if not settings.is_complete:
        console.print(
            "[dim]Set your initial capital and start date with "
            "[cyan]tradejournal settings set[/cyan] to see projected capital.[/dim]"
        )
    if board.can_go_back:
        console.print("[dim]Use [cyan]tradejournal month YYYY-MM[/cyan] to view other months.[/dim]")

    console.print(f"\n[muted][italic]“{random_quote()}”[/italic][/muted]")


def _status_prompt(existing) -> tuple[list[str], str]:
    """Choices and default for the status prompt.

    A stored status that is not selectable is offered as ``unknown``
    so pressing Enter keeps it.
    """
    choices = STATUS_CHOICES + [""]
    status = existing.status if existing else None
    if status is None:
        return choices, ""
    if status is DayStatus.UNKNOWN:
        choices.append(status.value)
    return choices, status.value


def _prompt_fields(existing) -> dict:
    """Interactively ask for every field, defaulting to stored values."""

    def _default(value):
        return "" if value is None else f"{value:g}"

    status_choices, status_default = _status_prompt(existing)

    return {
        "capital": click.prompt(
            "Capital", default=_default(existing.capital if existing else None), show_default=True
        ),
        "status": click.prompt(
            "Status",
            type=click.Choice(status_choices),
            default=status_default,
            show_choices=True,
        ),
        "profit": click.prompt(
            "Profit", default=_default(existing.profit if existing else None), show_default=True
        ),
        "brokerage": click.prompt(
            "Brokerage", default=_default(existing.brokerage if existing else None), show_default=True
        ),
    }


@click.command()
@click.argument("day", metavar="[DATE]", required=False)
@click.option("--capital", type=str, default=None, help="Capital for the day.")
@click.option("--profit", type=str, default=None, help="Gross profit (negative for a loss).")
@click.option("--brokerage", type=str, default=None, help="Brokerage and charges.")
@click.option(
    "--status",
    type=click.Choice(STATUS_CHOICES, case_sensitive=False),
    default=None,
    help="Day status.",
)
def log(
    day: Optional[str],
    capital: Optional[str],
    profit: Optional[str],
    brokerage: Optional[str],
    status: Optional[str],
) -> None:
    """Record or update a trading day.

    DATE is YYYY-MM-DD and defaults to today. Without options, each
    field is prompted with its stored value as default. Pass an empty
    string to clear an amount.

    \b
    Examples:
      tradejournal log --capital 100000 --profit 1500 --brokerage 120 --status target_achieved
      tradejournal log 2026-01-19 --status market_holiday
      tradejournal log 2026-01-19          # Interactive
    """
    from tradejournal.board import save_day, validate_day
    from tradejournal.gateway import GatewayError
    from tradejournal.metrics import compute_day

    entry_date = parse_day(day)

    gateway = open_gateway()
    settings = _load_settings(gateway)

    problem = validate_day(entry_date, settings)
    if problem:
        fail(f"[red]{problem}[/red]", title="Invalid Day")

    try:
        stored = gateway.get_entries(entry_date, entry_date)
    except GatewayError as e:
        fail(f"[red]Failed to fetch journal entries:[/red]\n\n{e}")
    existing = stored[0] if stored else None

    if all(v is None for v in (capital, profit, brokerage, status)):
        changes = _prompt_fields(existing)
    else:
        changes = {"capital": capital, "profit": profit, "brokerage": brokerage, "status": status}

    try:
        saved = save_day(gateway, entry_date, existing, **changes)
    except GatewayError as e:
        fail(f"[red]Failed to save row:[/red]\n\n{e}")

    row = compute_day(entry_date, saved, settings).display()
    console.print(Panel(
        f"[bold]{entry_date:%a, %d %b %Y}[/bold]  {status_markup(saved.status)}\n\n"
        f"Capital:    {row['capital'] or '-'}\n"
        f"Target:     {row['target'] or '-'}   Max SL: {row['max_stop_loss'] or '-'}"
        f"   Max Brokerage: {row['max_brokerage'] or '-'}\n"
        f"Profit:     {row['profit'] or '-'}   Brokerage: {row['brokerage'] or '-'}\n"
        f"Net:        {styled_inr(saved.net_profit)}   {row['profit_percent']}",
        title="[bold green]Row saved[/bold green]",
        border_style="green",
    ))


@click.command()
@click.argument("day", metavar="[DATE]", required=False)
@click.argument("text", required=False)
def note(day: Optional[str], text: Optional[str]) -> None:
    """Write the notes and lessons for a week.

    DATE is any day in the week (YYYY-MM-DD, default today). Without
    TEXT, your editor opens with the current note.

    \b
    Examples:
      tradejournal note 2026-01-19 "Stuck to the plan, no revenge trades"
      tradejournal note                 # Edit this week's note
    """
    from tradejournal.board import save_note
    from tradejournal.dates import monday_of, week_key
    from tradejournal.gateway import GatewayError

    note_date = parse_day(day)
    key = week_key(note_date)
    monday = monday_of(note_date)

    gateway = open_gateway()

    if text is None:
        try:
            current = gateway.get_weekly_notes([key])
        except GatewayError as e:
            fail(f"[red]Failed to fetch weekly notes:[/red]\n\n{e}")
        edited = click.edit(current[0].note if current else "")
        if edited is None:
            console.print("[yellow]Note unchanged[/yellow]")
            return
        text = edited.strip()

    try:
        save_note(gateway, key, monday, text)
    except GatewayError as e:
        fail(f"[red]Failed to save note:[/red]\n\n{e}")

    console.print(f"[green]✓ Saved note for week {key} (from {monday:%b %d})[/green]")


@click.command()
def quote() -> None:
    """Show a trading quote."""
    from tradejournal.quotes import random_quote

    console.print(Panel(
        f"[italic]{random_quote()}[/italic]",
        title="[bold cyan]Quote of the Day[/bold cyan]",
        border_style="cyan",
    ))

"""Insights commands for TradeJournal CLI.

Summarizes the whole journal: totals, win rate, streaks, best and
worst days and weekly/monthly results. Also exports the data to CSV.
"""

from pathlib import Path

import click
from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, fail, open_gateway
from tradejournal.formatting import THEMES, format_inr, pnl_style, styled_inr


def _fetch_entries(gateway):
    from tradejournal.gateway import GatewayError

    try:
        return gateway.get_all_entries()
    except GatewayError as e:
        fail(f"[red]Failed to fetch journal entries:[/red]\n\n{e}")


def _card(title: str, value: str, caption: str = "") -> Panel:
    body = f"[bold]{value}[/bold]"
    if caption:
        body += f"\n[muted]{caption}[/muted]"
    return Panel(body, title=f"[muted]{title}[/muted]", border_style="cyan", width=26)


def _days_table(title: str, results) -> Table:
    table = Table(title=title, title_justify="left", header_style="header")
    table.add_column("#", style="muted", justify="right")
    table.add_column("Date")
    table.add_column("Net P&L", justify="right")

    for i, result in enumerate(results, start=1):
        table.add_row(str(i), result.date.strftime("%a, %d %b %Y"), styled_inr(result.net_profit))

    if not results:
        table.add_row("", "[muted]No days yet[/muted]", "")
    return table


def _buckets_table(title: str, buckets, limit: int) -> Table:
    table = Table(title=title, title_justify="left", header_style="header")
    table.add_column("Period")
    table.add_column("Days", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Brokerage", justify="right")
    table.add_column("Net", justify="right")

    for bucket in buckets[-limit:]:
        table.add_row(
            bucket.label,
            str(bucket.days),
            format_inr(bucket.profit),
            format_inr(bucket.brokerage),
            styled_inr(bucket.net_profit),
        )
    return table


def _streak_range(start, end) -> str:
    if start is None:
        return ""
    if start == end:
        return f"{start:%b %d}"
    return f"{start:%b %d} - {end:%b %d}"


@click.command()
@click.option(
    "--top",
    type=click.IntRange(min=1),
    default=5,
    show_default=True,
    help="Days listed in top wins/losses.",
)
@click.option(
    "--weeks", type=click.IntRange(min=1), default=8, show_default=True, help="Recent weeks to show."
)
@click.option(
    "--months", type=click.IntRange(min=1), default=6, show_default=True, help="Recent months to show."
)
def insights(top: int, weeks: int, months: int) -> None:
    """Show performance insights for the whole journal.

    \b
    Examples:
      tradejournal insights
      tradejournal insights --top 10 --weeks 12
    """
    from tradejournal.metrics import bucket_by_month, bucket_by_week, compute_streaks, summarize
    from tradejournal.preferences import load_settings

    gateway = open_gateway()
    settings = load_settings(gateway)
    console.push_theme(THEMES[settings.theme])

    entries = _fetch_entries(gateway)

    if not entries:
        console.print(Panel(
            "[dim]No journal entries yet.[/dim]\n\n"
            "Record a day with [cyan]tradejournal log[/cyan] to see insights.",
            title="[bold]Insights[/bold]",
            border_style="dim",
        ))
        return

    summary = summarize(entries, top=top)
    streaks = compute_streaks(entries)

    win_style = "profit" if summary.win_rate >= 50 else "loss"
    cards = [
        _card("Realized Profit", styled_inr(summary.realized_profit)),
        _card(
            "Win Rate",
            f"[{win_style}]{summary.win_rate:.1f}%[/{win_style}]",
            f"{summary.win_days} of {summary.trading_days} days",
        ),
        _card("Avg Daily P&L", styled_inr(summary.avg_daily_profit), "per trading day"),
        _card("Total Brokerage", format_inr(summary.total_brokerage)),
    ]
    console.print(Columns(cards))

    # Streaks
    if streaks.last_result is None:
        current = "[muted]No streak yet[/muted]"
    else:
        style = "profit" if streaks.last_result == "win" else "loss"
        noun = "win" if streaks.last_result == "win" else "loss"
        current = f"[{style}]{streaks.current} day {noun} streak[/{style}]"

    console.print(Panel(
        f"Current:          {current}\n"
        f"Longest winning:  [profit]{streaks.max_win}[/profit] days"
        f"  [muted]{_streak_range(streaks.max_win_start, streaks.max_win_end)}[/muted]\n"
        f"Longest losing:   [loss]{streaks.max_loss}[/loss] days"
        f"  [muted]{_streak_range(streaks.max_loss_start, streaks.max_loss_end)}[/muted]",
        title="[bold]Streaks[/bold]",
        border_style="cyan",
    ))

    best, worst = summary.best_day, summary.worst_day
    console.print(Panel(
        f"Best day:   {best.date:%a, %d %b %Y}  {styled_inr(best.net_profit)}\n"
        f"Worst day:  {worst.date:%a, %d %b %Y}  {styled_inr(worst.net_profit)}",
        title="[bold]Best & Worst[/bold]",
        border_style="cyan",
    ))

    console.print(Columns([
        _days_table("Top Winning Days", summary.top_wins),
        _days_table("Top Losing Days", summary.top_losses),
    ]))

    console.print(_buckets_table("Weekly Summary", bucket_by_week(entries), weeks))
    console.print(_buckets_table("Monthly Summary", bucket_by_month(entries), months))

    net_style = pnl_style(summary.realized_profit) or "muted"
    console.print(
        f"\n[{net_style}]{len(entries)} days recorded, "
        f"{summary.trading_days} trading days[/{net_style}]"
    )


@click.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--by",
    "granularity",
    type=click.Choice(["day", "week", "month"]),
    default="day",
    show_default=True,
    help="Row granularity.",
)
def export(path: Path, granularity: str) -> None:
    """Export the journal to a CSV file.

    \b
    Examples:
      tradejournal export journal.csv
      tradejournal export weekly.csv --by week
    """
    from tradejournal.metrics import bucket_by_month, bucket_by_week
    from tradejournal.metrics.series import buckets_frame, daily_series, series_frame

    gateway = open_gateway()
    entries = _fetch_entries(gateway)

    if granularity == "day":
        df = series_frame(daily_series(entries))
    elif granularity == "week":
        df = buckets_frame(bucket_by_week(entries))
    else:
        df = buckets_frame(bucket_by_month(entries))

    try:
        df.to_csv(path)
    except OSError as e:
        fail(f"[red]Could not write {path}:[/red]\n\n{e}")

    console.print(f"[green]✓ Exported {len(df)} rows to {path}[/green]")

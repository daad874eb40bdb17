"""Aggregate statistics over journal entries.

The same profit/brokerage reduction is used for a week, a month and
the whole journal, so realized profit is consistent across
granularities.
"""

from datetime import date
from datetime import date as date_type
from typing import Callable, Iterable, Optional

from pydantic import BaseModel, Field

from tradejournal.dates import monday_of, month_key, week_key
from tradejournal.models import JournalEntry

TOP_DAYS = 5


class Totals(BaseModel):
    """Summed profit and brokerage for a set of days."""

    total_profit: float = 0.0
    total_brokerage: float = 0.0

    model_config = {"frozen": True}

    @property
    def realized_profit(self) -> float:
        return self.total_profit - self.total_brokerage


class DayResult(BaseModel):
    """Net profit of a single day, used in leaderboards."""

    date: date_type
    net_profit: float
    status: Optional[str] = None

    model_config = {"frozen": True}


class Summary(BaseModel):
    """Overall statistics for a set of journal entries."""

    totals: Totals = Field(default_factory=Totals)
    trading_days: int = Field(default=0, ge=0)
    win_days: int = Field(default=0, ge=0)
    win_rate: float = Field(default=0.0, ge=0, le=100)
    avg_daily_profit: float = 0.0
    best_day: Optional[DayResult] = None
    worst_day: Optional[DayResult] = None
    top_wins: list[DayResult] = Field(default_factory=list)
    top_losses: list[DayResult] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def realized_profit(self) -> float:
        return self.totals.realized_profit

    @property
    def total_brokerage(self) -> float:
        return self.totals.total_brokerage


class Bucket(BaseModel):
    """Totals for one week or month."""

    key: str
    label: str
    start: date
    days: int = Field(default=0, ge=0)
    totals: Totals = Field(default_factory=Totals)

    model_config = {"frozen": True}

    @property
    def profit(self) -> float:
        return self.totals.total_profit

    @property
    def brokerage(self) -> float:
        return self.totals.total_brokerage

    @property
    def net_profit(self) -> float:
        return self.totals.realized_profit


def _sorted(entries: Iterable[JournalEntry]) -> list[JournalEntry]:
    if isinstance(entries, dict):
        entries = entries.values()
    return sorted(entries, key=lambda e: e.date)


def compute_totals(entries: Iterable[JournalEntry]) -> Totals:
    """Sum profit and brokerage, absent values counting as zero."""
    total_profit = 0.0
    total_brokerage = 0.0
    for entry in _sorted(entries):
        total_profit += entry.profit or 0.0
        total_brokerage += entry.brokerage or 0.0
    return Totals(total_profit=total_profit, total_brokerage=total_brokerage)


def _result(entry: JournalEntry) -> DayResult:
    return DayResult(
        date=entry.date,
        net_profit=entry.net_profit,
        status=entry.status.value if entry.status else None,
    )


def summarize(entries: Iterable[JournalEntry], top: int = TOP_DAYS) -> Summary:
    """Calculate overall journal statistics.

    Args:
        entries: Journal entries (list or mapping of date to entry).
        top: Number of days in the top wins/losses lists.

    Returns:
        Summary. All values are zero or empty when there are no entries.
    """
    ordered = _sorted(entries)
    if not ordered:
        return Summary()

    totals = compute_totals(ordered)
    trading_days = sum(1 for e in ordered if e.is_trading_day)
    win_days = sum(1 for e in ordered if e.status is not None and e.status.is_win)

    win_rate = (win_days / trading_days * 100) if trading_days > 0 else 0.0
    avg_daily_profit = (totals.realized_profit / trading_days) if trading_days > 0 else 0.0

    # Strict comparisons keep the first occurrence on ties
    best = worst = ordered[0]
    for entry in ordered[1:]:
        if entry.net_profit > best.net_profit:
            best = entry
        if entry.net_profit < worst.net_profit:
            worst = entry

    candidates = [e for e in ordered if not e.is_excluded]
    top_wins = sorted(candidates, key=lambda e: e.net_profit, reverse=True)[:top]
    top_losses = sorted(candidates, key=lambda e: e.net_profit)[:top]

    return Summary(
        totals=totals,
        trading_days=trading_days,
        win_days=win_days,
        win_rate=win_rate,
        avg_daily_profit=avg_daily_profit,
        best_day=_result(best),
        worst_day=_result(worst),
        top_wins=[_result(e) for e in top_wins],
        top_losses=[_result(e) for e in top_losses],
    )


def _bucket(
    entries: Iterable[JournalEntry],
    key_fn: Callable[[date], str],
    start_fn: Callable[[date], date],
    label_fn: Callable[[date], str],
) -> list[Bucket]:
    groups: dict[str, list[JournalEntry]] = {}
    for entry in _sorted(entries):
        groups.setdefault(key_fn(entry.date), []).append(entry)

    buckets = []
    for key in sorted(groups):
        start = start_fn(groups[key][0].date)
        buckets.append(Bucket(
            key=key,
            label=label_fn(start),
            start=start,
            days=len(groups[key]),
            totals=compute_totals(groups[key]),
        ))
    return buckets


def bucket_by_week(entries: Iterable[JournalEntry]) -> list[Bucket]:
    """Group entries by ISO week, labelled with the week's Monday."""
    return _bucket(entries, week_key, monday_of, lambda d: d.strftime("%b %d"))


def bucket_by_month(entries: Iterable[JournalEntry]) -> list[Bucket]:
    """Group entries by calendar month."""
    return _bucket(
        entries,
        month_key,
        lambda d: d.replace(day=1),
        lambda d: d.strftime("%b %Y"),
    )

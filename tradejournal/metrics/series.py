"""Time series for charts and exports."""

from datetime import date as date_type
from typing import Iterable

import pandas as pd
from pydantic import BaseModel

from tradejournal.metrics.aggregate import Bucket
from tradejournal.models import JournalEntry


class SeriesPoint(BaseModel):
    """One day on the capital/profit charts."""

    date: date_type
    label: str
    capital: float
    profit: float
    brokerage: float
    net_profit: float
    cumulative_profit: float
    status: str = ""

    model_config = {"frozen": True}


def daily_series(entries: Iterable[JournalEntry]) -> list[SeriesPoint]:
    """Build the chronological daily series with cumulative net profit."""
    if isinstance(entries, dict):
        entries = entries.values()

    points = []
    cumulative = 0.0
    for entry in sorted(entries, key=lambda e: e.date):
        cumulative += entry.net_profit
        points.append(SeriesPoint(
            date=entry.date,
            label=entry.date.strftime("%b %d"),
            capital=entry.capital or 0.0,
            profit=entry.profit or 0.0,
            brokerage=entry.brokerage or 0.0,
            net_profit=entry.net_profit,
            cumulative_profit=cumulative,
            status=entry.status.value if entry.status else "",
        ))
    return points


def series_frame(points: list[SeriesPoint]) -> pd.DataFrame:
    """Convert daily points into a DataFrame indexed by date."""
    columns = list(SeriesPoint.model_fields)
    df = pd.DataFrame([p.model_dump() for p in points], columns=columns)
    return df.set_index("date")


def buckets_frame(buckets: list[Bucket]) -> pd.DataFrame:
    """Convert weekly or monthly buckets into a DataFrame indexed by key."""
    rows = [
        {
            "key": b.key,
            "label": b.label,
            "start": b.start,
            "days": b.days,
            "profit": b.profit,
            "brokerage": b.brokerage,
            "net_profit": b.net_profit,
        }
        for b in buckets
    ]
    df = pd.DataFrame(
        rows,
        columns=["key", "label", "start", "days", "profit", "brokerage", "net_profit"],
    )
    return df.set_index("key")

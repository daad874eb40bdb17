"""Derived metrics for journal entries."""

from tradejournal.metrics.aggregate import (
    TOP_DAYS,
    Bucket,
    DayResult,
    Summary,
    Totals,
    bucket_by_month,
    bucket_by_week,
    compute_totals,
    summarize,
)
from tradejournal.metrics.daily import (
    DAILY_GROWTH_RATE,
    MAX_BROKERAGE_RATE,
    STOP_LOSS_RATE,
    TARGET_RATE,
    DayMetrics,
    compute_day,
    projected_capital,
)
from tradejournal.metrics.streaks import Streaks, compute_streaks

__all__ = [
    "TOP_DAYS",
    "Bucket",
    "DayResult",
    "Summary",
    "Totals",
    "bucket_by_month",
    "bucket_by_week",
    "compute_totals",
    "summarize",
    "DAILY_GROWTH_RATE",
    "MAX_BROKERAGE_RATE",
    "STOP_LOSS_RATE",
    "TARGET_RATE",
    "DayMetrics",
    "compute_day",
    "projected_capital",
    "Streaks",
    "compute_streaks",
]

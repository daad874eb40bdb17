"""Property-based tests for aggregate journal statistics.

**Feature: trade-journal**

Aggregates are checked against pandas reference computations.
"""

import math
from datetime import date, timedelta

import pandas as pd
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.metrics import (
    bucket_by_month,
    bucket_by_week,
    compute_totals,
    summarize,
)
from tradejournal.metrics.series import buckets_frame, daily_series, series_frame
from tradejournal.models import DayStatus, JournalEntry

BASE = date(2026, 1, 5)

money = st.one_of(st.none(), st.integers(min_value=-50000, max_value=50000).map(float))
fees = st.one_of(st.none(), st.integers(min_value=0, max_value=500).map(float))
status_values = st.sampled_from([s.value for s in DayStatus] + [None])


@st.composite
def journals(draw, max_size=40):
    """Generate entries on distinct dates."""
    offsets = draw(st.lists(
        st.integers(min_value=0, max_value=500),
        unique=True,
        max_size=max_size,
    ))
    return [
        JournalEntry(
            date=BASE + timedelta(days=offset),
            profit=draw(money),
            brokerage=draw(fees),
            status=draw(status_values),
        )
        for offset in offsets
    ]


def _frame(entries) -> pd.DataFrame:
    return pd.DataFrame({
        "date": [e.date for e in entries],
        "profit": [e.profit or 0.0 for e in entries],
        "brokerage": [e.brokerage or 0.0 for e in entries],
        "status": [e.status.value if e.status else None for e in entries],
    })


class TestTotals:
    """
    **Feature: trade-journal, Property 10: Totals Consistency**

    *For any* set of entries, realized profit equals total profit
    minus total brokerage, absent values counting as zero.
    """

    @given(journals())
    def test_matches_pandas_sum(self, entries):
        totals = compute_totals(entries)
        df = _frame(entries)

        assert totals.total_profit == pytest.approx(df["profit"].sum())
        assert totals.total_brokerage == pytest.approx(df["brokerage"].sum())
        assert totals.realized_profit == pytest.approx(df["profit"].sum() - df["brokerage"].sum())

    @given(journals())
    def test_buckets_partition_totals(self, entries):
        """Weekly and monthly buckets sum back to the overall totals."""
        overall = compute_totals(entries).realized_profit

        weekly = sum(b.net_profit for b in bucket_by_week(entries))
        monthly = sum(b.net_profit for b in bucket_by_month(entries))

        assert weekly == pytest.approx(overall)
        assert monthly == pytest.approx(overall)


class TestSummary:
    """
    **Feature: trade-journal, Property 11: Summary Statistics**

    *For any* set of entries, trading days count set trading statuses,
    win rate is wins over trading days, and no value is NaN.
    """

    def test_empty(self):
        summary = summarize([])
        assert summary.realized_profit == 0
        assert summary.trading_days == 0
        assert summary.win_rate == 0
        assert summary.avg_daily_profit == 0
        assert summary.best_day is None
        assert summary.worst_day is None
        assert summary.top_wins == []
        assert summary.top_losses == []

    @given(journals())
    @settings(max_examples=150)
    def test_counts_and_rates(self, entries):
        summary = summarize(entries)

        trading = [e for e in entries if e.status is not None and e.status.is_trading]
        wins = [e for e in entries if e.status is DayStatus.TARGET_ACHIEVED]

        assert summary.trading_days == len(trading)
        assert summary.win_days == len(wins)
        assert 0 <= summary.win_rate <= 100
        for value in (summary.win_rate, summary.avg_daily_profit, summary.realized_profit):
            assert not math.isnan(value)

        if trading:
            assert summary.win_rate == pytest.approx(len(wins) / len(trading) * 100)
            assert summary.avg_daily_profit == pytest.approx(
                summary.realized_profit / len(trading)
            )
        else:
            assert summary.win_rate == 0
            assert summary.avg_daily_profit == 0

    @given(journals(max_size=30))
    def test_best_and_worst(self, entries):
        summary = summarize(entries)
        if not entries:
            return

        nets = [e.net_profit for e in entries]
        assert summary.best_day.net_profit == max(nets)
        assert summary.worst_day.net_profit == min(nets)

        ordered = sorted(entries, key=lambda e: e.date)
        first_best = next(e for e in ordered if e.net_profit == max(nets))
        assert summary.best_day.date == first_best.date

    @given(journals())
    def test_top_lists(self, entries):
        summary = summarize(entries, top=5)
        eligible = [e for e in entries if not e.is_excluded]

        assert len(summary.top_wins) == min(5, len(eligible))
        assert len(summary.top_losses) == min(5, len(eligible))

        wins = [r.net_profit for r in summary.top_wins]
        losses = [r.net_profit for r in summary.top_losses]
        assert wins == sorted(wins, reverse=True)
        assert losses == sorted(losses)

        excluded = {e.date for e in entries if e.is_excluded}
        assert not any(r.date in excluded for r in summary.top_wins + summary.top_losses)

        expected = sorted((e.net_profit for e in eligible), reverse=True)[:5]
        assert wins == expected

    def test_holiday_counts_in_totals_but_not_days(self):
        entries = [
            JournalEntry(date=date(2026, 1, 5), profit=1000, brokerage=100, status="target_achieved"),
            JournalEntry(date=date(2026, 1, 6), profit=-400, brokerage=50, status="losing"),
            JournalEntry(date=date(2026, 1, 7), profit=200, brokerage=0, status="market_holiday"),
        ]
        summary = summarize(entries)

        assert summary.trading_days == 2
        assert summary.win_days == 1
        assert summary.win_rate == pytest.approx(50.0)
        assert summary.realized_profit == pytest.approx(650)
        assert summary.avg_daily_profit == pytest.approx(325)
        assert [r.date for r in summary.top_wins] == [date(2026, 1, 5), date(2026, 1, 6)]


class TestBuckets:
    """
    **Feature: trade-journal, Property 12: Weekly and Monthly Buckets**

    *For any* set of entries, buckets match a pandas groupby on ISO
    week or calendar month.
    """

    @given(journals())
    def test_weekly_matches_groupby(self, entries):
        buckets = bucket_by_week(entries)
        df = _frame(entries)
        if df.empty:
            assert buckets == []
            return

        iso = pd.to_datetime(df["date"]).dt.isocalendar()
        df["key"] = iso["year"].astype(str) + "-W" + iso["week"].astype(str).str.zfill(2)
        df["net"] = df["profit"] - df["brokerage"]
        expected = df.groupby("key")["net"].sum()

        assert [b.key for b in buckets] == list(expected.index)
        for bucket in buckets:
            assert bucket.net_profit == pytest.approx(expected[bucket.key])
            assert bucket.start.weekday() == 0

    @given(journals())
    def test_monthly_matches_groupby(self, entries):
        buckets = bucket_by_month(entries)
        df = _frame(entries)
        if df.empty:
            assert buckets == []
            return

        df["key"] = pd.to_datetime(df["date"]).dt.strftime("%Y-%m")
        grouped = df.groupby("key")
        expected_profit = grouped["profit"].sum()
        expected_days = grouped.size()

        assert [b.key for b in buckets] == list(expected_profit.index)
        for bucket in buckets:
            assert bucket.profit == pytest.approx(expected_profit[bucket.key])
            assert bucket.days == expected_days[bucket.key]
            assert bucket.start.day == 1

    def test_labels(self):
        entries = [JournalEntry(date=date(2026, 1, 21), profit=100)]
        assert bucket_by_week(entries)[0].label == "Jan 19"
        assert bucket_by_month(entries)[0].label == "Jan 2026"


class TestSeries:
    """
    **Feature: trade-journal, Property 13: Cumulative Series**

    *For any* entries, the cumulative profit series matches a pandas
    cumulative sum over the date-sorted net profits.
    """

    @given(journals())
    def test_cumulative_matches_cumsum(self, entries):
        points = daily_series(entries)
        df = _frame(entries).sort_values("date")
        expected = (df["profit"] - df["brokerage"]).cumsum().tolist()

        assert [p.date for p in points] == sorted(e.date for e in entries)
        assert [p.cumulative_profit for p in points] == pytest.approx(expected)

    def test_frames(self):
        entries = [
            JournalEntry(date=date(2026, 1, 6), profit=500, brokerage=20, status="target_achieved"),
            JournalEntry(date=date(2026, 1, 5), profit=-100, brokerage=10, status="losing"),
        ]
        df = series_frame(daily_series(entries))

        assert list(df.index) == [date(2026, 1, 5), date(2026, 1, 6)]
        assert df["cumulative_profit"].tolist() == [-110.0, 370.0]
        assert df["status"].tolist() == ["losing", "target_achieved"]

        weekly = buckets_frame(bucket_by_week(entries))
        assert list(weekly.index) == ["2026-W02"]
        assert weekly.loc["2026-W02", "net_profit"] == pytest.approx(370)

    def test_empty_frames(self):
        assert series_frame([]).empty
        assert buckets_frame([]).empty

"""Property-based tests for per-day metrics and streaks.

**Feature: trade-journal**
"""

import math
from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.dates import weekdays_between
from tradejournal.metrics import compute_day, compute_streaks, projected_capital
from tradejournal.models import DayStatus, JournalEntry, Settings

START = date(2026, 1, 5)  # Monday
CONFIGURED = Settings(initial_capital=100000, start_date=START)

amounts = st.one_of(
    st.none(),
    st.just(0.0),
    st.floats(min_value=-1e7, max_value=-0.01),
    st.floats(min_value=0.01, max_value=1e7),
)
capitals = st.one_of(
    st.none(),
    st.floats(min_value=-1e3, max_value=0),
    st.floats(min_value=1, max_value=1e8),
)


class TestRiskThresholds:
    """
    **Feature: trade-journal, Property 7: Risk Thresholds**

    *For any* capital, target is 1%, max stop loss 2% and max
    brokerage 0.2% of capital, and all are zero for absent or
    non-positive capital.
    """

    @given(capital=capitals, profit=amounts, brokerage=amounts)
    @settings(max_examples=200)
    def test_thresholds(self, capital, profit, brokerage):
        entry = JournalEntry(date=START, capital=capital, profit=profit, brokerage=brokerage)
        row = compute_day(START, entry, CONFIGURED)

        cap = capital if capital is not None and capital > 0 else 0.0
        assert row.target == pytest.approx(cap * 0.01)
        assert row.max_stop_loss == pytest.approx(cap * 0.02)
        assert row.max_brokerage == pytest.approx(cap * 0.002)
        assert row.net_profit == (profit or 0.0) - (brokerage or 0.0)

    @given(capital=capitals, profit=amounts, brokerage=amounts)
    @settings(max_examples=200)
    def test_percentages_are_finite_or_absent(self, capital, profit, brokerage):
        entry = JournalEntry(date=START, capital=capital, profit=profit, brokerage=brokerage)
        row = compute_day(START, entry, CONFIGURED)

        for value in (row.profit_percent, row.brokerage_percent):
            assert value is None or math.isfinite(value)

        if capital is None or capital <= 0:
            assert row.profit_percent is None
        if not profit:
            assert row.brokerage_percent is None

    @pytest.mark.parametrize("capital,profit,brokerage,field", [
        (1e-310, 1e6, 0.0, "profit_percent"),
        (100000, 1e-310, 1e6, "brokerage_percent"),
    ])
    def test_overflowing_percentages_are_absent(self, capital, profit, brokerage, field):
        entry = JournalEntry(date=START, capital=capital, profit=profit, brokerage=brokerage)
        row = compute_day(START, entry, CONFIGURED)

        assert getattr(row, field) is None
        assert row.display()[field] == ""

    def test_example_row(self):
        entry = JournalEntry(
            date=date(2026, 1, 7),
            capital=100000,
            profit=1500,
            brokerage=120,
            status="target_achieved",
        )
        row = compute_day(entry.date, entry, CONFIGURED)

        assert row.target == pytest.approx(1000)
        assert row.max_stop_loss == pytest.approx(2000)
        assert row.max_brokerage == pytest.approx(200)
        assert row.net_profit == pytest.approx(1380)
        assert row.profit_percent == pytest.approx(1.38)
        assert row.brokerage_percent == pytest.approx(8.0)

        cells = row.display()
        assert cells["target"] == "1000"
        assert cells["profit_percent"] == "1.38%"
        assert cells["brokerage_percent"] == "8.00%"
        assert cells["status"] == "Target Achieved"

    def test_losing_day_keeps_sign_of_brokerage_ratio(self):
        entry = JournalEntry(date=START, capital=50000, profit=-500, brokerage=50)
        row = compute_day(START, entry, CONFIGURED)
        assert row.brokerage_percent == pytest.approx(-10.0)
        assert row.profit_percent == pytest.approx(-1.1)

    def test_empty_day(self):
        row = compute_day(START, None, Settings())
        assert row.target == 0
        assert row.net_profit == 0
        assert row.profit_percent is None
        assert row.projected_capital is None

        cells = row.display()
        assert cells["capital"] == ""
        assert cells["target"] == ""
        assert cells["status"] == ""


class TestProjectedCapital:
    """
    **Feature: trade-journal, Property 8: Projected Capital Curve**

    *For any* day on or after the start date, projected capital is the
    initial capital compounded 1% per weekday since the start date.
    """

    def test_start_date_is_initial_capital(self):
        assert projected_capital(START, CONFIGURED) == pytest.approx(100000)

    def test_examples(self):
        assert projected_capital(date(2026, 1, 6), CONFIGURED) == pytest.approx(101000)
        # Following Monday: five weekdays have passed
        assert projected_capital(date(2026, 1, 12), CONFIGURED) == pytest.approx(100000 * 1.01 ** 5)

    @given(offset=st.integers(min_value=0, max_value=400))
    def test_compounds_by_weekdays(self, offset):
        day = START + timedelta(days=offset)
        k = weekdays_between(START, day)
        assert projected_capital(day, CONFIGURED) == pytest.approx(100000 * 1.01 ** k)

    @given(offset=st.integers(min_value=0, max_value=400))
    def test_non_decreasing(self, offset):
        day = START + timedelta(days=offset)
        assert projected_capital(day + timedelta(days=1), CONFIGURED) >= projected_capital(day, CONFIGURED)

    def test_absent_without_settings_or_before_start(self):
        assert projected_capital(START - timedelta(days=1), CONFIGURED) is None
        assert projected_capital(START, Settings(initial_capital=100000)) is None
        assert projected_capital(START, Settings(start_date=START)) is None

    def test_independent_of_entered_capital(self):
        day = date(2026, 1, 8)
        low = compute_day(day, JournalEntry(date=day, capital=10), CONFIGURED)
        high = compute_day(day, JournalEntry(date=day, capital=10_000_000), CONFIGURED)
        assert low.projected_capital == high.projected_capital


def _entries(statuses, start=START):
    """Build consecutive weekday entries with the given statuses."""
    entries = []
    day = start
    for status in statuses:
        while day.weekday() >= 5:
            day += timedelta(days=1)
        entries.append(JournalEntry(date=day, status=status))
        day += timedelta(days=1)
    return entries


class TestStreaks:
    """
    **Feature: trade-journal, Property 9: Win/Loss Streaks**

    *For any* sequence of days, streaks count consecutive wins or
    losses, skipping non-trading days, and ties report the latest run.
    """

    def test_mixed_sequence(self):
        entries = _entries([
            "target_achieved",
            "target_achieved",
            "market_holiday",
            "target_achieved",
            "losing",
            "losing",
            "target_achieved",
        ])
        s = compute_streaks(entries)

        assert s.max_win == 3
        assert s.max_win_start == entries[0].date
        assert s.max_win_end == entries[3].date
        assert s.max_loss == 2
        assert s.max_loss_start == entries[4].date
        assert s.max_loss_end == entries[5].date
        assert s.last_result == "win"
        assert s.current_win == 1
        assert s.current_loss == 0
        assert s.current == 1

    def test_win_win_loss_win(self):
        entries = _entries(["target_achieved", "target_achieved", "losing", "target_achieved"])
        s = compute_streaks(entries)

        assert (s.max_win, s.max_win_start, s.max_win_end) == (2, entries[0].date, entries[1].date)
        assert (s.max_loss, s.max_loss_start, s.max_loss_end) == (1, entries[2].date, entries[2].date)
        assert s.current_win == 1
        assert s.last_result == "win"

    def test_tie_reports_latest_run(self):
        entries = _entries([
            "target_achieved", "target_achieved", "losing",
            "target_achieved", "target_achieved",
        ])
        s = compute_streaks(entries)
        assert s.max_win == 2
        assert s.max_win_start == entries[3].date
        assert s.max_win_end == entries[4].date

    def test_neutral_days_do_not_break_runs(self):
        entries = _entries(["losing", "target_failed", None, "garbage", "losing"])
        s = compute_streaks(entries)
        assert s.max_loss == 2
        assert s.current_loss == 2
        assert s.last_result == "loss"

    def test_empty(self):
        s = compute_streaks([])
        assert s.max_win == 0
        assert s.max_loss == 0
        assert s.max_win_start is None
        assert s.last_result is None
        assert s.current == 0

    def test_order_independent(self):
        entries = _entries(["losing", "target_achieved", "target_achieved"])
        assert compute_streaks(list(reversed(entries))) == compute_streaks(entries)

    @given(st.lists(st.sampled_from([s.value for s in DayStatus] + [None]), max_size=40))
    @settings(max_examples=200)
    def test_bounds(self, statuses):
        entries = _entries(statuses)
        s = compute_streaks(entries)

        wins = sum(1 for e in entries if e.status is DayStatus.TARGET_ACHIEVED)
        losses = sum(1 for e in entries if e.status is DayStatus.LOSING)
        assert 0 <= s.current_win <= s.max_win <= wins
        assert 0 <= s.current_loss <= s.max_loss <= losses
        assert not (s.current_win and s.current_loss)
        if s.max_win:
            assert s.max_win_start <= s.max_win_end

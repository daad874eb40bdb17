"""Property-based tests for trading calendar helpers.

**Feature: trade-journal**
"""

from datetime import date, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tradejournal.dates import (
    can_navigate_to,
    group_by_week,
    is_weekend,
    legacy_week_keys,
    monday_of,
    month_key,
    parse_month,
    shift_month,
    trading_days,
    week_key,
    weekdays_between,
)

dates = st.dates(min_value=date(2000, 1, 1), max_value=date(2100, 12, 31))


class TestTradingDays:
    """
    **Feature: trade-journal, Property 4: Trading Day Generation**

    *For any* month and start date, trading days are the ordered
    weekdays of that month on or after the start date.
    """

    @given(month=dates, start=st.one_of(st.none(), dates))
    def test_trading_days_are_weekdays_in_month(self, month, start):
        days = trading_days(month, start)

        assert days == sorted(days)
        for day in days:
            assert not is_weekend(day)
            assert (day.year, day.month) == (month.year, month.month)
            if start is not None:
                assert day >= start

    @given(month=dates)
    def test_no_start_date_covers_every_weekday(self, month):
        first = month.replace(day=1)
        expected = []
        current = first
        while current.month == first.month:
            if current.weekday() < 5:
                expected.append(current)
            current += timedelta(days=1)
        assert trading_days(month) == expected

    def test_start_mid_month(self):
        days = trading_days(date(2026, 1, 1), start_date=date(2026, 1, 14))
        assert days[0] == date(2026, 1, 14)
        assert days[-1] == date(2026, 1, 30)

    def test_start_in_later_month(self):
        assert trading_days(date(2026, 1, 1), start_date=date(2026, 2, 2)) == []


class TestWeekdaysBetween:
    """
    **Feature: trade-journal, Property 5: Weekday Counting**

    *For any* two dates, the count equals a day-by-day count of
    weekdays in the half-open range.
    """

    @given(start=dates, span=st.integers(min_value=-10, max_value=800))
    def test_matches_naive_count(self, start, span):
        end = start + timedelta(days=span)
        naive = sum(
            1 for i in range(max(span, 0))
            if (start + timedelta(days=i)).weekday() < 5
        )
        assert weekdays_between(start, end) == naive

    def test_examples(self):
        monday = date(2026, 1, 5)
        assert weekdays_between(monday, monday) == 0
        assert weekdays_between(monday, date(2026, 1, 6)) == 1
        assert weekdays_between(monday, date(2026, 1, 12)) == 5


class TestWeekKeys:
    """
    **Feature: trade-journal, Property 6: ISO Week Keys**

    *For any* date, the week key is the zero-padded ISO week and every
    day of a Monday-Sunday week shares it.
    """

    @given(dates)
    def test_week_shares_key(self, day):
        monday = monday_of(day)
        assert monday.weekday() == 0
        assert monday <= day < monday + timedelta(days=7)
        assert week_key(day) == week_key(monday)

    @pytest.mark.parametrize("day,expected", [
        (date(2026, 1, 1), "2026-W01"),
        (date(2026, 1, 19), "2026-W04"),
        (date(2027, 1, 1), "2026-W53"),
        (date(2024, 12, 30), "2025-W01"),
    ])
    def test_examples(self, day, expected):
        assert week_key(day) == expected

    @pytest.mark.parametrize("key,expected", [
        ("2026-W04", ["2026-W4"]),
        ("2026-W01", ["2025-W1", "2026-W1"]),
        ("2026-W53", ["2026-W53", "2027-W53"]),
        ("2025-W01", ["2024-W1", "2025-W1"]),
    ])
    def test_legacy_week_keys(self, key, expected):
        assert legacy_week_keys(key) == expected

    @given(dates.filter(lambda d: not is_weekend(d)))
    def test_legacy_key_of_weekday_is_found(self, day):
        legacy = f"{day.year}-W{day.isocalendar()[1]}"
        assert legacy in legacy_week_keys(week_key(day))

    @pytest.mark.parametrize("key", ["2026-04", "2026-W60", "W04"])
    def test_legacy_week_keys_rejects_bad_keys(self, key):
        with pytest.raises(ValueError):
            legacy_week_keys(key)

    def test_group_by_week(self):
        days = trading_days(date(2026, 1, 1))
        groups = group_by_week(days)

        assert [k for k, _ in groups] == [
            "2026-W01", "2026-W02", "2026-W03", "2026-W04", "2026-W05",
        ]
        assert groups[0][1] == [date(2026, 1, 1), date(2026, 1, 2)]
        assert sum(len(d) for _, d in groups) == len(days)

    def test_month_key(self):
        assert month_key(date(2026, 3, 9)) == "2026-03"


class TestMonthNavigation:
    def test_parse_month(self):
        assert parse_month("2026-01") == date(2026, 1, 1)
        with pytest.raises(ValueError):
            parse_month("2026-13")
        with pytest.raises(ValueError):
            parse_month("january")

    @given(day=dates, months=st.integers(min_value=-120, max_value=120))
    def test_shift_month_roundtrip(self, day, months):
        shifted = shift_month(day, months)
        assert shifted.day == 1
        assert shift_month(shifted, -months) == day.replace(day=1)

    def test_can_navigate_to(self):
        start = date(2026, 1, 14)
        assert can_navigate_to(date(2026, 1, 1), start)
        assert can_navigate_to(date(2026, 5, 1), start)
        assert not can_navigate_to(date(2025, 12, 1), start)
        assert can_navigate_to(date(1999, 1, 1), None)

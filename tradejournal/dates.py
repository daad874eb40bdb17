"""Trading calendar helpers.

Generates the trading days shown for a month and the ISO week and
month keys used to bucket journal entries. Weekends are never trading
days; exchange holidays are recorded by the user as a day status.
"""

from calendar import monthrange
from datetime import date, timedelta
from typing import Iterable, Optional


def is_weekend(day: date) -> bool:
    """Check whether a date falls on Saturday or Sunday."""
    return day.weekday() >= 5


def month_start(day: date) -> date:
    """First day of the month containing ``day``."""
    return day.replace(day=1)


def month_end(day: date) -> date:
    """Last day of the month containing ``day``."""
    return day.replace(day=monthrange(day.year, day.month)[1])


def shift_month(day: date, months: int) -> date:
    """Return the first day of the month ``months`` away from ``day``."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def parse_month(value: str) -> date:
    """Parse a ``YYYY-MM`` string into the first day of that month.

    Raises:
        ValueError: If the string is not a valid month.
    """
    try:
        year, month = value.strip().split("-")
        return date(int(year), int(month), 1)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid month '{value}'. Use YYYY-MM") from e


def trading_days(month: date, start_date: Optional[date] = None) -> list[date]:
    """Get the weekdays of a month on or after the start date.

    Args:
        month: Any date within the month to generate.
        start_date: Optional journal start date. Days before it are dropped.

    Returns:
        Ordered list of trading days. Empty when the start date lies in
        a later month.
    """
    first = month_start(month)
    last = month_end(month)

    days = []
    current = first
    while current <= last:
        if not is_weekend(current) and (start_date is None or current >= start_date):
            days.append(current)
        current += timedelta(days=1)
    return days


def can_navigate_to(month: date, start_date: Optional[date]) -> bool:
    """Check whether a month may be displayed.

    Months entirely before the start date's month are refused.
    """
    if start_date is None:
        return True
    return month_start(month) >= month_start(start_date)


def weekdays_between(start: date, end: date) -> int:
    """Count Monday-Friday dates in the half-open range ``[start, end)``."""
    if end <= start:
        return 0

    total_days = (end - start).days
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * 5

    weekday = start.weekday()
    for offset in range(remainder):
        if (weekday + offset) % 7 < 5:
            count += 1
    return count


def week_key(day: date) -> str:
    """ISO week key, e.g. ``2026-W03``."""
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def legacy_week_keys(key: str) -> list[str]:
    """Older spellings of an ISO week key.

    Notes saved by the web journal used the calendar year of the day on
    screen and an unpadded week number, so ``2026-W01`` (which starts on
    2025-12-29) may be stored as ``2025-W1`` or ``2026-W1``.

    Raises:
        ValueError: If ``key`` is not a valid ``YYYY-Www`` key.
    """
    year, sep, week = key.partition("-W")
    if not sep:
        raise ValueError(f"Invalid week key: {key}")
    monday = date.fromisocalendar(int(year), int(week), 1)
    years = sorted({(monday + timedelta(days=offset)).year for offset in range(5)})
    return [f"{y}-W{int(week)}" for y in years]


def monday_of(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def month_key(day: date) -> str:
    """Calendar month key, e.g. ``2026-01``."""
    return f"{day.year:04d}-{day.month:02d}"


def group_by_week(days: Iterable[date]) -> list[tuple[str, list[date]]]:
    """Group dates by ISO week.

    Returns:
        List of ``(week_key, days)`` pairs ordered by the first day of
        each week.
    """
    groups: dict[str, list[date]] = {}
    for day in sorted(days):
        groups.setdefault(week_key(day), []).append(day)
    return sorted(groups.items(), key=lambda item: item[1][0])

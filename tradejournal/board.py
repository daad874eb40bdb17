"""Month board: the journal table for one month.

Rows are the trading days of the month grouped by ISO week. Each week
carries its totals and note; the board carries the month totals.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from tradejournal.dates import (
    can_navigate_to,
    group_by_week,
    monday_of,
    month_start,
    shift_month,
    trading_days,
)
from tradejournal.gateway import JournalGateway
from tradejournal.metrics import DayMetrics, Totals, compute_day, compute_totals
from tradejournal.models import JournalEntry, Settings, WeeklyNote


class WeekBlock(BaseModel):
    """One ISO week of rows with totals and note."""

    key: str
    days: list[date]
    rows: list[DayMetrics]
    totals: Totals = Field(default_factory=Totals)
    note: str = ""

    model_config = {"frozen": True}

    @property
    def monday(self) -> date:
        return monday_of(self.days[0])

    @property
    def date_range(self) -> str:
        """Label such as ``Jan 19 - Jan 23``."""
        return f"{self.days[0]:%b %d} - {self.days[-1]:%b %d}"


class MonthBoard(BaseModel):
    """Journal table model for a month."""

    month: date
    weeks: list[WeekBlock] = Field(default_factory=list)
    totals: Totals = Field(default_factory=Totals)
    can_go_back: bool = True

    model_config = {"frozen": True}

    @property
    def title(self) -> str:
        return self.month.strftime("%B %Y")

    @property
    def rows(self) -> list[DayMetrics]:
        return [row for week in self.weeks for row in week.rows]


def load_month(gateway: JournalGateway, month: date, settings: Settings) -> MonthBoard:
    """Fetch entries and notes for a month and build the board.

    Args:
        gateway: Journal gateway.
        month: Any date within the month.
        settings: User settings (start date and projection inputs).

    Returns:
        MonthBoard. Empty when the month has no trading days.

    Raises:
        GatewayError: If entries cannot be fetched.
    """
    first = month_start(month)
    can_go_back = can_navigate_to(shift_month(first, -1), settings.start_date)

    days = trading_days(first, settings.start_date)
    if not days:
        return MonthBoard(month=first, can_go_back=can_go_back)

    entries = {e.date: e for e in gateway.get_entries(days[0], days[-1])}

    groups = group_by_week(days)
    notes = {n.week_key: n.note for n in gateway.get_weekly_notes([k for k, _ in groups])}

    weeks = []
    for key, week_days in groups:
        week_entries = [entries[d] for d in week_days if d in entries]
        weeks.append(WeekBlock(
            key=key,
            days=week_days,
            rows=[compute_day(d, entries.get(d), settings) for d in week_days],
            totals=compute_totals(week_entries),
            note=notes.get(key, ""),
        ))

    return MonthBoard(
        month=first,
        weeks=weeks,
        totals=compute_totals([entries[d] for d in days if d in entries]),
        can_go_back=can_go_back,
    )


def validate_day(day: date, settings: Settings) -> Optional[str]:
    """Check that a day can be recorded.

    Returns:
        An error message, or None if the day is valid.
    """
    if day.weekday() >= 5:
        return f"{day:%a, %d %b %Y} is a weekend"
    if settings.start_date and day < settings.start_date:
        return f"{day} is before the journal start date {settings.start_date}"
    return None


def save_day(
    gateway: JournalGateway,
    day: date,
    existing: Optional[JournalEntry] = None,
    **changes,
) -> JournalEntry:
    """Merge edits into the existing entry for a day and upsert it.

    Args:
        gateway: Journal gateway.
        day: Day being edited.
        existing: Stored entry for the day, if any.
        **changes: Field values to set (capital, profit, brokerage, status).

    Returns:
        The stored entry.
    """
    data = existing.model_dump() if existing else {}
    data.update({k: v for k, v in changes.items() if v is not None})
    data["date"] = day
    return gateway.upsert_entry(JournalEntry(**data))


def save_note(gateway: JournalGateway, week_key: str, monday: date, text: str) -> WeeklyNote:
    """Save the note for a week."""
    return gateway.save_weekly_note(week_key, monday, text)

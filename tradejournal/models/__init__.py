"""Data models for TradeJournal."""

from tradejournal.models.status import (
    NON_TRADING_STATUSES,
    SELECTABLE_STATUSES,
    DayStatus,
)
from tradejournal.models.entry import JournalEntry, coerce_amount
from tradejournal.models.note import WeeklyNote
from tradejournal.models.settings import Settings

__all__ = [
    "DayStatus",
    "NON_TRADING_STATUSES",
    "SELECTABLE_STATUSES",
    "JournalEntry",
    "coerce_amount",
    "WeeklyNote",
    "Settings",
]

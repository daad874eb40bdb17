"""Base gateway interface for TradeJournal persistence."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from tradejournal.models import JournalEntry, Settings, WeeklyNote


class GatewayError(Exception):
    """Raised when a persistence operation fails."""


class NotAuthenticatedError(GatewayError):
    """Raised when an operation needs a signed-in user."""


class AccessDeniedError(GatewayError):
    """Raised when the signed-in user is not allowed to use the journal."""


class InvalidSettingsError(GatewayError):
    """Raised when a stored settings row does not validate."""


class JournalGateway(ABC):
    """Abstract base class for journal storage backends.

    All backends (local SQLite, hosted Supabase) scope every read and
    write to a single user and upsert rows keyed by deterministic ids,
    so repeating a save is harmless.
    """

    @property
    @abstractmethod
    def user_id(self) -> str:
        """Identifier of the user owning the rows.

        Raises:
            NotAuthenticatedError: If no user is signed in.
        """
        pass

    @abstractmethod
    def get_entries(self, start: date, end: date) -> list[JournalEntry]:
        """Get entries within an inclusive date range.

        Args:
            start: First date.
            end: Last date.

        Returns:
            Entries sorted by date.
        """
        pass

    @abstractmethod
    def get_all_entries(self) -> list[JournalEntry]:
        """Get every entry of the user, sorted by date."""
        pass

    @abstractmethod
    def upsert_entry(self, entry: JournalEntry) -> JournalEntry:
        """Create or replace the entry for ``entry.date``.

        An entry whose status is UNKNOWN keeps the stored status.

        Returns:
            The stored entry.
        """
        pass

    @abstractmethod
    def get_weekly_notes(self, week_keys: list[str]) -> list[WeeklyNote]:
        """Get notes for a set of ISO week keys."""
        pass

    @abstractmethod
    def save_weekly_note(self, week_key: str, monday: date, text: str) -> WeeklyNote:
        """Create or replace the note for the week starting on ``monday``."""
        pass

    @abstractmethod
    def get_settings(self) -> Optional[Settings]:
        """Get the stored settings, or None if never saved."""
        pass

    @abstractmethod
    def update_settings(self, **changes) -> Settings:
        """Merge ``changes`` into the stored settings and save them.

        Args:
            **changes: Any of ``initial_capital``, ``start_date``, ``theme``.

        Returns:
            The saved settings.
        """
        pass


def merge_settings(current: Optional[Settings], changes: dict) -> Settings:
    """Apply a partial update to settings.

    Raises:
        ValueError: If a key is not a settings field.
    """
    unknown = set(changes) - set(Settings.model_fields)
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

    base = (current or Settings()).model_dump()
    base.update(changes)
    return Settings(**base)

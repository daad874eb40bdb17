"""SQLite journal gateway for TradeJournal."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tradejournal.gateway.base import (
    GatewayError,
    InvalidSettingsError,
    JournalGateway,
    merge_settings,
)
from tradejournal.models import DayStatus, JournalEntry, Settings, WeeklyNote

logger = logging.getLogger(__name__)


class LocalGateway(JournalGateway):
    """SQLite-based journal storage for a single local user."""

    REQUIRED_TABLES = [
        "journal_entries",
        "weekly_journal_notes",
        "user_settings",
    ]

    def __init__(self, db_path: Path, user_id: str = "local"):
        """Initialize the gateway.

        Args:
            db_path: Path to the SQLite database file.
            user_id: Owner stamped on and filtered by every row.
        """
        self.db_path = Path(db_path)
        self._user_id = user_id
        self._ensure_db_dir()
        self._init_schema()

    @property
    def user_id(self) -> str:
        return self._user_id

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS journal_entries (
                    id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    capital REAL,
                    status TEXT,
                    profit REAL,
                    brokerage REAL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (user_id, id)
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS weekly_journal_notes (
                    id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    week_key TEXT NOT NULL,
                    note TEXT NOT NULL DEFAULT '',
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (user_id, id)
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS user_settings (
                    user_id TEXT PRIMARY KEY,
                    initial_capital REAL NOT NULL DEFAULT 0,
                    start_date TEXT,
                    theme TEXT NOT NULL DEFAULT 'system',
                    updated_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Entries ====================

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
        return JournalEntry(
            date=date.fromisoformat(row["date"]),
            capital=row["capital"],
            status=row["status"],
            profit=row["profit"],
            brokerage=row["brokerage"],
        )

    def get_entries(self, start: date, end: date) -> list[JournalEntry]:
        """Get entries within an inclusive date range.

        Args:
            start: First date.
            end: Last date.

        Returns:
            Entries sorted by date.
        """
        logger.debug("Fetching entries %s..%s for %s", start, end, self._user_id)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT date, capital, status, profit, brokerage
                FROM journal_entries
                WHERE user_id = ? AND date >= ? AND date <= ?
                ORDER BY date
                """,
                (self._user_id, start.isoformat(), end.isoformat()),
            )
            return [self._row_to_entry(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error("Failed to fetch entries: %s", e)
            raise GatewayError(f"Failed to fetch journal entries: {e}") from e
        finally:
            conn.close()

    def get_all_entries(self) -> list[JournalEntry]:
        """Get every entry of the user, sorted by date."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT date, capital, status, profit, brokerage
                FROM journal_entries
                WHERE user_id = ?
                ORDER BY date
                """,
                (self._user_id,),
            )
            return [self._row_to_entry(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error("Failed to fetch entries: %s", e)
            raise GatewayError(f"Failed to fetch journal entries: {e}") from e
        finally:
            conn.close()

    def upsert_entry(self, entry: JournalEntry) -> JournalEntry:
        """Create or replace the entry for ``entry.date``.

        Args:
            entry: Entry to save.

        Returns:
            The stored entry as read back from the database.
        """
        keep_status = entry.status is DayStatus.UNKNOWN
        status = None if keep_status or entry.status is None else entry.status.value

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT INTO journal_entries
                (id, user_id, date, capital, status, profit, brokerage, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (user_id, id) DO UPDATE SET
                    capital = excluded.capital,
                    {"" if keep_status else "status = excluded.status,"}
                    profit = excluded.profit,
                    brokerage = excluded.brokerage,
                    updated_at = excluded.updated_at
                """,
                (
                    entry.entry_id,
                    self._user_id,
                    entry.date.isoformat(),
                    entry.capital,
                    status,
                    entry.profit,
                    entry.brokerage,
                    datetime.now().isoformat(),
                ),
            )
            conn.commit()

            cursor.execute(
                """
                SELECT date, capital, status, profit, brokerage
                FROM journal_entries
                WHERE user_id = ? AND id = ?
                """,
                (self._user_id, entry.entry_id),
            )
            logger.debug("Saved entry %s", entry.entry_id)
            return self._row_to_entry(cursor.fetchone())
        except sqlite3.Error as e:
            logger.error("Failed to save entry %s: %s", entry.entry_id, e)
            raise GatewayError(f"Failed to save entry for {entry.date}: {e}") from e
        finally:
            conn.close()

    # ==================== Weekly Notes ====================

    def get_weekly_notes(self, week_keys: list[str]) -> list[WeeklyNote]:
        """Get notes for a set of ISO week keys.

        Args:
            week_keys: Week keys such as ``2026-W03``.

        Returns:
            Notes found, in week order.
        """
        if not week_keys:
            return []

        placeholders = ", ".join("?" for _ in week_keys)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT id, week_key, note, updated_at
                FROM weekly_journal_notes
                WHERE user_id = ? AND week_key IN ({placeholders})
                ORDER BY id
                """,
                (self._user_id, *week_keys),
            )
            return [
                WeeklyNote(
                    week_key=row["week_key"],
                    monday=datetime.strptime(row["id"], "%Y%m%d").date(),
                    note=row["note"],
                    updated_at=row["updated_at"],
                )
                for row in cursor.fetchall()
            ]
        except sqlite3.Error as e:
            logger.error("Failed to fetch weekly notes: %s", e)
            raise GatewayError(f"Failed to fetch weekly notes: {e}") from e
        finally:
            conn.close()

    def save_weekly_note(self, week_key: str, monday: date, text: str) -> WeeklyNote:
        """Create or replace the note for the week starting on ``monday``.

        Args:
            week_key: ISO week key.
            monday: Monday of the week; the row id is derived from it.
            text: Note text.

        Returns:
            The saved note.
        """
        note = WeeklyNote(
            week_key=week_key,
            monday=monday,
            note=text,
            updated_at=datetime.now().isoformat(),
        )
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO weekly_journal_notes
                (id, user_id, week_key, note, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (note.note_id, self._user_id, note.week_key, note.note, note.updated_at),
            )
            conn.commit()
            return note
        except sqlite3.Error as e:
            logger.error("Failed to save weekly note %s: %s", week_key, e)
            raise GatewayError(f"Failed to save note for {week_key}: {e}") from e
        finally:
            conn.close()

    # ==================== Settings ====================

    def get_settings(self) -> Optional[Settings]:
        """Get the stored settings, or None if never saved."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT initial_capital, start_date, theme
                FROM user_settings
                WHERE user_id = ?
                """,
                (self._user_id,),
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return Settings(
                initial_capital=row["initial_capital"],
                start_date=row["start_date"],
                theme=row["theme"],
            )
        except ValidationError as e:
            logger.error("Stored settings are invalid: %s", e)
            raise InvalidSettingsError(f"Stored settings are invalid: {e}") from e
        except sqlite3.Error as e:
            logger.error("Failed to fetch settings: %s", e)
            raise GatewayError(f"Failed to fetch settings: {e}") from e
        finally:
            conn.close()

    def update_settings(self, **changes) -> Settings:
        """Merge ``changes`` into the stored settings and save them."""
        try:
            current = self.get_settings()
        except InvalidSettingsError:
            logger.warning("Replacing invalid stored settings")
            current = None
        settings = merge_settings(current, changes)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO user_settings
                (user_id, initial_capital, start_date, theme, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    self._user_id,
                    settings.initial_capital,
                    settings.start_date.isoformat() if settings.start_date else None,
                    settings.theme,
                    datetime.now().isoformat(),
                ),
            )
            conn.commit()
            return settings
        except sqlite3.Error as e:
            logger.error("Failed to save settings: %s", e)
            raise GatewayError(f"Failed to save settings: {e}") from e
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with per-table record counts for this user.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(
                    f"SELECT COUNT(*) as count FROM {table} WHERE user_id = ?",
                    (self._user_id,),
                )
                stats[table] = cursor.fetchone()["count"]
            return stats
        except sqlite3.Error as e:
            logger.error("Failed to read stats: %s", e)
            raise GatewayError(f"Failed to read stats: {e}") from e
        finally:
            conn.close()

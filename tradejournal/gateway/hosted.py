"""Supabase journal gateway for TradeJournal.

Uses Supabase auth for sign-in and the Postgres tables below, which are
protected by row level security policies on ``user_id``:

- journal_entries (id, user_id, date, capital, status, profit, brokerage, updated_at)
- weekly_journal_notes (id, user_id, week_key, note, updated_at)
  (older rows may carry an unpadded calendar-year week_key such as 2026-W4)
- user_settings (user_id, initial_capital, start_date, theme, updated_at)
- user_access (email, is_active)
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError
from supabase import Client, create_client

from tradejournal.dates import legacy_week_keys, monday_of
from tradejournal.gateway.base import (
    AccessDeniedError,
    GatewayError,
    InvalidSettingsError,
    JournalGateway,
    NotAuthenticatedError,
    merge_settings,
)
from tradejournal.models import DayStatus, JournalEntry, Settings, WeeklyNote

logger = logging.getLogger(__name__)

ENTRIES_TABLE = "journal_entries"
NOTES_TABLE = "weekly_journal_notes"
SETTINGS_TABLE = "user_settings"
ACCESS_TABLE = "user_access"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabaseGateway(JournalGateway):
    """Journal storage backed by a Supabase project."""

    def __init__(
        self,
        url: str = "",
        key: str = "",
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        client: Optional[Client] = None,
    ):
        """Initialize the gateway.

        Args:
            url: Supabase project URL.
            key: Supabase anon key.
            access_token: Saved session access token, if any.
            refresh_token: Saved session refresh token, if any.
            client: Pre-built client (used by tests).
        """
        if client is None:
            if not url or not key:
                raise GatewayError("Supabase URL and key are required")
            client = create_client(url, key)
        self._client = client
        self._user: Optional[Any] = None

        if access_token and refresh_token:
            try:
                response = self._client.auth.set_session(access_token, refresh_token)
                self._user = response.user
            except Exception as e:
                # An expired session just means the user must log in again
                logger.warning("Could not restore session: %s", e)

    # ==================== Auth ====================

    def sign_in(self, email: str, password: str) -> dict:
        """Sign in with email and password.

        Returns:
            Session tokens and user info to persist.
        """
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise NotAuthenticatedError(f"Login failed: {e}") from e

        self._user = response.user
        logger.debug("Signed in as %s", email)
        return self._session_info(response.session)

    def sign_up(self, email: str, password: str, first_name: str = "", last_name: str = "") -> dict:
        """Register a new account.

        Raises:
            GatewayError: If registration fails or the email is already registered.
        """
        try:
            response = self._client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"first_name": first_name, "last_name": last_name}},
            })
        except Exception as e:
            raise GatewayError(f"Registration failed: {e}") from e

        user = response.user
        # Supabase returns a user without identities for an existing email
        if user is not None and getattr(user, "identities", None) == []:
            raise GatewayError("An account with this email already exists.")

        self._user = user
        return self._session_info(response.session)

    def sign_out(self) -> None:
        """Sign out and forget the current user."""
        try:
            self._client.auth.sign_out()
        except Exception as e:
            logger.warning("Sign out failed: %s", e)
        finally:
            self._user = None

    def _session_info(self, session: Any) -> dict:
        info = {
            "user_id": getattr(self._user, "id", "") or "",
            "email": getattr(self._user, "email", "") or "",
        }
        if session is not None:
            info["access_token"] = session.access_token
            info["refresh_token"] = session.refresh_token
        return info

    def _current_user(self) -> Any:
        if self._user is None:
            try:
                response = self._client.auth.get_user()
            except Exception as e:
                raise NotAuthenticatedError(f"Not logged in: {e}") from e
            self._user = response.user if response else None
        if self._user is None:
            raise NotAuthenticatedError("Not logged in")
        return self._user

    @property
    def user_id(self) -> str:
        return self._current_user().id

    def check_access(self) -> None:
        """Verify the signed-in user is on the active access list.

        Signs the user out before raising.

        Raises:
            AccessDeniedError: If the user is not listed or inactive.
        """
        user = self._current_user()
        rows = self._execute(
            self._client.table(ACCESS_TABLE)
            .select("is_active")
            .eq("email", user.email)
            .limit(1),
            "check access",
        )
        if not rows or not rows[0].get("is_active"):
            self.sign_out()
            raise AccessDeniedError(f"Access denied for {user.email}")

    # ==================== Queries ====================

    def _execute(self, query: Any, action: str) -> list[dict]:
        """Run a query builder and return its rows."""
        try:
            response = query.execute()
        except Exception as e:
            logger.error("Failed to %s: %s", action, e)
            raise GatewayError(f"Failed to {action}: {e}") from e
        return response.data or []

    @staticmethod
    def _row_to_entry(row: dict) -> JournalEntry:
        return JournalEntry(
            date=date.fromisoformat(row["date"]),
            capital=row.get("capital"),
            status=row.get("status"),
            profit=row.get("profit"),
            brokerage=row.get("brokerage"),
        )

    def get_entries(self, start: date, end: date) -> list[JournalEntry]:
        self._current_user()
        rows = self._execute(
            self._client.table(ENTRIES_TABLE)
            .select("*")
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date"),
            "fetch journal entries",
        )
        return [self._row_to_entry(row) for row in rows]

    def get_all_entries(self) -> list[JournalEntry]:
        self._current_user()
        rows = self._execute(
            self._client.table(ENTRIES_TABLE).select("*").order("date"),
            "fetch journal entries",
        )
        return [self._row_to_entry(row) for row in rows]

    def upsert_entry(self, entry: JournalEntry) -> JournalEntry:
        payload = {
            "id": entry.entry_id,
            "user_id": self.user_id,
            "date": entry.date.isoformat(),
            "capital": entry.capital,
            "profit": entry.profit,
            "brokerage": entry.brokerage,
            "updated_at": _now(),
        }
        # Omitted columns keep their stored value on conflict
        if entry.status is not DayStatus.UNKNOWN:
            payload["status"] = entry.status.value if entry.status else None

        rows = self._execute(
            self._client.table(ENTRIES_TABLE).upsert(payload, on_conflict="id"),
            f"save entry for {entry.date}",
        )
        return self._row_to_entry(rows[0]) if rows else entry

    def get_weekly_notes(self, week_keys: list[str]) -> list[WeeklyNote]:
        """Fetch notes by ISO week key.

        Rows stored under a legacy key (see ``legacy_week_keys``) are
        returned under the canonical key. Their ids may be any day of
        the week, so ``monday`` is derived from the id. A row stored
        under the canonical key wins over a legacy one for the same week.
        """
        if not week_keys:
            return []
        self._current_user()

        canonical: dict[str, str] = {key: key for key in week_keys}
        for key in week_keys:
            for alias in legacy_week_keys(key):
                canonical.setdefault(alias, key)

        rows = self._execute(
            self._client.table(NOTES_TABLE).select("*").in_("week_key", list(canonical)),
            "fetch weekly notes",
        )

        notes: dict[str, WeeklyNote] = {}
        for row in rows:
            key = canonical.get(row["week_key"])
            if key is None or (key in notes and row["week_key"] != key):
                continue
            notes[key] = WeeklyNote(
                week_key=key,
                monday=monday_of(datetime.strptime(row["id"], "%Y%m%d").date()),
                note=row.get("note") or "",
                updated_at=row.get("updated_at"),
            )
        return list(notes.values())


    def save_weekly_note(self, week_key: str, monday: date, text: str) -> WeeklyNote:
        note = WeeklyNote(week_key=week_key, monday=monday, note=text, updated_at=_now())
        self._execute(
            self._client.table(NOTES_TABLE).upsert(
                {
                    "id": note.note_id,
                    "week_key": note.week_key,
                    "note": note.note,
                    "user_id": self.user_id,
                    "updated_at": note.updated_at,
                },
                on_conflict="id",
            ),
            f"save note for {week_key}",
        )
        return note

    def get_settings(self) -> Optional[Settings]:
        rows = self._execute(
            self._client.table(SETTINGS_TABLE)
            .select("initial_capital, start_date, theme")
            .eq("user_id", self.user_id)
            .limit(1),
            "fetch settings",
        )
        if not rows:
            return None
        row = rows[0]
        try:
            return Settings(
                initial_capital=row.get("initial_capital"),
                start_date=row.get("start_date"),
                theme=row.get("theme") or "system",
            )
        except ValidationError as e:
            logger.error("Stored settings are invalid: %s", e)
            raise InvalidSettingsError(f"Stored settings are invalid: {e}") from e

    def update_settings(self, **changes) -> Settings:
        try:
            current = self.get_settings()
        except InvalidSettingsError:
            logger.warning("Replacing invalid stored settings")
            current = None
        settings = merge_settings(current, changes)
        self._execute(
            self._client.table(SETTINGS_TABLE).upsert(
                {
                    "user_id": self.user_id,
                    "initial_capital": settings.initial_capital,
                    "start_date": settings.start_date.isoformat() if settings.start_date else None,
                    "theme": settings.theme,
                    "updated_at": _now(),
                },
                on_conflict="user_id",
            ),
            "save settings",
        )
        return settings

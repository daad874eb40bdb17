"""Win/loss streak detection."""

from datetime import date
from typing import Iterable, Literal, Optional

from pydantic import BaseModel, Field

from tradejournal.models import JournalEntry


class Streaks(BaseModel):
    """Current and longest win/loss runs."""

    current_win: int = Field(default=0, ge=0)
    current_loss: int = Field(default=0, ge=0)
    max_win: int = Field(default=0, ge=0)
    max_win_start: Optional[date] = None
    max_win_end: Optional[date] = None
    max_loss: int = Field(default=0, ge=0)
    max_loss_start: Optional[date] = None
    max_loss_end: Optional[date] = None
    last_result: Optional[Literal["win", "loss"]] = None

    model_config = {"frozen": True}

    @property
    def current(self) -> int:
        """Length of the run matching ``last_result``."""
        if self.last_result == "win":
            return self.current_win
        if self.last_result == "loss":
            return self.current_loss
        return 0


def compute_streaks(entries: Iterable[JournalEntry]) -> Streaks:
    """Detect win and loss streaks in a single chronological pass.

    Holiday, special occasion and no-trade days are skipped. Days whose
    status is neither a win nor a loss (target failed, unknown, unset)
    leave the running streaks untouched. A longest streak is replaced
    when a later run equals it, so ties report the most recent run.

    Args:
        entries: Journal entries in any order.

    Returns:
        Streaks summary.
    """
    if isinstance(entries, dict):
        entries = entries.values()

    current_win = current_loss = 0
    win_start = win_end = loss_start = loss_end = None
    max_win = max_loss = 0
    max_win_start = max_win_end = max_loss_start = max_loss_end = None
    last = None

    for entry in sorted(entries, key=lambda e: e.date):
        if entry.is_excluded or entry.status is None:
            continue

        if entry.status.is_win:
            if last == "win":
                current_win += 1
                win_end = entry.date
            else:
                current_win = 1
                win_start = win_end = entry.date
                current_loss = 0
            last = "win"

            if current_win >= max_win:
                max_win = current_win
                max_win_start, max_win_end = win_start, win_end

        elif entry.status.is_loss:
            if last == "loss":
                current_loss += 1
                loss_end = entry.date
            else:
                current_loss = 1
                loss_start = loss_end = entry.date
                current_win = 0
            last = "loss"

            if current_loss >= max_loss:
                max_loss = current_loss
                max_loss_start, max_loss_end = loss_start, loss_end

    return Streaks(
        current_win=current_win,
        current_loss=current_loss,
        max_win=max_win,
        max_win_start=max_win_start,
        max_win_end=max_win_end,
        max_loss=max_loss,
        max_loss_start=max_loss_start,
        max_loss_end=max_loss_end,
        last_result=last,
    )

"""Day status enumeration."""

from enum import Enum
from typing import Optional


class DayStatus(str, Enum):
    """Status tag recorded for a trading day."""

    LOSING = "losing"
    TARGET_ACHIEVED = "target_achieved"
    TARGET_FAILED = "target_failed"
    MARKET_HOLIDAY = "market_holiday"
    SPECIAL_OCCASION = "special_occasion"
    NO_TRADE = "no_trade"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: object) -> Optional["DayStatus"]:
        """Normalize a stored or user-entered status string.

        Matching is case-insensitive and treats spaces and hyphens as
        underscores. Empty values map to None, anything unrecognized
        maps to UNKNOWN.

        Args:
            raw: Raw status value (string, DayStatus or None).

        Returns:
            Parsed status, or None when unset.
        """
        if raw is None:
            return None
        if isinstance(raw, DayStatus):
            return raw

        text = str(raw).strip().lower()
        if not text:
            return None
        text = text.replace("-", "_").replace(" ", "_")

        try:
            return cls(text)
        except ValueError:
            return _ALIASES.get(text, cls.UNKNOWN)

    @property
    def label(self) -> str:
        """Human readable label."""
        return _LABELS[self]

    @property
    def is_trading(self) -> bool:
        """Whether the day counts towards trading statistics."""
        return self not in NON_TRADING_STATUSES

    @property
    def is_win(self) -> bool:
        return self is DayStatus.TARGET_ACHIEVED

    @property
    def is_loss(self) -> bool:
        return self is DayStatus.LOSING


NON_TRADING_STATUSES = frozenset({
    DayStatus.MARKET_HOLIDAY,
    DayStatus.SPECIAL_OCCASION,
    DayStatus.NO_TRADE,
})

# Statuses offered when editing a day
SELECTABLE_STATUSES = [
    DayStatus.LOSING,
    DayStatus.TARGET_ACHIEVED,
    DayStatus.TARGET_FAILED,
    DayStatus.MARKET_HOLIDAY,
    DayStatus.SPECIAL_OCCASION,
    DayStatus.NO_TRADE,
]

_ALIASES = {
    "loss": DayStatus.LOSING,
    "losing_day": DayStatus.LOSING,
    "holiday": DayStatus.MARKET_HOLIDAY,
    "special": DayStatus.SPECIAL_OCCASION,
    "notrade": DayStatus.NO_TRADE,
}

_LABELS = {
    DayStatus.LOSING: "Losing Day",
    DayStatus.TARGET_ACHIEVED: "Target Achieved",
    DayStatus.TARGET_FAILED: "Target Failed",
    DayStatus.MARKET_HOLIDAY: "Market Holiday",
    DayStatus.SPECIAL_OCCASION: "Special Occasion",
    DayStatus.NO_TRADE: "No Trade",
    DayStatus.UNKNOWN: "Unknown",
}

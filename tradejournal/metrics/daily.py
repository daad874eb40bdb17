"""Per-day derived values.

Risk thresholds are fixed fractions of the capital entered for the day.
The projected capital curve compounds the configured initial capital by
1% per weekday since the start date, independent of entered capital.
"""

import math
from datetime import date
from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field

from tradejournal.dates import weekdays_between
from tradejournal.models import DayStatus, JournalEntry, Settings

DAILY_GROWTH_RATE = 0.01
TARGET_RATE = 0.01
STOP_LOSS_RATE = 0.02
MAX_BROKERAGE_RATE = 0.002


class DayMetrics(BaseModel):
    """Entered and derived values for one journal row."""

    date: date_type
    status: Optional[DayStatus] = None
    capital: Optional[float] = None
    profit: Optional[float] = None
    brokerage: Optional[float] = None
    projected_capital: Optional[float] = None
    target: float = Field(default=0.0, ge=0)
    max_stop_loss: float = Field(default=0.0, ge=0)
    max_brokerage: float = Field(default=0.0, ge=0)
    net_profit: float = 0.0
    profit_percent: Optional[float] = None
    brokerage_percent: Optional[float] = None

    model_config = {"frozen": True}

    def display(self) -> dict[str, str]:
        """Format the row for display, blank where a value is absent."""
        return {
            "capital": _amount(self.capital, blank_zero=False),
            "projected_capital": _amount(self.projected_capital),
            "target": _amount(self.target),
            "max_brokerage": _amount(self.max_brokerage),
            "max_stop_loss": _amount(self.max_stop_loss),
            "status": self.status.label if self.status else "",
            "profit": _amount(self.profit, blank_zero=False),
            "brokerage": _amount(self.brokerage, blank_zero=False),
            "brokerage_percent": _percent(self.brokerage_percent),
            "profit_percent": _percent(self.profit_percent),
        }


def _amount(value: Optional[float], blank_zero: bool = True) -> str:
    if value is None or (blank_zero and value <= 0):
        return ""
    return f"{value:.0f}"


def _percent(value: Optional[float]) -> str:
    if value is None:
        return ""
    return f"{value:.2f}%"


def projected_capital(day: date, settings: Settings) -> Optional[float]:
    """Calculate the projected capital for a day.

    Args:
        day: Day to project to.
        settings: User settings holding initial capital and start date.

    Returns:
        ``initial_capital * 1.01 ** k`` where ``k`` is the number of
        weekdays from the start date up to (not including) ``day``.
        None when settings are incomplete or the day precedes the start.
    """
    if not settings.is_complete or day < settings.start_date:
        return None

    k = weekdays_between(settings.start_date, day)
    return settings.initial_capital * (1 + DAILY_GROWTH_RATE) ** k


def _ratio_percent(numerator: float, denominator: float) -> Optional[float]:
    """numerator / denominator as a percentage, or None if not finite."""
    if denominator == 0:
        return None
    value = numerator / denominator * 100
    return value if math.isfinite(value) else None


def compute_day(
    day: date,
    entry: Optional[JournalEntry],
    settings: Settings,
) -> DayMetrics:
    """Calculate all derived values for a single day.

    Args:
        day: The calendar day.
        entry: Journal entry for the day, or None if nothing was recorded.
        settings: User settings for the projected capital curve.

    Returns:
        DayMetrics for the row. Never raises.
    """
    capital = entry.capital if entry else None
    profit = entry.profit if entry else None
    brokerage = entry.brokerage if entry else None

    cap = capital if capital is not None and capital > 0 else 0.0
    gross = profit or 0.0
    charges = brokerage or 0.0
    net = gross - charges

    return DayMetrics(
        date=day,
        status=entry.status if entry else None,
        capital=capital,
        profit=profit,
        brokerage=brokerage,
        projected_capital=projected_capital(day, settings),
        target=cap * TARGET_RATE,
        max_stop_loss=cap * STOP_LOSS_RATE,
        max_brokerage=cap * MAX_BROKERAGE_RATE,
        net_profit=net,
        profit_percent=_ratio_percent(net, cap),
        # Sign of profit is kept, so a losing day yields a negative ratio
        brokerage_percent=_ratio_percent(charges, gross),
    )

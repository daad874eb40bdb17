"""JournalEntry data model."""

import math
from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from tradejournal.models.status import DayStatus


def coerce_amount(value: object) -> Optional[float]:
    """Coerce a monetary input to float, or None when it is not a number.

    Blank strings, non-numeric strings, NaN and infinities are all
    treated as "not recorded".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class JournalEntry(BaseModel):
    """Represents one trading day in the journal."""

    date: date_type = Field(..., description="Journal entry date")
    capital: Optional[float] = Field(default=None, description="Capital deployed for the day")
    profit: Optional[float] = Field(default=None, description="Gross profit for the day")
    brokerage: Optional[float] = Field(default=None, description="Brokerage and charges")
    status: Optional[DayStatus] = Field(default=None, description="Day status tag")

    model_config = {"frozen": True}

    @field_validator("capital", "profit", "brokerage", mode="before")
    @classmethod
    def _coerce_amounts(cls, value: object) -> Optional[float]:
        return coerce_amount(value)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: object) -> Optional[DayStatus]:
        return DayStatus.parse(value)

    @property
    def entry_id(self) -> str:
        """Deterministic row id: the ISO date without separators."""
        return self.date.isoformat().replace("-", "")

    @property
    def net_profit(self) -> float:
        """Profit minus brokerage, absent values counting as zero."""
        return (self.profit or 0.0) - (self.brokerage or 0.0)

    @property
    def is_trading_day(self) -> bool:
        """True when a status is set and it is not a non-trading marker."""
        return self.status is not None and self.status.is_trading

    @property
    def is_excluded(self) -> bool:
        """True for holiday, special occasion and no-trade days."""
        return self.status is not None and not self.status.is_trading

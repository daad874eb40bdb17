"""Per-user settings model."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from tradejournal.models.entry import coerce_amount


class Settings(BaseModel):
    """Projection settings and display preferences for a user."""

    initial_capital: float = Field(default=0.0, description="Capital on the start date")
    start_date: Optional[date] = Field(default=None, description="First journal day")
    theme: Literal["light", "dark", "system"] = Field(
        default="system", description="Display theme"
    )

    model_config = {"frozen": True}

    @field_validator("initial_capital", mode="before")
    @classmethod
    def _coerce_capital(cls, value: object) -> float:
        return coerce_amount(value) or 0.0

    @field_validator("start_date", mode="before")
    @classmethod
    def _blank_date(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_complete(self) -> bool:
        """True when both initial capital and start date are configured."""
        return self.initial_capital > 0 and self.start_date is not None

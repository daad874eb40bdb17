"""WeeklyNote data model."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class WeeklyNote(BaseModel):
    """Represents the free-text note for one ISO week."""

    week_key: str = Field(..., min_length=1, description="ISO week key (YYYY-Www)")
    monday: date = Field(..., description="Monday of the week")
    note: str = Field(default="", description="Note text")
    updated_at: Optional[str] = Field(default=None, description="Last update timestamp")

    model_config = {"frozen": True}

    @property
    def note_id(self) -> str:
        """Row id: the Monday as YYYYMMDD."""
        return self.monday.strftime("%Y%m%d")

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class StringList(BaseModel):
    """Generic container for lists of unique string values."""
    values: List[str] = Field(description="List of unique string values")


class DateBounds(BaseModel):
    """Earliest and latest value of a date column, None when the column is empty."""
    start_date: Optional[date] = Field(default=None, description="Earliest date")
    end_date: Optional[date] = Field(default=None, description="Latest date")

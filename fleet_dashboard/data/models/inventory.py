from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TimeFrame(str, Enum):
    """Display units for burn rate and time-to-empty."""
    WEEK = "week"
    DAY = "day"
    FIVE_DAYS = "5days"
    THIRTY_DAYS = "30days"
    MONTH = "month"


class TimeFrameOption(BaseModel):
    """A selectable time frame and the multiplier applied to the weekly burn rate."""
    value: TimeFrame = Field(description="Time frame identifier")
    label: str = Field(description="Label shown in the time frame selector")
    multiplier: float = Field(gt=0, description="Weekly burn rate is divided by this to get the display rate")

    @property
    def days_per_unit(self) -> float:
        """Length in days of one display unit."""
        return 7 / self.multiplier


class StockStatus(str, Enum):
    CRITICAL = "Critical"
    LOW = "Low"
    MEDIUM = "Medium"
    GOOD = "Good"

    @property
    def color(self) -> str:
        return _STATUS_COLORS[self]


_STATUS_COLORS = {
    StockStatus.CRITICAL: "destructive",
    StockStatus.LOW: "warning",
    StockStatus.MEDIUM: "info",
    StockStatus.GOOD: "success",
}


class InventoryItem(BaseModel):
    """A vehicle configuration held in stock."""
    id: str = Field(description="Unique item identifier")
    brand: str = Field(default="", description="Vehicle brand")
    model: str = Field(default="", description="Vehicle model")
    version: str = Field(default="", description="Trim / version")
    available_stock: int = Field(default=0, ge=0, description="Units currently in stock")
    burn_rate: float = Field(default=0.0, ge=0, description="Units consumed per week")
    factory_order_lead_time: Optional[float] = Field(default=None, ge=0, description="Factory lead time, None when unknown")
    model_id: Optional[str] = Field(default=None, description="Identifier used to recall a previously entered lead time")

    @property
    def lead_time_key(self) -> str:
        if self.model_id:
            return self.model_id
        return f"{self.brand}|{self.model}|{self.version}"


class ForecastResult(BaseModel):
    """Derived stock figures for one item under a given time frame."""
    adjusted_burn_rate: float = Field(description="Burn rate expressed in the selected time frame")
    time_to_empty: float = Field(description="Time until stock runs out, in the selected time frame (inf when never)")
    weeks_until_empty: float = Field(description="Time until stock runs out, in weeks (inf when never)")
    estimated_out_of_stock_date: Optional[date] = Field(default=None, description="EOS date, None when stock never runs out")
    recommended_order_date: Optional[date] = Field(default=None, description="ROD, None when lead time or EOS is unknown")
    order_immediately: bool = Field(default=False, description="ROD has already passed")
    status: StockStatus = Field(description="Categorical stock status")
    needs_attention: bool = Field(default=False, description="Stock runs out within the low threshold")

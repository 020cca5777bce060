"""
Inventory forecasting: burn rate normalisation, estimated out-of-stock (EOS),
stock status and recommended order date (ROD).

Burn rates are stored per week. The selected time frame only changes how the
rate and the time-to-empty are displayed; status is always judged on weeks.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional

import pandas as pd

from fleet_dashboard.config import get_config
from fleet_dashboard.data.models import (
    ForecastResult,
    InventoryItem,
    StockStatus,
    TimeFrame,
    TimeFrameOption,
)

TIME_FRAME_OPTIONS: List[TimeFrameOption] = [
    TimeFrameOption(value=TimeFrame.WEEK, label="Per Week", multiplier=1),
    TimeFrameOption(value=TimeFrame.DAY, label="Per Day", multiplier=7),
    TimeFrameOption(value=TimeFrame.FIVE_DAYS, label="Last 5 Days", multiplier=1.4),
    TimeFrameOption(value=TimeFrame.THIRTY_DAYS, label="Last 30 Days", multiplier=0.233),
    TimeFrameOption(value=TimeFrame.MONTH, label="Per Month", multiplier=0.25),
]

DAYS_PER_LEAD_TIME_UNIT = {"weeks": 7, "months": 30}


@dataclass(frozen=True)
class StatusThresholds:
    """Week boundaries for the stock status labels."""
    critical: float = 2.0
    low: float = 4.0
    medium: float = 8.0
    critical_inclusive: bool = True

    @classmethod
    def from_config(cls) -> "StatusThresholds":
        config = get_config()
        return cls(
            critical=config.critical_weeks,
            low=config.low_weeks,
            medium=config.medium_weeks,
            critical_inclusive=config.critical_inclusive,
        )


def get_time_frame_option(time_frame) -> TimeFrameOption:
    """Look up a time frame by value; unknown values fall back to per week."""
    for option in TIME_FRAME_OPTIONS:
        if option.value == time_frame:
            return option
    return TIME_FRAME_OPTIONS[0]


def adjusted_burn_rate(burn_rate: float, option: TimeFrameOption) -> float:
    return round(burn_rate / option.multiplier, 1)


def estimate_time_to_empty(stock: int, burn_rate: float, option: TimeFrameOption) -> float:
    """Time until stock runs out in the option's units, math.inf when nothing is consumed."""
    rate = burn_rate / option.multiplier
    if rate == 0:
        return math.inf
    return round(stock / rate, 1)


def weeks_until_empty(stock: int, burn_rate: float) -> float:
    return estimate_time_to_empty(stock, burn_rate, TIME_FRAME_OPTIONS[0])


def estimated_out_of_stock_date(
    time_to_empty: float, option: TimeFrameOption, today: Optional[date] = None
) -> Optional[date]:
    if math.isinf(time_to_empty):
        return None
    today = today or date.today()
    try:
        return today + timedelta(days=round(time_to_empty * option.days_per_unit))
    except OverflowError:
        # Beyond the calendar: treat like stock that never runs out
        return None


def stock_status(weeks: float, thresholds: Optional[StatusThresholds] = None) -> StockStatus:
    thresholds = thresholds or StatusThresholds.from_config()
    if thresholds.critical_inclusive:
        critical = weeks <= thresholds.critical
    else:
        critical = weeks < thresholds.critical
    if critical:
        return StockStatus.CRITICAL
    if weeks <= thresholds.low:
        return StockStatus.LOW
    if weeks <= thresholds.medium:
        return StockStatus.MEDIUM
    return StockStatus.GOOD


def lead_time_days(lead_time: float, unit: str = "weeks") -> int:
    return round(lead_time * DAYS_PER_LEAD_TIME_UNIT[unit])


def recommended_order_date(
    out_of_stock_date: Optional[date], lead_time: Optional[float], unit: str = "weeks"
) -> Optional[date]:
    """EOS minus the factory lead time; None when either is unknown."""
    if out_of_stock_date is None or lead_time is None:
        return None
    try:
        return out_of_stock_date - timedelta(days=lead_time_days(lead_time, unit))
    except OverflowError:
        return date.min


def parse_lead_time(raw) -> Optional[float]:
    """Parse a lead time typed by the user.

    An empty value clears the lead time. Anything that is not a finite number
    of zero or more raises ValueError so the caller can keep the prior value.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if text == "":
        return None
    value = float(text)
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"Lead time must be a finite number: {raw!r}")
    if value < 0:
        raise ValueError(f"Lead time must not be negative: {raw!r}")
    return value


def forecast_item(
    item: InventoryItem,
    time_frame=TimeFrame.WEEK,
    today: Optional[date] = None,
    thresholds: Optional[StatusThresholds] = None,
    lead_time_unit: Optional[str] = None,
) -> ForecastResult:
    option = get_time_frame_option(time_frame)
    today = today or date.today()
    lead_time_unit = lead_time_unit or get_config().lead_time_unit

    time_to_empty = estimate_time_to_empty(item.available_stock, item.burn_rate, option)
    weeks = weeks_until_empty(item.available_stock, item.burn_rate)
    thresholds = thresholds or StatusThresholds.from_config()

    eos = estimated_out_of_stock_date(time_to_empty, option, today)
    rod = recommended_order_date(eos, item.factory_order_lead_time, lead_time_unit)

    return ForecastResult(
        adjusted_burn_rate=adjusted_burn_rate(item.burn_rate, option),
        time_to_empty=time_to_empty,
        weeks_until_empty=weeks,
        estimated_out_of_stock_date=eos,
        recommended_order_date=rod,
        order_immediately=rod is not None and rod < today,
        status=stock_status(weeks, thresholds),
        needs_attention=weeks <= thresholds.low,
    )


FORECAST_COLUMNS = [
    "id", "brand", "model", "version", "available_stock", "burn_rate",
    "time_to_empty", "estimated_out_of_stock_date", "factory_order_lead_time",
    "recommended_order_date", "order_immediately", "status", "needs_attention",
]


def forecast_frame(
    items: Iterable[InventoryItem],
    time_frame=TimeFrame.WEEK,
    today: Optional[date] = None,
    thresholds: Optional[StatusThresholds] = None,
    lead_time_unit: Optional[str] = None,
) -> pd.DataFrame:
    """One row per item with the display burn rate and forecast columns."""
    rows = []
    for item in items:
        result = forecast_item(item, time_frame, today, thresholds, lead_time_unit)
        rows.append({
            "id": item.id,
            "brand": item.brand,
            "model": item.model,
            "version": item.version,
            "available_stock": item.available_stock,
            "burn_rate": result.adjusted_burn_rate,
            "time_to_empty": result.time_to_empty,
            "estimated_out_of_stock_date": result.estimated_out_of_stock_date,
            "factory_order_lead_time": item.factory_order_lead_time,
            "recommended_order_date": result.recommended_order_date,
            "order_immediately": result.order_immediately,
            "status": result.status.value,
            "needs_attention": result.needs_attention,
        })
    return pd.DataFrame(rows, columns=FORECAST_COLUMNS)

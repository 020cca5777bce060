import math
from datetime import date, timedelta

import pytest
from fleet_dashboard.config import set_config_for_test
from fleet_dashboard.data.models import InventoryItem, StockStatus, TimeFrame, TimeFrameOption
from fleet_dashboard.forecast import (
    StatusThresholds,
    adjusted_burn_rate,
    estimate_time_to_empty,
    estimated_out_of_stock_date,
    forecast_frame,
    forecast_item,
    get_time_frame_option,
    parse_lead_time,
    recommended_order_date,
    stock_status,
)

TODAY = date(2024, 3, 4)

@pytest.fixture(autouse=True)
def default_config():
    set_config_for_test(state_backend="memory", lead_time_unit="weeks")

def _item(stock, burn, lead=None):
    return InventoryItem(id="1", brand="BMW", model="X3", version="xDrive30i",
                         available_stock=stock, burn_rate=burn, factory_order_lead_time=lead)

def test_zero_burn_rate_never_runs_out():
    """Burn rate 0 gives an infinite time-to-empty whatever the stock."""
    for stock in (0, 1, 500):
        for option in ("week", "day", "month"):
            assert math.isinf(estimate_time_to_empty(stock, 0, get_time_frame_option(option)))

def test_zero_burn_rate_has_no_dates():
    result = forecast_item(_item(10, 0, lead=4), today=TODAY)
    assert result.estimated_out_of_stock_date is None
    assert result.recommended_order_date is None
    assert result.status == StockStatus.GOOD
    assert not result.needs_attention

def test_adjusted_burn_rate_per_time_frame():
    assert adjusted_burn_rate(14, get_time_frame_option("week")) == 14.0
    assert adjusted_burn_rate(14, get_time_frame_option("day")) == 2.0
    assert adjusted_burn_rate(7, get_time_frame_option("5days")) == 5.0
    assert adjusted_burn_rate(8, get_time_frame_option("month")) == 32.0

def test_doubling_multiplier_halves_rate():
    """Doubling the multiplier halves the displayed rate, within rounding."""
    single = TimeFrameOption(value=TimeFrame.WEEK, label="x1", multiplier=1)
    double = TimeFrameOption(value=TimeFrame.WEEK, label="x2", multiplier=2)
    for burn in (3, 7.5, 12, 20):
        assert adjusted_burn_rate(burn, double) == pytest.approx(adjusted_burn_rate(burn, single) / 2, abs=0.05)

def test_unknown_time_frame_falls_back_to_week():
    assert get_time_frame_option("fortnight").value == TimeFrame.WEEK

def test_status_thresholds():
    thresholds = StatusThresholds()
    assert stock_status(1, thresholds) == StockStatus.CRITICAL
    assert stock_status(3, thresholds) == StockStatus.LOW
    assert stock_status(6, thresholds) == StockStatus.MEDIUM
    assert stock_status(10, thresholds) == StockStatus.GOOD
    assert stock_status(math.inf, thresholds) == StockStatus.GOOD

def test_critical_boundary_is_configurable():
    """Exactly two weeks is Critical when inclusive, Low otherwise."""
    assert stock_status(2, StatusThresholds(critical_inclusive=True)) == StockStatus.CRITICAL
    assert stock_status(2, StatusThresholds(critical_inclusive=False)) == StockStatus.LOW

def test_thresholds_read_from_config():
    set_config_for_test(state_backend="memory", critical_inclusive=False, low_weeks=5)
    assert stock_status(2) == StockStatus.LOW
    assert stock_status(5) == StockStatus.LOW
    assert stock_status(5.5) == StockStatus.MEDIUM

def test_reorder_date_is_eos_minus_lead_time():
    """Depletion in 10 weeks with a 4 week lead time means ordering 6 weeks from now."""
    result = forecast_item(_item(100, 10, lead=4), today=TODAY)
    assert result.time_to_empty == 10.0
    assert result.estimated_out_of_stock_date == TODAY + timedelta(weeks=10)
    assert result.recommended_order_date == TODAY + timedelta(weeks=6)
    assert not result.order_immediately

def test_reorder_date_in_months():
    eos = TODAY + timedelta(days=100)
    assert recommended_order_date(eos, 2, unit="months") == TODAY + timedelta(days=40)

def test_unknown_lead_time_has_no_reorder_date():
    result = forecast_item(_item(100, 10, lead=None), today=TODAY)
    assert result.estimated_out_of_stock_date is not None
    assert result.recommended_order_date is None
    assert not result.order_immediately

def test_past_reorder_date_means_order_immediately():
    result = forecast_item(_item(3, 12, lead=8), today=TODAY)
    assert result.recommended_order_date < TODAY
    assert result.order_immediately
    assert result.status == StockStatus.CRITICAL
    assert result.needs_attention

def test_out_of_stock_date_does_not_depend_on_time_frame():
    item = _item(100, 10)
    dates = {forecast_item(item, tf, today=TODAY).estimated_out_of_stock_date for tf in ("week", "day", "month")}
    assert dates == {TODAY + timedelta(days=70)}

def test_time_to_empty_in_display_units():
    assert estimate_time_to_empty(100, 10, get_time_frame_option("day")) == 70.0
    assert estimate_time_to_empty(100, 10, get_time_frame_option("month")) == 2.5
    assert estimated_out_of_stock_date(math.inf, get_time_frame_option("week"), TODAY) is None

def test_status_uses_weeks_not_display_units():
    """A per-day view shows 14 days to empty but the status is judged on 2 weeks."""
    result = forecast_item(_item(14, 7), TimeFrame.DAY, today=TODAY)
    assert result.time_to_empty == 14.0
    assert result.weeks_until_empty == 2.0
    assert result.status == StockStatus.CRITICAL

def test_very_slow_burn_rate_has_no_dates():
    """Depletion beyond the last representable date is treated like never running out."""
    result = forecast_item(_item(500, 0.001, lead=4), "week", today=TODAY)
    assert result.time_to_empty == 500000.0
    assert result.estimated_out_of_stock_date is None
    assert result.recommended_order_date is None
    assert not result.order_immediately
    assert result.status == StockStatus.GOOD

def test_huge_lead_time_means_order_immediately():
    eos = TODAY + timedelta(days=10)
    assert recommended_order_date(eos, 1e9) == date.min
    result = forecast_item(_item(100, 10, lead=1e9), today=TODAY)
    assert result.order_immediately

@pytest.mark.parametrize("raw, expected", [
    ("", None), (None, None), ("5", 5), (" 12 ", 12), ("0", 0), ("4.5", 4.5), ("1e1", 10),
])
def test_parse_lead_time_accepts(raw, expected):
    assert parse_lead_time(raw) == expected

@pytest.mark.parametrize("raw", ["-3", "-0.5", "abc", "nan", "inf"])
def test_parse_lead_time_rejects(raw):
    with pytest.raises(ValueError):
        parse_lead_time(raw)

def test_forecast_frame_has_one_row_per_item():
    items = [_item(100, 10, lead=4), _item(3, 12).model_copy(update={"id": "2"})]
    df = forecast_frame(items, "week", today=TODAY, thresholds=StatusThresholds())
    assert list(df["id"]) == ["1", "2"]
    assert list(df["status"]) == ["Good", "Critical"]
    assert df.loc[0, "recommended_order_date"] == TODAY + timedelta(weeks=6)

def test_forecast_frame_empty():
    df = forecast_frame([], "week", today=TODAY)
    assert df.empty
    assert "status" in df.columns

from datetime import date

import pandas as pd
import pytest
from fleet_dashboard.config import set_config_for_test
from fleet_dashboard.data.models import InventoryItem
from fleet_dashboard.forecast import forecast_frame
from fleet_dashboard.spreadsheets import (
    SpreadsheetReadError,
    inventory_export_frame,
    inventory_items_from_frame,
    procurement_records_from_frame,
    read_table,
    to_csv_bytes,
)

@pytest.fixture(autouse=True)
def default_config():
    set_config_for_test(state_backend="memory")

def _items(csv_text: str):
    return inventory_items_from_frame(read_table("stock.csv", csv_text.encode("utf-8")))

def test_import_maps_columns():
    items = _items(
        "Brand,Model,Version,Available Stock,Burn Rate,Factory Lead Time,Model ID\n"
        "BMW,X3,xDrive30i M Sport,45,8,12,BMW-X3-30I\n"
    )
    assert len(items) == 1
    item = items[0]
    assert (item.brand, item.model, item.version) == ("BMW", "X3", "xDrive30i M Sport")
    assert item.available_stock == 45
    assert item.burn_rate == 8.0
    assert item.factory_order_lead_time == 12.0
    assert item.model_id == "BMW-X3-30I"
    assert item.id == "1"

def test_missing_available_stock_column_defaults_to_zero():
    """A row without Available Stock imports with stock 0 instead of failing."""
    items = _items("Brand,Model,Version,Burn Rate\nAudi,A4,Avant,6\n")
    assert items[0].available_stock == 0
    assert items[0].burn_rate == 6.0

def test_malformed_cells_coerce_to_defaults():
    items = _items(
        "Brand,Model,Version,Available Stock,Burn Rate,Factory Lead Time\n"
        ",Golf,,lots,-4,-2\n"
        "Tesla,Model Y,LR,\"2,5\",\"1,5\",soon\n"
    )
    first, second = items
    assert first.brand == ""
    assert first.version == ""
    assert first.available_stock == 0
    assert first.burn_rate == 0.0
    assert first.factory_order_lead_time is None
    assert second.available_stock == 2
    assert second.burn_rate == 1.5
    assert second.factory_order_lead_time is None

def test_headers_match_loosely():
    items = _items("make,MODEL,trim,available_stock,burn rate\nVolkswagen,Golf,GTI,3,12\n")
    assert items[0].brand == "Volkswagen"
    assert items[0].version == "GTI"
    assert items[0].available_stock == 3

def test_duplicate_ids_are_made_unique():
    items = _items("ID,Brand\n7,BMW\n7,Audi\n")
    assert [i.id for i in items] == ["7", "7-2"]

def test_latin1_csv_is_read():
    content = "Brand,Model\nCitroën,C4\n".encode("latin-1")
    items = inventory_items_from_frame(read_table("stock.csv", content))
    assert items[0].brand == "Citroën"

def test_unsupported_file_type():
    with pytest.raises(SpreadsheetReadError):
        read_table("stock.pdf", b"%PDF-1.4")

def test_xls_is_read_with_xlrd(monkeypatch):
    calls = []

    def fake_read_excel(buf, dtype=None, engine=None):
        calls.append(engine)
        return pd.DataFrame({"Brand": ["BMW"], "Available Stock": ["4"]})

    monkeypatch.setattr(pd, "read_excel", fake_read_excel)
    items = inventory_items_from_frame(read_table("STOCK.XLS", b"legacy workbook"))
    assert calls == ["xlrd"]
    assert items[0].available_stock == 4

def test_corrupt_xls_file():
    with pytest.raises(SpreadsheetReadError, match="Could not read"):
        read_table("stock.xls", b"not an ole2 workbook")

def test_corrupt_excel_file():
    with pytest.raises(SpreadsheetReadError):
        read_table("stock.xlsx", b"not a zip archive")

def test_export_can_be_reimported():
    """Exported inventory keeps the weekly burn rate and lead time under import headers."""
    items = [
        InventoryItem(id="1", brand="BMW", model="X3", version="30i", available_stock=45,
                      burn_rate=8, factory_order_lead_time=12, model_id="X3-30I"),
    ]
    forecast = forecast_frame(items, "day", today=date(2024, 3, 4))
    exported = inventory_export_frame(forecast, items)
    reimported = inventory_items_from_frame(read_table("export.csv", to_csv_bytes(exported)))
    assert reimported[0].burn_rate == 8.0
    assert reimported[0].available_stock == 45
    assert reimported[0].factory_order_lead_time == 12.0
    assert reimported[0].model_id == "X3-30I"

def test_procurement_import():
    df = pd.DataFrame([
        {"Brand": "BMW", "Model": "X3", "Client Name": "Juan García", "City": "Madrid",
         "Delayed?": "Yes", "Chassis Number": "WBA123", "Availability Date": "2024-02-05",
         "Promised Date at Signing": "not a date"},
        {"Brand": "Audi", "Model": "A4", "Delayed?": "no"},
    ])
    first, second = procurement_records_from_frame(df)
    assert first.delayed is True
    assert first.vin == "WBA123"
    assert first.availability_date == date(2024, 2, 5)
    assert first.promised_date_at_signing is None
    assert first.client_name == "Juan García"
    assert second.delayed is False
    assert second.city == ""
    assert second.vin is None
    assert second.id == "2"

def test_duplicate_procurement_ids_are_made_unique():
    df = read_table("orders.csv", b"ID,Brand,Client Name\n7,BMW,Ana\n7,BMW,Ana\n,Audi,Luis\n")
    records = procurement_records_from_frame(df)
    assert [r.id for r in records] == ["7", "7-2", "3"]

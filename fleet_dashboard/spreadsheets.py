"""
Spreadsheet import and export for the inventory and procurement views.

Imports never reject a row: cells that are missing or malformed fall back to
an empty string, zero or None. Only a file that cannot be read at all raises
SpreadsheetReadError, and the caller keeps its current data.
"""
from __future__ import annotations

import io
import math
import re
from datetime import date
from typing import Dict, List, Optional, get_args

import pandas as pd

from fleet_dashboard.data.models import InventoryItem, ProcurementRecord
from fleet_dashboard.logging import get_logger

logger = get_logger(__name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

INVENTORY_LABELS = {
    "id": "ID",
    "brand": "Brand",
    "model": "Model",
    "version": "Version",
    "available_stock": "Available Stock",
    "burn_rate": "Burn Rate",
    "factory_order_lead_time": "Factory Lead Time",
    "model_id": "Model ID",
}

# Extra header spellings accepted on import, on top of the field name and label
INVENTORY_ALIASES = {
    "brand": ["make"],
    "version": ["trim", "trim version", "trim/version"],
    "available_stock": ["stock", "units in stock"],
    "burn_rate": ["weekly burn rate", "burn rate (per week)"],
    "factory_order_lead_time": ["lead time", "factory order lead time", "factory lead time (weeks)", "flt"],
    "model_id": ["model identifier", "model code"],
}

PROCUREMENT_LABELS = {
    "id": "ID",
    "brand": "Brand",
    "model": "Model",
    "version": "Version",
    "color": "Color",
    "car_id": "Car ID",
    "status": "Status",
    "project": "Project",
    "leaseco": "Leaseco",
    "client_name": "Client Name",
    "city": "City",
    "internal_usage_date": "Internal Usage Date",
    "promised_date": "Promised Date",
    "displayed_date_to_client": "Displayed Date to Client",
    "delayed": "Delayed?",
    "request_date": "Request Date",
    "license_plate": "License Plate",
    "vin": "VIN",
    "contract_reference": "Contract Reference",
    "availability_date": "Availability Date",
    "promised_date_at_signing": "Promised Date at Signing",
    "current_estimated_delivery": "Current Estimated Delivery",
    "client_comments": "Client Comments",
    "desired_delivery_date": "Desired Delivery Date",
    "contract_end_date": "Contract End Date",
    "leaseco_request_date": "Leaseco Request Date",
    "etd_date": "ETD Date",
    "registration_start_date": "Registration Start Date",
    "delivery_ready_date": "Delivery Ready Date",
    "tracker_request_date": "Tracker Request Date",
    "estimated_installation_date": "Estimated Installation Date",
    "actual_installation_date": "Actual Installation Date",
    "dealer_name": "Dealer Name",
    "contact_person": "Contact Person",
    "phone_email": "Phone / Email",
}

PROCUREMENT_ALIASES = {
    "color": ["colour"],
    "vin": ["chassis number"],
    "delayed": ["delayed"],
    "phone_email": ["phone", "email"],
}

TRUE_VALUES = {"yes", "y", "true", "1", "si", "sí", "x"}


class SpreadsheetReadError(ValueError):
    """Raised when an uploaded file cannot be read as a table."""


def _normalize(header) -> str:
    return re.sub(r"[^a-z0-9]", "", str(header).lower())


def read_table(filename: str, content: bytes) -> pd.DataFrame:
    """Read an uploaded CSV or Excel file into a frame of strings."""
    lower = (filename or "").lower()
    try:
        if lower.endswith(".csv"):
            try:
                df = pd.read_csv(io.BytesIO(content), dtype=str, encoding="utf-8-sig")
            except UnicodeDecodeError:
                logger.info(f"UTF-8 decoding failed for {filename}. Retrying with 'latin-1'.")
                df = pd.read_csv(io.BytesIO(content), dtype=str, encoding="latin-1")
        elif lower.endswith(".xlsx"):
            df = pd.read_excel(io.BytesIO(content), dtype=str, engine="openpyxl")
        elif lower.endswith(".xls"):
            df = pd.read_excel(io.BytesIO(content), dtype=str, engine="xlrd")
        else:
            raise SpreadsheetReadError(f"Unsupported file type for {filename}: expected .csv, .xls or .xlsx")
    except SpreadsheetReadError:
        raise
    except Exception as e:
        logger.error(f"Could not read {filename}: {e}")
        raise SpreadsheetReadError(f"Could not read {filename}: {e}") from e

    logger.info(f"Read {len(df)} rows from {filename}")
    return df


def _column_map(df: pd.DataFrame, labels: Dict[str, str], aliases: Dict[str, List[str]]) -> Dict[str, str]:
    """Map model field -> frame column, using the first header that matches."""
    by_header = {}
    for column in df.columns:
        by_header.setdefault(_normalize(column), column)

    mapping = {}
    for field, label in labels.items():
        candidates = [field, label] + aliases.get(field, [])
        for candidate in candidates:
            column = by_header.get(_normalize(candidate))
            if column is not None:
                mapping[field] = column
                break
    return mapping


def _cell(row: pd.Series, mapping: Dict[str, str], field: str) -> Optional[str]:
    column = mapping.get(field)
    if column is None:
        return None
    value = row[column]
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    text = str(value).strip()
    return text or None


def _text(value: Optional[str]) -> str:
    return value or ""


def _number(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        # Decimal comma, e.g. "2,5"
        try:
            number = float(value.replace(",", "."))
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _non_negative(value: Optional[str]) -> float:
    number = _number(value)
    return max(number, 0.0) if number is not None else 0.0


def _date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def _unique_id(row: pd.Series, mapping: Dict[str, str], position: int, seen_ids: set) -> str:
    """The ID cell, else the row position; a repeated id gets a -<row> suffix."""
    row_id = _cell(row, mapping, "id") or str(position)
    if row_id in seen_ids:
        row_id = f"{row_id}-{position}"
    seen_ids.add(row_id)
    return row_id


def inventory_items_from_frame(df: pd.DataFrame) -> List[InventoryItem]:
    mapping = _column_map(df, INVENTORY_LABELS, INVENTORY_ALIASES)
    missing = [INVENTORY_LABELS[f] for f in INVENTORY_LABELS if f not in mapping and f not in ("id", "model_id")]
    if missing:
        logger.warning(f"Inventory import has no column for: {', '.join(missing)}")

    items = []
    seen_ids = set()
    for position, (_, row) in enumerate(df.iterrows(), start=1):
        item_id = _unique_id(row, mapping, position, seen_ids)
        lead_time = _number(_cell(row, mapping, "factory_order_lead_time"))
        items.append(InventoryItem(
            id=item_id,
            brand=_text(_cell(row, mapping, "brand")),
            model=_text(_cell(row, mapping, "model")),
            version=_text(_cell(row, mapping, "version")),
            available_stock=int(_non_negative(_cell(row, mapping, "available_stock"))),
            burn_rate=_non_negative(_cell(row, mapping, "burn_rate")),
            factory_order_lead_time=lead_time if lead_time is not None and lead_time >= 0 else None,
            model_id=_cell(row, mapping, "model_id"),
        ))
    return items


def procurement_records_from_frame(df: pd.DataFrame) -> List[ProcurementRecord]:
    mapping = _column_map(df, PROCUREMENT_LABELS, PROCUREMENT_ALIASES)
    fields = ProcurementRecord.model_fields
    date_fields = {name for name, info in fields.items() if date in get_args(info.annotation)}

    records = []
    seen_ids = set()
    for position, (_, row) in enumerate(df.iterrows(), start=1):
        values = {"id": _unique_id(row, mapping, position, seen_ids)}
        for name, info in fields.items():
            if name == "id":
                continue
            raw = _cell(row, mapping, name)
            if name == "delayed":
                values[name] = (raw or "").lower() in TRUE_VALUES
            elif name in date_fields:
                values[name] = _date(raw)
            elif info.is_required() or info.default == "":
                values[name] = _text(raw)
            else:
                values[name] = raw
        records.append(ProcurementRecord(**values))
    return records


def inventory_export_frame(forecast: pd.DataFrame, items: List[InventoryItem]) -> pd.DataFrame:
    """Forecast table with import-compatible headers, so an export can be re-imported."""
    by_id = {item.id: item for item in items}
    out = forecast.copy()
    out["weekly_burn_rate"] = out["id"].map(lambda i: by_id[i].burn_rate)
    out["model_id"] = out["id"].map(lambda i: by_id[i].model_id)
    return out.rename(columns={
        **INVENTORY_LABELS,
        "weekly_burn_rate": "Burn Rate",
        "burn_rate": "Burn Rate (selected time frame)",
        "time_to_empty": "Est. Out of Stock (time frame units)",
        "estimated_out_of_stock_date": "Est. Out of Stock Date",
        "recommended_order_date": "Recommended Order Date",
        "order_immediately": "Order Immediately",
        "status": "Status",
        "needs_attention": "Needs Attention",
    })


def procurement_export_frame(df: pd.DataFrame) -> pd.DataFrame:
    return df.rename(columns=PROCUREMENT_LABELS)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8-sig")


def to_xlsx_bytes(sheets: Dict[str, pd.DataFrame]) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as xw:
        for name, df in sheets.items():
            df.to_excel(xw, sheet_name=name[:31], index=False)
    buf.seek(0)
    return buf.read()

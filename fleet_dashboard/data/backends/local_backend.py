from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

import pandas as pd

from fleet_dashboard.config import get_config
from fleet_dashboard.forecast import StatusThresholds, forecast_frame, parse_lead_time
from fleet_dashboard.logging import get_logger
from fleet_dashboard.sample_data import sample_inventory, sample_procurement

from ..interface import DataAccess, StateStore
from ..models import (
    ProcurementFilters, InventoryItem, ProcurementRecord, TimeFrame,
    StringList, DateBounds
)

INVENTORY_KEY = "inventory_items"
LEAD_TIMES_KEY = "lead_times"
PROCUREMENT_KEY = "procurement_records"

PROCUREMENT_COLUMNS = list(ProcurementRecord.model_fields)

# Matched against the same-named record column as a case-insensitive substring
TEXT_FILTERS = ["brand", "model", "leaseco", "license_plate", "vin", "contract_reference", "city"]

# (from field, to field, record column)
DATE_RANGE_FILTERS = [
    ("availability_from", "availability_to", "availability_date"),
    ("installation_from", "installation_to", "actual_installation_date"),
    ("desired_delivery_from", "desired_delivery_to", "desired_delivery_date"),
]


class LocalDataAccess(DataAccess):
    """
    StateStore-backed implementation.
    - Items and records are kept in the store as JSON-compatible dicts.
    - Parsed inventory is cached and dropped whenever the store key changes.
    """

    def __init__(self, store: StateStore, seed_sample_data: bool | None = None) -> None:
        if seed_sample_data is None:
            seed_sample_data = get_config().seed_sample_data
        self.store = store
        self.seed_sample_data = seed_sample_data
        self.logger = get_logger(__name__)
        self._inventory_cache: Optional[List[InventoryItem]] = None
        self._unsubscribe = store.subscribe(INVENTORY_KEY, self._invalidate_inventory)

    def _invalidate_inventory(self, _value: Any) -> None:
        self._inventory_cache = None

    # ---------- inventory ----------

    def list_inventory(self) -> List[InventoryItem]:
        if self._inventory_cache is not None:
            return list(self._inventory_cache)

        raw = self.store.get(INVENTORY_KEY)
        if raw is None:
            if not self.seed_sample_data:
                return []
            self.logger.info("No saved inventory, loading sample data")
            return self.replace_inventory(sample_inventory())

        self._inventory_cache = [InventoryItem.model_validate(row) for row in raw]
        return list(self._inventory_cache)

    def replace_inventory(self, items: List[InventoryItem]) -> List[InventoryItem]:
        memory = self.get_lead_time_memory()
        restored = []
        for item in items:
            if item.factory_order_lead_time is None and item.lead_time_key in memory:
                item = item.model_copy(update={"factory_order_lead_time": memory[item.lead_time_key]})
            restored.append(item)

        self._save_inventory(restored)
        self.logger.info(f"Inventory replaced with {len(restored)} items")
        return list(restored)

    def update_lead_time(self, item_id: str, raw_value: Any) -> bool:
        try:
            lead_time = parse_lead_time(raw_value)
        except ValueError:
            self.logger.debug(f"Rejected lead time {raw_value!r} for item {item_id}")
            return False

        items = self.list_inventory()
        target = next((item for item in items if item.id == item_id), None)
        if target is None:
            self.logger.warning(f"No inventory item with id {item_id}")
            return False

        updated = [
            item.model_copy(update={"factory_order_lead_time": lead_time}) if item.id == item_id else item
            for item in items
        ]
        self._save_inventory(updated)

        memory = self.get_lead_time_memory()
        if lead_time is None:
            memory.pop(target.lead_time_key, None)
        else:
            memory[target.lead_time_key] = lead_time
        self.store.set(LEAD_TIMES_KEY, memory)
        return True

    def get_lead_time_memory(self) -> Dict[str, float]:
        return dict(self.store.get(LEAD_TIMES_KEY, {}))

    def get_inventory_forecast(self, time_frame: TimeFrame, today: Optional[date] = None) -> pd.DataFrame:
        return forecast_frame(
            self.list_inventory(),
            time_frame,
            today=today,
            thresholds=StatusThresholds.from_config(),
            lead_time_unit=get_config().lead_time_unit,
        )

    def _save_inventory(self, items: List[InventoryItem]) -> None:
        self.store.set(INVENTORY_KEY, [item.model_dump(mode="json") for item in items])

    # ---------- procurement ----------

    def _procurement_records(self) -> List[ProcurementRecord]:
        raw = self.store.get(PROCUREMENT_KEY)
        if raw is None:
            if not self.seed_sample_data:
                return []
            self.logger.info("No saved procurement records, loading sample data")
            return self.replace_procurement(sample_procurement())
        return [ProcurementRecord.model_validate(row) for row in raw]

    def _procurement_frame(self) -> pd.DataFrame:
        rows = [record.model_dump() for record in self._procurement_records()]
        return pd.DataFrame(rows, columns=PROCUREMENT_COLUMNS)

    def _distinct(self, column: str) -> StringList:
        values = {getattr(record, column) for record in self._procurement_records()}
        return StringList(values=sorted(v for v in values if v))

    def list_procurement_brands(self) -> StringList:
        return self._distinct("brand")

    def list_procurement_models(self) -> StringList:
        return self._distinct("model")

    def list_procurement_leasecos(self) -> StringList:
        return self._distinct("leaseco")

    def list_procurement_cities(self) -> StringList:
        return self._distinct("city")

    def get_availability_date_bounds(self) -> DateBounds:
        dates = [r.availability_date for r in self._procurement_records() if r.availability_date]
        if not dates:
            return DateBounds()
        return DateBounds(start_date=min(dates), end_date=max(dates))

    def get_procurement(self, filters: ProcurementFilters) -> pd.DataFrame:
        df = self._procurement_frame()

        for field in TEXT_FILTERS:
            value = getattr(filters, field)
            if not value or value == "all":
                continue
            s = value.strip().lower()
            df = df[df[field].fillna("").astype(str).str.lower().str.contains(s, regex=False)]

        if filters.delayed == "yes":
            df = df[df["delayed"].astype(bool)]
        elif filters.delayed == "no":
            df = df[~df["delayed"].astype(bool)]

        for start_field, end_field, column in DATE_RANGE_FILTERS:
            start = getattr(filters, start_field)
            end = getattr(filters, end_field)
            if start is None and end is None:
                continue
            # NaT never satisfies a comparison, so undated records drop out
            dates = pd.to_datetime(df[column], errors="coerce")
            mask = pd.Series(True, index=df.index)
            if start is not None:
                mask &= dates >= pd.Timestamp(start)
            if end is not None:
                mask &= dates <= pd.Timestamp(end)
            df = df[mask]

        return df.reset_index(drop=True)

    def get_procurement_record(self, record_id: str) -> Optional[ProcurementRecord]:
        return next((r for r in self._procurement_records() if r.id == record_id), None)

    def replace_procurement(self, records: List[ProcurementRecord]) -> List[ProcurementRecord]:
        self.store.set(PROCUREMENT_KEY, [record.model_dump(mode="json") for record in records])
        self.logger.info(f"Procurement replaced with {len(records)} records")
        return list(records)

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, List, Optional, Protocol

import pandas as pd

from .models import (
    # Filter classes
    ProcurementFilters,
    # Domain models
    InventoryItem,
    ProcurementRecord,
    TimeFrame,
    # List response models
    StringList,
    DateBounds,
)


# ---- Key-value state ----

Unsubscribe = Callable[[], None]


class StateStore(Protocol):
    """
    Key-value store holding the dashboard state.

    Values must be JSON-compatible. Subscribers of a key are called with the
    new value after every set() of that key.
    """

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def subscribe(self, key: str, callback: Callable[[Any], None]) -> Unsubscribe:
        """Register a callback for a key; the returned callable removes it."""
        ...


# ---- Data access protocol ----

class DataAccess(Protocol):
    """Backend-agnostic contract for the Streamlit UI."""

    # Inventory

    def list_inventory(self) -> List[InventoryItem]:
        """List all vehicles in stock."""
        ...

    def replace_inventory(self, items: List[InventoryItem]) -> List[InventoryItem]:
        """Replace the whole inventory, e.g. after an import."""
        ...

    def update_lead_time(self, item_id: str, raw_value: Any) -> bool:
        """Set an item's factory lead time from user input. Returns False if rejected."""
        ...

    def get_lead_time_memory(self) -> Dict[str, float]:
        """Lead times previously entered, keyed by model identifier."""
        ...

    def get_inventory_forecast(self, time_frame: TimeFrame, today: Optional[date] = None) -> pd.DataFrame:
        """Inventory table with burn rate, EOS, ROD and status columns."""
        ...

    # Procurement: queries to populate dropdowns and filters

    def list_procurement_brands(self) -> StringList:
        ...

    def list_procurement_models(self) -> StringList:
        ...

    def list_procurement_leasecos(self) -> StringList:
        ...

    def list_procurement_cities(self) -> StringList:
        ...

    def get_availability_date_bounds(self) -> DateBounds:
        ...

    # Procurement data queries

    def get_procurement(self, filters: ProcurementFilters) -> pd.DataFrame:
        """Get procurement records matching the filters."""
        ...

    def get_procurement_record(self, record_id: str) -> Optional[ProcurementRecord]:
        ...

    def replace_procurement(self, records: List[ProcurementRecord]) -> List[ProcurementRecord]:
        ...

from .data_filters import ProcurementFilters

from .inventory import (
    ForecastResult,
    InventoryItem,
    StockStatus,
    TimeFrame,
    TimeFrameOption,
)
from .procurement import ProcurementRecord
from .list_response import (
    StringList,
    DateBounds,
)

__all__ = [
    # Filter classes
    "ProcurementFilters",
    # Inventory models
    "ForecastResult",
    "InventoryItem",
    "StockStatus",
    "TimeFrame",
    "TimeFrameOption",
    # Procurement models
    "ProcurementRecord",
    # List response models
    "StringList",
    "DateBounds",
]

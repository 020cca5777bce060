from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ProcurementFilters(BaseModel):
    """Filters for the procurement table.

    Text filters match case-insensitively on a substring; an empty value or
    "all" disables the filter. Date ranges are inclusive on both ends.
    """
    brand: Optional[str] = Field(default=None, description="Brand filter")
    model: Optional[str] = Field(default=None, description="Model filter")
    leaseco: Optional[str] = Field(default=None, description="Leasing company filter")
    license_plate: Optional[str] = Field(default=None, description="Licence plate search")
    vin: Optional[str] = Field(default=None, description="VIN search")
    contract_reference: Optional[str] = Field(default=None, description="Contract reference search")
    city: Optional[str] = Field(default=None, description="City filter")
    delayed: Optional[Literal["yes", "no", "all"]] = Field(default=None, description="Delayed filter")
    # Advanced filters
    availability_from: Optional[date] = Field(default=None, description="Start of availability date range")
    availability_to: Optional[date] = Field(default=None, description="End of availability date range")
    installation_from: Optional[date] = Field(default=None, description="Start of tracker installation date range")
    installation_to: Optional[date] = Field(default=None, description="End of tracker installation date range")
    desired_delivery_from: Optional[date] = Field(default=None, description="Start of desired delivery date range")
    desired_delivery_to: Optional[date] = Field(default=None, description="End of desired delivery date range")

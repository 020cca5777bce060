from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class ProcurementRecord(BaseModel):
    """A single car procurement operation tracked from request to delivery."""
    id: str = Field(description="Unique record identifier")
    brand: str = Field(default="", description="Vehicle brand")
    model: str = Field(default="", description="Vehicle model")
    version: str = Field(default="", description="Trim / version")
    color: Optional[str] = Field(default=None, description="Exterior colour")
    car_id: Optional[str] = Field(default=None, description="Internal car identifier")
    status: Optional[str] = Field(default=None, description="Procurement status")
    project: Optional[str] = Field(default=None, description="Project the car belongs to")
    leaseco: str = Field(default="", description="Leasing company")
    client_name: str = Field(default="", description="Client name")
    city: str = Field(default="", description="Delivery city")
    internal_usage_date: Optional[date] = Field(default=None, description="Internal usage date")
    promised_date: Optional[date] = Field(default=None, description="Date promised to the client")
    displayed_date_to_client: Optional[date] = Field(default=None, description="Date displayed to the client")
    delayed: bool = Field(default=False, description="Delivery is delayed")
    request_date: Optional[date] = Field(default=None, description="Request date")
    license_plate: Optional[str] = Field(default=None, description="Licence plate")
    vin: Optional[str] = Field(default=None, description="Chassis number")
    contract_reference: Optional[str] = Field(default=None, description="Contract reference")
    availability_date: Optional[date] = Field(default=None, description="Availability date")
    promised_date_at_signing: Optional[date] = Field(default=None, description="Promised date at contract signing")
    current_estimated_delivery: Optional[date] = Field(default=None, description="Current estimated delivery date")
    client_comments: Optional[str] = Field(default=None, description="Client comments")
    desired_delivery_date: Optional[date] = Field(default=None, description="Client's desired delivery date")
    contract_end_date: Optional[date] = Field(default=None, description="Contract end date")
    # Leaseco dates
    leaseco_request_date: Optional[date] = Field(default=None, description="Leaseco request date")
    etd_date: Optional[date] = Field(default=None, description="Estimated time of departure")
    registration_start_date: Optional[date] = Field(default=None, description="Registration start date")
    delivery_ready_date: Optional[date] = Field(default=None, description="Delivery ready date")
    # Tracker dates
    tracker_request_date: Optional[date] = Field(default=None, description="Tracker request date")
    estimated_installation_date: Optional[date] = Field(default=None, description="Estimated tracker installation date")
    actual_installation_date: Optional[date] = Field(default=None, description="Actual tracker installation date")
    # Delivery dealer info
    dealer_name: Optional[str] = Field(default=None, description="Delivering dealer")
    contact_person: Optional[str] = Field(default=None, description="Dealer contact person")
    phone_email: Optional[str] = Field(default=None, description="Dealer phone / email")

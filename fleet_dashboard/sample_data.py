"""
Built-in sample data shown until the user imports a spreadsheet.

Procurement records would normally come from the CRM; these stand in for it.
"""

from __future__ import annotations

from typing import List

from fleet_dashboard.data.models import InventoryItem, ProcurementRecord


def sample_inventory() -> List[InventoryItem]:
    return [
        InventoryItem(
            id="1", brand="BMW", model="X3", version="xDrive30i M Sport",
            available_stock=45, burn_rate=8, factory_order_lead_time=12,
        ),
        InventoryItem(
            id="2", brand="Mercedes-Benz", model="C-Class", version="C220d AMG Line",
            available_stock=12, burn_rate=15, factory_order_lead_time=16,
        ),
        InventoryItem(
            id="3", brand="Audi", model="A4", version="Avant 2.0 TDI S-Line",
            available_stock=8, burn_rate=6, factory_order_lead_time=None,
        ),
        InventoryItem(
            id="4", brand="Volkswagen", model="Golf", version="GTI 2.0 TSI",
            available_stock=3, burn_rate=12, factory_order_lead_time=8,
        ),
        InventoryItem(
            id="5", brand="Tesla", model="Model Y", version="Long Range AWD",
            available_stock=25, burn_rate=20, factory_order_lead_time=4,
        ),
    ]


def sample_procurement() -> List[ProcurementRecord]:
    return [
        ProcurementRecord(
            id="1",
            brand="BMW",
            model="X3",
            version="xDrive20d",
            color="Mineral Grey Metallic",
            car_id="RVL-BMW-001",
            status="In Transit",
            project="Corporate Fleet 2024",
            leaseco="ALD Automotive",
            client_name="Juan García",
            city="Madrid",
            internal_usage_date="2024-02-15",
            promised_date="2024-02-10",
            displayed_date_to_client="2024-02-12",
            delayed=True,
            request_date="2024-01-10",
            license_plate="1234ABC",
            vin="WBA12345678901234",
            contract_reference="CNT-2024-001",
            availability_date="2024-02-05",
            promised_date_at_signing="2024-02-10",
            current_estimated_delivery="2024-02-15",
            client_comments="Client prefers delivery in the morning",
            desired_delivery_date="2024-02-08",
            contract_end_date="2027-02-10",
            leaseco_request_date="2024-01-12",
            etd_date="2024-02-01",
            registration_start_date="2024-02-03",
            delivery_ready_date="2024-02-14",
            tracker_request_date="2024-02-05",
            estimated_installation_date="2024-02-10",
            actual_installation_date="2024-02-09",
            dealer_name="BMW Madrid Centro",
            contact_person="Ana Ruiz",
            phone_email="+34 91 123 4567 / ana.ruiz@bmwmadrid.com",
        ),
        ProcurementRecord(
            id="2",
            brand="Audi",
            model="A4",
            version="2.0 TDI",
            color="Ibis White",
            car_id="RVL-AUDI-002",
            status="Order Placed",
            leaseco="Renting Finders",
            client_name="María López",
            city="Barcelona",
            internal_usage_date="2024-02-20",
            promised_date="2024-02-25",
            displayed_date_to_client="2024-02-25",
            delayed=False,
            request_date="2024-01-15",
            contract_reference="CNT-2024-002",
            availability_date="2024-02-18",
            promised_date_at_signing="2024-02-25",
            current_estimated_delivery="2024-02-20",
            desired_delivery_date="2024-02-22",
            contract_end_date="2027-02-25",
            leaseco_request_date="2024-01-17",
            tracker_request_date="2024-02-15",
            estimated_installation_date="2024-02-20",
        ),
        ProcurementRecord(
            id="3",
            brand="Mercedes",
            model="C-Class",
            version="C200d",
            color="Obsidian Black Metallic",
            car_id="RVL-MERC-003",
            status="Production",
            project="Executive Fleet",
            leaseco="Alphabet",
            client_name="Carlos Martín",
            city="Valencia",
            internal_usage_date="2024-03-01",
            promised_date="2024-02-28",
            displayed_date_to_client="2024-03-05",
            delayed=True,
            request_date="2024-01-20",
            license_plate="5678DEF",
            vin="WDD12345678901234",
            contract_reference="CNT-2024-003",
            availability_date="2024-02-25",
            promised_date_at_signing="2024-02-28",
            current_estimated_delivery="2024-03-01",
            client_comments="Urgent delivery needed",
            desired_delivery_date="2024-02-26",
            contract_end_date="2027-02-28",
            leaseco_request_date="2024-01-22",
            etd_date="2024-02-20",
            registration_start_date="2024-02-22",
            delivery_ready_date="2024-03-01",
            tracker_request_date="2024-02-25",
            estimated_installation_date="2024-03-01",
            dealer_name="Mercedes Valencia",
            contact_person="Pedro Sánchez",
            phone_email="+34 96 987 6543 / pedro.sanchez@mbvalencia.com",
        ),
    ]

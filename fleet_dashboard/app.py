import math
from datetime import date

import pandas as pd
import streamlit as st

# Configuration
from fleet_dashboard.config import get_config
from fleet_dashboard.logging import get_logger

# DataAccess interface + StateStore-backed implementation
from fleet_dashboard.data.util import get_data_access, get_state_store
from fleet_dashboard.data.models import ProcurementFilters
from fleet_dashboard.forecast import TIME_FRAME_OPTIONS, get_time_frame_option
from fleet_dashboard.spreadsheets import (
    XLSX_MIME,
    SpreadsheetReadError,
    inventory_export_frame,
    inventory_items_from_frame,
    procurement_export_frame,
    procurement_records_from_frame,
    read_table,
    to_csv_bytes,
    to_xlsx_bytes,
)

st.set_page_config(page_title="Fleet Inventory & Procurement", layout="wide")

config = get_config()
logger = get_logger("fleet_dashboard.app")

# -----------------------------------------------------------------------------
# State: one store per browser session; the JSON backend also persists to disk
# -----------------------------------------------------------------------------
if "data_access" not in st.session_state:
    st.session_state["data_access"] = get_data_access(get_state_store())
da = st.session_state["data_access"]

UNIT_LABEL = config.lead_time_unit


def _import_once(uploaded, key: str, to_models, replace) -> None:
    """Import an uploaded file unless this exact upload was already applied."""
    if uploaded is None or st.session_state.get(key) == uploaded.file_id:
        return
    st.session_state[key] = uploaded.file_id
    try:
        df = read_table(uploaded.name, uploaded.getvalue())
    except SpreadsheetReadError as e:
        logger.warning(f"Import of {uploaded.name} failed: {e}")
        st.toast(f"Could not import {uploaded.name}. Existing data was kept.", icon="⚠️")
        return
    rows = replace(to_models(df))
    st.toast(f"Imported {len(rows)} rows from {uploaded.name}", icon="✅")


def _fmt_date(value) -> str:
    if value is None or pd.isna(value):
        return "—"
    return pd.Timestamp(value).strftime("%d/%m/%Y")


# -----------------------------------------------------------------------------
# Vehicle inventory
# -----------------------------------------------------------------------------
def render_inventory() -> None:
    st.title("Vehicle Inventory Management")
    st.caption("Track vehicle stock levels, burn rates, and procurement planning")

    c1, c2 = st.columns([1, 2])
    labels = [o.label for o in TIME_FRAME_OPTIONS]
    default = get_time_frame_option(config.default_time_frame)
    label = c1.selectbox("Time Frame", labels, index=labels.index(default.label))
    option = next(o for o in TIME_FRAME_OPTIONS if o.label == label)

    uploaded = c2.file_uploader("Import Data", type=["csv", "xls", "xlsx"], key="inventory_upload")
    _import_once(uploaded, "inventory_import_id", inventory_items_from_frame, da.replace_inventory)

    today = date.today()
    forecast = da.get_inventory_forecast(option.value, today=today)

    table = pd.DataFrame({
        "id": forecast["id"],
        "Brand": forecast["brand"],
        "Model": forecast["model"],
        "Version": forecast["version"],
        "Available Stock": [
            f"{stock} ⚠" if attention else f"{stock}"
            for stock, attention in zip(forecast["available_stock"], forecast["needs_attention"])
        ],
        f"Burn Rate ({option.label.lower()})": forecast["burn_rate"],
        "Est. Out of Stock": [
            "∞" if math.isinf(t) else _fmt_date(d)
            for t, d in zip(forecast["time_to_empty"], forecast["estimated_out_of_stock_date"])
        ],
        f"Factory Lead Time ({UNIT_LABEL})": [
            "" if pd.isna(v) else f"{v:g}" for v in forecast["factory_order_lead_time"]
        ],
        "Recommended Order Date": [
            "Order immediately" if now else _fmt_date(d)
            for d, now in zip(forecast["recommended_order_date"], forecast["order_immediately"])
        ],
        "Status": forecast["status"],
    })

    lead_col = f"Factory Lead Time ({UNIT_LABEL})"
    editor_key = f"inventory_editor_{st.session_state.get('inventory_editor_version', 0)}"
    edited = st.data_editor(
        table,
        key=editor_key,
        hide_index=True,
        use_container_width=True,
        disabled=[c for c in table.columns if c != lead_col],
        column_config={
            "id": None,
            lead_col: st.column_config.TextColumn(lead_col, help=f"Enter {UNIT_LABEL}"),
        },
    )

    changed = edited[edited[lead_col] != table[lead_col]]
    if not changed.empty:
        accepted = False
        for item_id, raw in zip(changed["id"], changed[lead_col]):
            if da.update_lead_time(item_id, raw):
                accepted = True
        # Fresh editor so rejected edits fall back to the stored value
        st.session_state["inventory_editor_version"] = st.session_state.get("inventory_editor_version", 0) + 1
        if accepted:
            logger.info(f"Updated lead time for {len(changed)} items")
        st.rerun()

    export = inventory_export_frame(forecast, da.list_inventory())
    d1, d2, _ = st.columns([1, 1, 4])
    d1.download_button(
        "Export CSV", data=to_csv_bytes(export),
        file_name=f"vehicle_inventory_{today.isoformat()}.csv", mime="text/csv",
    )
    d2.download_button(
        "Export Excel", data=to_xlsx_bytes({"Inventory": export}),
        file_name=f"vehicle_inventory_{today.isoformat()}.xlsx", mime=XLSX_MIME,
    )


# -----------------------------------------------------------------------------
# Car procurement
# -----------------------------------------------------------------------------
def _select(container, label: str, values, all_label: str):
    sel = container.selectbox(label, [all_label] + list(values))
    return None if sel == all_label else sel


def render_procurement() -> None:
    st.title("Car Procurement Dashboard")

    st.markdown("### Filters")
    c1, c2, c3, c4 = st.columns(4)
    brand = _select(c1, "Brand", da.list_procurement_brands().values, "All Brands")
    model = _select(c2, "Model", da.list_procurement_models().values, "All Models")
    leaseco = _select(c3, "Leaseco", da.list_procurement_leasecos().values, "All Leasecos")
    delayed_sel = c4.selectbox("Delayed?", ["All", "Yes", "No"])

    c1, c2, c3, c4 = st.columns(4)
    license_plate = c1.text_input("License plate")
    vin = c2.text_input("VIN")
    contract_reference = c3.text_input("Contract reference")
    city = _select(c4, "City", da.list_procurement_cities().values, "All Cities")

    with st.expander("Advanced Filters"):
        bounds = da.get_availability_date_bounds()
        a1, a2, a3 = st.columns(3)
        a1.markdown("Availability Date Range")
        availability_from = a1.date_input("From", value=None, key="availability_from")
        availability_to = a1.date_input("To", value=None, key="availability_to")
        if bounds.start_date:
            a1.caption(f"Records span {_fmt_date(bounds.start_date)} – {_fmt_date(bounds.end_date)}")
        a2.markdown("Tracker Installation Date")
        installation_from = a2.date_input("From", value=None, key="installation_from")
        installation_to = a2.date_input("To", value=None, key="installation_to")
        a3.markdown("Desired Delivery Date")
        desired_from = a3.date_input("From", value=None, key="desired_from")
        desired_to = a3.date_input("To", value=None, key="desired_to")

    filters = ProcurementFilters(
        brand=brand,
        model=model,
        leaseco=leaseco,
        license_plate=license_plate,
        vin=vin,
        contract_reference=contract_reference,
        city=city,
        delayed=None if delayed_sel == "All" else delayed_sel.lower(),
        availability_from=availability_from,
        availability_to=availability_to,
        installation_from=installation_from,
        installation_to=installation_to,
        desired_delivery_from=desired_from,
        desired_delivery_to=desired_to,
    )
    df = da.get_procurement(filters)

    st.markdown(f"### Procurement Operations ({len(df)} records)")
    show = pd.DataFrame({
        "Brand": df["brand"],
        "Model": df["model"],
        "Version": df["version"],
        "Leaseco": df["leaseco"],
        "Client Name": df["client_name"],
        "City": df["city"],
        "Internal Usage Date": df["internal_usage_date"].map(_fmt_date),
        "Promised Date": df["promised_date"].map(_fmt_date),
        "Delayed?": df["delayed"].map(lambda d: "Yes" if d else "No"),
    })
    st.dataframe(show, hide_index=True, use_container_width=True)

    if not df.empty:
        labels = {r.id: f"{r.brand} {r.model} – {r.client_name} ({r.id})" for r in df.itertuples()}
        picked = st.selectbox("Car details", list(labels), format_func=labels.get)
        record = da.get_procurement_record(picked)
        if record is not None:
            render_record_details(record)

    u1, u2, u3 = st.columns([2, 1, 1])
    uploaded = u1.file_uploader("Import Data", type=["csv", "xls", "xlsx"], key="procurement_upload")
    _import_once(uploaded, "procurement_import_id", procurement_records_from_frame, da.replace_procurement)
    export = procurement_export_frame(df)
    u2.download_button("Export CSV", data=to_csv_bytes(export), file_name="procurement.csv", mime="text/csv")
    u3.download_button(
        "Export Excel", data=to_xlsx_bytes({"Procurement": export}),
        file_name="procurement.xlsx", mime=XLSX_MIME,
    )


def _field(container, label: str, value, missing: str = "Not assigned") -> None:
    if isinstance(value, date):
        value = _fmt_date(value)
    container.markdown(f"**{label}**  \n{value or missing}")


def render_record_details(record) -> None:
    st.markdown(f"#### Car Details: {record.brand} {record.model}")

    st.markdown("##### Basic Information")
    b1, b2 = st.columns(2)
    _field(b1, "Leaseco", record.leaseco)
    _field(b2, "Brand", record.brand)
    _field(b1, "Model", record.model)
    _field(b2, "Version", record.version)
    _field(b1, "Color", record.color, "Not specified")
    _field(b2, "Car ID", record.car_id)
    _field(b1, "Status", record.status, "Unknown")
    _field(b2, "Project", record.project)

    st.markdown("##### Identification")
    i1, i2, i3 = st.columns(3)
    _field(i1, "License Plate", record.license_plate)
    _field(i2, "Chassis Number", record.vin)
    _field(i3, "Contract Reference", record.contract_reference)

    st.markdown("##### Key Dates")
    k1, k2, k3 = st.columns(3)
    _field(k1, "Internal Use Date", record.internal_usage_date, "Not available")
    _field(k2, "Promised Date to Client", record.promised_date, "Not available")
    _field(k3, "Displayed Date to Client", record.displayed_date_to_client, "Not available")

    with st.expander("Leaseco Dates"):
        _field(st, "Leaseco Request Date", record.leaseco_request_date, "Not available")
        _field(st, "ETD Date", record.etd_date, "Not available")
        _field(st, "Registration Start Date", record.registration_start_date, "Not available")
        _field(st, "Delivery Ready Date", record.delivery_ready_date, "Not available")

    with st.expander("Tracker Dates"):
        _field(st, "Tracker Request Date", record.tracker_request_date, "Not available")
        _field(st, "Estimated Installation Date", record.estimated_installation_date, "Not available")
        _field(st, "Actual Installation Date", record.actual_installation_date, "Not available")

    with st.expander("Delivery Dealer Info"):
        _field(st, "Dealer Name", record.dealer_name)
        _field(st, "Contact Person", record.contact_person)
        _field(st, "Phone / Email", record.phone_email, "Not available")


# -----------------------------------------------------------------------------
# Navigation
# -----------------------------------------------------------------------------
page = st.sidebar.radio("View", ["Vehicle Inventory", "Car Procurement"])
if page == "Vehicle Inventory":
    render_inventory()
else:
    render_procurement()

with st.sidebar.expander("Data source"):
    st.write(
        f"State is kept in a **{config.state_backend}** store"
        + (f" persisted to `{config.state_file}`." if config.state_backend == "json" else ".")
    )

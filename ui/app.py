"""Streamlit UI for the tour pricing calculator.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json  # noqa: E402
from typing import Any  # noqa: E402

import httpx  # noqa: E402
import streamlit as st  # noqa: E402

from tourcalc.config import get_settings  # noqa: E402
from ui import helpers  # noqa: E402

# Configuration
BACKEND_URL = get_settings().backend_url

# Vectors edited day by day: (label, field prefix, has before/after windows)
DAILY_VECTORS = [
    ("Staff lunches", "staffDailyLunchCosts", True),
    ("Staff accommodation", "staffDailyAccommodationCosts", True),
    ("Van rental", "vanDailyRentalCosts", True),
    ("Fuel", "fuelDailyCosts", True),
    ("Guide bike", "guideBikeDailyCosts", False),
    ("Client bike rental", "bikeDailyRentalCosts", False),
    ("Client dinners", "clientDailyDinnerCosts", False),
]

# Page config
st.set_page_config(page_title="TourCalc Pro", page_icon="🚴", layout="wide")

# Initialize session state
if "error" not in st.session_state:
    st.session_state.error = None
if "advisory" not in st.session_state:
    st.session_state.advisory = None
if "autosave_checked" not in st.session_state:
    st.session_state.autosave_checked = False


def run_action(action: Any, *args: Any, **kwargs: Any) -> Any:
    """Call an API helper, remembering the error message on failure."""
    try:
        result = action(*args, **kwargs)
        st.session_state.error = None
        return result
    except httpx.HTTPError as e:
        st.session_state.error = helpers.error_message(e)
        return None


def daily_row(label: str, values: list[float], variant: str, key: str) -> list[float]:
    """Number inputs for one per-day vector."""
    if not values:
        return []
    st.caption(label)
    columns = st.columns(min(len(values), 7))
    edited = []
    for index, (day, value) in enumerate(zip(helpers.day_labels(len(values), variant), values)):
        with columns[index % len(columns)]:
            edited.append(
                st.number_input(day, value=float(value), min_value=0.0, step=5.0,
                                key=f"{key}_{index}")
            )
    return edited


# Title
st.title("🚴 TourCalc Pro")
st.markdown("*Cost and price calculator for guided cycling tours*")
st.divider()

try:
    state = helpers.get_session(BACKEND_URL)
except httpx.HTTPError as e:
    st.error(f"❌ Backend unreachable at {BACKEND_URL}: {helpers.error_message(e)}")
    st.stop()

params: dict[str, Any] = state["params"]
breakdown: dict[str, Any] = state["breakdown"]

# Offer the autosaved session once per browser session
if not st.session_state.autosave_checked:
    autosave = run_action(helpers.get_autosave, BACKEND_URL)
    if autosave:
        st.warning("Found an automatically saved session. Restore it?")
        col_yes, col_no = st.columns(2)
        if col_yes.button("Restore autosave"):
            run_action(helpers.restore_autosave, BACKEND_URL)
            st.session_state.autosave_checked = True
            st.rerun()
        if col_no.button("Ignore"):
            st.session_state.autosave_checked = True
            st.rerun()
    else:
        st.session_state.autosave_checked = True

if st.session_state.error:
    st.error(f"❌ {st.session_state.error}")
if state.get("hotelNightsWarning"):
    st.warning(f"⚠️ {state['hotelNightsWarning']}")

# Main layout - 2 columns
col_left, col_right = st.columns([2, 1.3])

# =============================================================================
# LEFT COLUMN - TRIP PARAMETERS
# =============================================================================
with col_left:
    st.subheader("📋 Trip setup")
    if st.button("New trip (defaults)"):
        run_action(helpers.reset_session, BACKEND_URL)
        st.rerun()

    with st.form("general_form"):
        trip_name = st.text_input("Trip name", value=params["tripName"])
        col_a, col_b = st.columns(2)
        participants = col_a.number_input(
            "Participants", min_value=0, value=params["participantCount"], step=1
        )
        margin = col_b.number_input(
            "Profit margin (%)", value=float(params["profitMarginPercent"]), step=1.0
        )
        col_c, col_d = st.columns(2)
        banking = col_c.number_input(
            "Banking fees (%)", min_value=0.0, value=float(params["bankingFeePercent"]), step=0.5
        )
        agency = col_d.number_input(
            "Agency commission (%)",
            min_value=0.0,
            value=float(params["agencyCommissionPercent"]),
            step=1.0,
        )
        col_e, col_f, col_g = st.columns(3)
        transfer = col_e.number_input(
            "Transfers (total)", min_value=0.0, value=float(params["clientTotalTransferCost"])
        )
        experience = col_f.number_input(
            "Experiences / person", min_value=0.0, value=float(params["clientExperienceCost"])
        )
        insurance = col_g.number_input(
            "Insurance / person", min_value=0.0, value=float(params["clientInsuranceCost"])
        )
        col_h, col_i = st.columns(2)
        tolls = col_h.number_input(
            "Staff tolls", min_value=0.0, value=float(params["staffTollsCost"])
        )
        scouting = col_i.number_input(
            "Scouting", min_value=0.0, value=float(params["scoutingCost"])
        )
        has_bike = st.checkbox("Bike rental for clients", value=params["hasBikeRental"])

        if st.form_submit_button("Apply", type="primary"):
            run_action(
                helpers.patch_session,
                BACKEND_URL,
                {
                    "tripName": trip_name,
                    "participantCount": int(participants),
                    "profitMarginPercent": float(margin),
                    "bankingFeePercent": float(banking),
                    "agencyCommissionPercent": float(agency),
                    "clientTotalTransferCost": float(transfer),
                    "clientExperienceCost": float(experience),
                    "clientInsuranceCost": float(insurance),
                    "staffTollsCost": float(tolls),
                    "scoutingCost": float(scouting),
                    "hasBikeRental": has_bike,
                },
            )
            st.rerun()

    # --- DURATION ---
    col_dur, col_dur_btn = st.columns([3, 1])
    new_duration = col_dur.number_input(
        "Tour duration (days)", min_value=0, value=params["durationDays"], step=1
    )
    if col_dur_btn.button("Set duration") and new_duration != params["durationDays"]:
        run_action(helpers.set_duration, BACKEND_URL, int(new_duration))
        st.rerun()

    # --- STAFF ---
    st.markdown("#### 👥 Staff")
    for role_key, role_label in (("guide", "Cycling guide"), ("driver", "Driver")):
        role = params[role_key]
        with st.expander(role_label, expanded=False):
            included = st.checkbox("Included", value=role["included"], key=f"{role_key}_inc")
            travel = st.number_input(
                "Travel cost", min_value=0.0, value=float(role["travelCost"]),
                key=f"{role_key}_travel",
            )
            during = daily_row("Daily rates", role["dailyRatesDuring"], "during", f"{role_key}_d")
            before = daily_row(
                "Rates before tour", role["dailyRatesBefore"], "before", f"{role_key}_b"
            )
            after = daily_row("Rates after tour", role["dailyRatesAfter"], "after", f"{role_key}_a")
            if st.button("Save staff member", key=f"{role_key}_save"):
                updated = {
                    **role,
                    "included": included,
                    "travelCost": float(travel),
                    "dailyRatesDuring": during,
                    "dailyRatesBefore": before,
                    "dailyRatesAfter": after,
                }
                run_action(helpers.patch_session, BACKEND_URL, {role_key: updated})
                st.rerun()

            col_before, col_after = st.columns(2)
            for side, column in (("before", col_before), ("after", col_after)):
                field = "extraDaysBefore" if side == "before" else "extraDaysAfter"
                count = column.number_input(
                    f"Extra days {side}", min_value=0, value=role[field], step=1,
                    key=f"{role_key}_{side}_extra",
                )
                if count != role[field]:
                    run_action(helpers.set_extra_days, BACKEND_URL, role_key, side, int(count))
                    st.rerun()

    # --- DAILY COSTS ---
    st.markdown("#### 📅 Daily costs")
    for label, field, has_windows in DAILY_VECTORS:
        with st.expander(label, expanded=False):
            changes: dict[str, list[float]] = {}
            if has_windows:
                changes[f"{field}Before"] = daily_row(
                    "Before", params[f"{field}Before"], "before", f"{field}_b"
                )
            changes[field] = daily_row("Tour", params[field], "during", field)
            if has_windows:
                changes[f"{field}After"] = daily_row(
                    "After", params[f"{field}After"], "after", f"{field}_a"
                )
            col_save, col_fill = st.columns(2)
            if col_save.button("Save", key=f"{field}_save"):
                run_action(helpers.patch_session, BACKEND_URL, changes)
                st.rerun()
            if col_fill.button("Copy first day to all", key=f"{field}_fill"):
                run_action(
                    helpers.patch_session, BACKEND_URL, {field: helpers.fill_all(params[field])}
                )
                st.rerun()

    # --- HOTELS ---
    st.markdown("#### 🏨 Client hotels")
    stays = params["hotelStays"]
    edited_stays = []
    for stay in stays:
        col_name, col_nights, col_cost, col_del = st.columns([3, 1, 1, 1])
        name = col_name.text_input("Hotel", value=stay["name"], key=f"hotel_name_{stay['id']}")
        nights = col_nights.number_input(
            "Nights", min_value=0, value=stay["nights"], step=1, key=f"hotel_n_{stay['id']}"
        )
        cost = col_cost.number_input(
            "Cost/night", min_value=0.0, value=float(stay["costPerNight"]),
            key=f"hotel_c_{stay['id']}",
        )
        if col_del.button("🗑️", key=f"hotel_del_{stay['id']}", disabled=len(stays) <= 1):
            run_action(helpers.remove_hotel_stay, BACKEND_URL, stay["id"])
            st.rerun()
        edited_stays.append({**stay, "name": name, "nights": int(nights), "costPerNight": cost})

    col_hotel_save, col_hotel_add = st.columns(2)
    if col_hotel_save.button("Save hotels"):
        run_action(helpers.patch_session, BACKEND_URL, {"hotelStays": edited_stays})
        st.rerun()
    if col_hotel_add.button("➕ Add hotel"):
        run_action(helpers.add_hotel_stay, BACKEND_URL)
        st.rerun()

# =============================================================================
# RIGHT COLUMN - RESULTS, ADVISORY, SAVES
# =============================================================================
with col_right:
    st.subheader("💶 Results")

    for label, value in helpers.build_summary_metrics(breakdown).items():
        st.metric(label, value)

    chart_data = helpers.build_cost_chart_data(breakdown)
    if chart_data:
        st.bar_chart(chart_data, x="name", y="value")

    with st.expander("🔧 Raw breakdown (dev)"):
        st.json(breakdown)

    st.divider()

    # --- EXPORT ---
    st.markdown("#### 📤 Export")
    col_csv, col_pdf = st.columns(2)
    stem = "_".join((params["tripName"] or "Untitled trip").split())
    csv_bytes = run_action(helpers.download_export, BACKEND_URL, "csv")
    if csv_bytes is not None:
        col_csv.download_button("CSV", csv_bytes, f"{stem}_quote.csv", "text/csv")
    pdf_bytes = run_action(helpers.download_export, BACKEND_URL, "pdf")
    if pdf_bytes is not None:
        col_pdf.download_button("PDF", pdf_bytes, f"{stem}_quote.pdf", "application/pdf")

    st.divider()

    # --- ADVISORY ---
    st.markdown("#### ✨ Advisory")
    col_prop, col_anal = st.columns(2)
    for kind, column, label in (
        ("proposal", col_prop, "Draft proposal"),
        ("analysis", col_anal, "Analyze costs"),
    ):
        if column.button(label):
            with st.spinner("Generating..."):
                result = run_action(helpers.request_advisory, BACKEND_URL, kind)
            if result is not None:
                st.session_state.advisory = result
            st.rerun()
    if st.session_state.advisory:
        st.markdown(st.session_state.advisory["text"])

    st.divider()

    # --- SAVED TRIPS ---
    st.markdown("#### 💾 Saved trips")
    save_name = st.text_input("Save as", value=params["tripName"])
    if st.button("Save current trip"):
        run_action(helpers.save_trip, BACKEND_URL, save_name or None)
        st.rerun()

    for trip in run_action(helpers.list_trips, BACKEND_URL) or []:
        col_trip, col_load, col_remove = st.columns([3, 1, 1])
        col_trip.markdown(f"**{trip['name']}**  \n{trip['date'][:10]}")
        if col_load.button("Load", key=f"load_{trip['id']}"):
            run_action(helpers.load_trip, BACKEND_URL, trip["id"])
            st.rerun()
        if col_remove.button("🗑️", key=f"delete_{trip['id']}"):
            run_action(helpers.delete_trip, BACKEND_URL, trip["id"])
            st.rerun()

    with st.expander("Backup"):
        backup = run_action(helpers.download_backup, BACKEND_URL)
        if backup is not None:
            st.download_button("Download backup", backup, "tourcalc_backup.json", "application/json")
        uploaded = st.file_uploader("Import backup", type=["json"])
        overwrite = st.checkbox("Replace all saved trips")
        if uploaded is not None and st.button("Import"):
            run_action(helpers.upload_backup, BACKEND_URL, uploaded.getvalue(), overwrite)
            st.rerun()

    with st.expander("Single trip file"):
        st.download_button(
            "Download current trip",
            json.dumps(params, indent=2),
            f"{stem}.json",
            "application/json",
        )
        trip_file = st.file_uploader("Open trip file", type=["json"], key="trip_file")
        if trip_file is not None and st.button("Open"):
            try:
                trip_params = json.loads(trip_file.getvalue())
            except ValueError:
                st.session_state.error = "Trip file is not valid JSON"
            else:
                run_action(helpers.replace_session, BACKEND_URL, trip_params)
            st.rerun()

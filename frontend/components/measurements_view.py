import streamlit as st
import pandas as pd

from robot_console.display import WORK_PLAN_STATUS_LABELS, format_datetime, format_reading, label
from robot_console.view_state import SingleExpansion
from components.pagination import get_controller, render_pager, render_refresh_button


def render_measurements():
    """Render the collected measurements page"""

    st.header("🌡️ Collected Measurements")

    controller = get_controller("work-plans/measurements")
    plans = controller.items

    if "measurement_expansion" not in st.session_state:
        st.session_state.measurement_expansion = SingleExpansion()
    expansion = st.session_state.measurement_expansion

    if not plans:
        st.info("No measurements collected yet.")
    else:
        for plan in plans:
            render_plan(plan, expansion)

    render_pager(controller, key="measurements")
    render_refresh_button(controller, key="measurements")


def render_plan(plan, expansion):
    is_open = expansion.plan_id == plan.work_plan_id
    arrow = "▼" if is_open else "▶"

    with st.container(border=True):
        if st.button(
            f"{arrow} 📋 {plan.description}  ·  {label(WORK_PLAN_STATUS_LABELS, plan.status)}",
            key=f"measurement_plan_{plan.work_plan_id}"
        ):
            expansion.toggle_plan(plan.work_plan_id)
            st.rerun()

        st.progress(min(max(plan.progress, 0), 100) / 100, text=f"Progress: {plan.progress:g}%")

        if not is_open:
            return

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Planned readings", plan.total_measurements)
        with col2:
            st.metric("Completed readings", plan.completed_measurements)
        with col3:
            st.metric("Thresholds", f"±{plan.temp_threshold:g}°C / ±{plan.hum_threshold:g}%")
        with col4:
            st.metric("Max violations", plan.violation_count)

        for item in plan.items:
            render_location(plan, item, expansion)


def render_location(plan, item, expansion):
    is_open = expansion.location_id == item.rfid_tag_id
    arrow = "▼" if is_open else "▶"

    if st.button(
        f"{arrow} 🪪 {item.uid} - {item.location_name}  ({item.completed_count}/{item.measurement_frequency})",
        key=f"measurement_location_{plan.work_plan_id}_{item.rfid_tag_id}"
    ):
        expansion.toggle_location(item.rfid_tag_id)
        st.rerun()

    if not is_open:
        return

    if item.measurements:
        df = pd.DataFrame([
            {
                'Reading': f"#{measurement.measurement_number}",
                'Temperature': format_reading(measurement.temperature, "°C"),
                'Humidity': format_reading(measurement.humidity, "%"),
                'Measured At': format_datetime(measurement.created_at)
            }
            for measurement in item.measurements
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.caption("No readings at this location yet.")

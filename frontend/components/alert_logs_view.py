import streamlit as st
import pandas as pd
import plotly.express as px

from robot_console.display import (
    ALERT_TYPE_COLORS, ALERT_TYPE_LABELS, WORK_PLAN_STATUS_LABELS, format_datetime, label,
)
from robot_console.services.alert_tree_service import alert_tree_service
from robot_console.view_state import TreeExpansion
from components.pagination import get_controller, render_pager, render_refresh_button


def render_alert_logs():
    """Render the alert log page"""

    st.header("🔔 Alert Log")

    controller = get_controller("alert-logs")
    trees = controller.items

    if "alert_tree_expansion" not in st.session_state:
        st.session_state.alert_tree_expansion = TreeExpansion()
    expansion = st.session_state.alert_tree_expansion

    render_alert_summary(trees)

    st.markdown("---")

    if not trees:
        st.info("No alerts yet")
    else:
        for tree in trees:
            render_work_plan_node(tree, expansion)

    st.markdown("---")
    render_pager(controller, key="alert_logs")
    render_refresh_button(controller, key="alert_logs")


def render_alert_summary(trees):
    """Per-type alert counts for the loaded page"""
    summary = alert_tree_service.summarize_alerts(trees)

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        st.metric("Total Alerts", summary.total)
    with col2:
        st.metric(ALERT_TYPE_LABELS["TEMP_HIGH"], summary.TEMP_HIGH)
    with col3:
        st.metric(ALERT_TYPE_LABELS["TEMP_LOW"], summary.TEMP_LOW)
    with col4:
        st.metric(ALERT_TYPE_LABELS["HUM_HIGH"], summary.HUM_HIGH)
    with col5:
        st.metric(ALERT_TYPE_LABELS["HUM_LOW"], summary.HUM_LOW)

    counts = {alert_type: count for alert_type, count in summary.by_type().items() if count}
    if counts:
        fig = px.pie(
            values=list(counts.values()),
            names=list(counts.keys()),
            title="Alert Types on This Page",
            color=list(counts.keys()),
            color_discrete_map=ALERT_TYPE_COLORS
        )
        st.plotly_chart(fig, use_container_width=True)


def render_work_plan_node(tree, expansion):
    plan = tree.work_plan
    is_open = expansion.is_plan_open(plan.work_plan_id)
    arrow = "▼" if is_open else "▶"

    with st.container(border=True):
        col1, col2 = st.columns([3, 1])

        with col1:
            if st.button(
                f"{arrow} 📋 {plan.description}  ·  {label(WORK_PLAN_STATUS_LABELS, plan.status)}",
                key=f"plan_{plan.work_plan_id}"
            ):
                expansion.toggle_plan(plan.work_plan_id)
                st.rerun()
            st.caption(
                f"📍 {tree.location_count} locations  •  ⚠️ {tree.alert_count} alerts  •  "
                f"🕒 Created: {format_datetime(plan.created_at, placeholder='Unknown')}"
            )

        with col2:
            st.caption(f"Thresholds: ±{plan.temp_threshold:g}°C, ±{plan.hum_threshold:g}%")
            st.caption(f"Max violations: {plan.violation_count}")

        if is_open:
            for group in tree.rfid_tags:
                render_rfid_group(plan.work_plan_id, group, expansion)


def render_rfid_group(plan_id, group, expansion):
    tag = group.rfid_tag
    alerts = group.alerts
    is_open = expansion.is_rfid_open(plan_id, tag.rfid_tag_id)
    arrow = "▼" if is_open else "▶"

    if st.button(
        f"{arrow} 🪪 {tag.uid} - {tag.location_name}  ({len(alerts)} alerts)",
        key=f"rfid_{plan_id}_{tag.rfid_tag_id}"
    ):
        expansion.toggle_rfid(plan_id, tag.rfid_tag_id)
        st.rerun()

    if is_open and alerts:
        st.dataframe(create_alerts_dataframe(alerts), use_container_width=True, hide_index=True)
        st.caption(f"Total: **{len(alerts)}** alerts at this location")


def create_alerts_dataframe(alerts):
    """Create pandas DataFrame from the alerts of one RFID group"""
    df_data = []
    for alert in alerts:
        df_data.append({
            '#': alert.alert_id,
            'Type': label(ALERT_TYPE_LABELS, alert.alert_type),
            'Measurement': f"#{alert.measurement_number}",
            'Measured': f"{alert.measured_value:g}{alert.unit}",
            'Reference': f"{alert.reference_value:g}{alert.unit}",
            'Threshold': f"±{alert.threshold:g}{alert.unit}",
            'Deviation': f"{alert.deviation:.1f}",
            'Time': format_datetime(alert.created_at)
        })
    return pd.DataFrame(df_data)

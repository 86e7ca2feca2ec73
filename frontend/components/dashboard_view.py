import streamlit as st
from streamlit_autorefresh import st_autorefresh

from robot_console.config.settings import settings
from robot_console.display import (
    COMMAND_LABELS, OBSTACLE_ACTION_LABELS, OBSTACLE_SUGGESTION_LABELS, ROBOT_STATUS_ICONS, ROBOT_STATUS_LABELS,
    WORK_PLAN_STATUS_LABELS, format_datetime, format_reading, label,
)
from robot_console.services.dashboard_service import dashboard_service
from robot_console.services.realtime_service import DashboardSnapshot


def render_dashboard(listener=None):
    """Render the live dashboard panel"""

    st_autorefresh(interval=settings.DASHBOARD_REFRESH_MS, key="dashboard_refresh")

    st.header("📡 Live Dashboard")

    snapshot = listener.snapshot() if listener is not None else DashboardSnapshot()

    if listener is None:
        st.caption("⚪ Realtime updates disabled")
    elif snapshot.connected:
        st.caption("🟢 Connected to realtime server")
    else:
        st.caption("🔴 Not connected to realtime server")

    col1, col2 = st.columns(2)
    with col1:
        render_latest_command(snapshot)
        render_robot_status(snapshot)
    with col2:
        render_obstacle(snapshot)

    st.markdown("---")
    render_work_plan(snapshot)


def render_latest_command(snapshot):
    with st.container(border=True):
        st.subheader("📡 Latest Command")
        command = dashboard_service.latest_command(snapshot)
        if command is None:
            st.info("No command sent yet.")
            return
        st.metric("Command", label(COMMAND_LABELS, command.command))
        st.caption(f"Sent at {format_datetime(command.timestamp or command.created_at)}")


def render_robot_status(snapshot):
    with st.container(border=True):
        st.subheader("🤖 Robot")
        status = snapshot.robot_status
        if status is None:
            st.info("Waiting for robot status...")
            return
        icon = ROBOT_STATUS_ICONS.get(status.status, "🤖")
        col1, col2 = st.columns(2)
        with col1:
            st.metric("Status", f"{icon} {label(ROBOT_STATUS_LABELS, status.status)}")
        with col2:
            st.metric("Mode", label(ROBOT_STATUS_LABELS, status.mode))
        if status.message:
            st.caption(status.message)


def render_obstacle(snapshot):
    with st.container(border=True):
        st.subheader("🚧 Last Obstacle")
        obstacle = snapshot.obstacle
        if obstacle is None:
            st.info("No obstacle detected.")
            return
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Left", f"{obstacle.left_distance:.2f} cm")
        with col2:
            st.metric("Center", f"{obstacle.center_distance:.2f} cm")
        with col3:
            st.metric("Right", f"{obstacle.right_distance:.2f} cm")
        st.write(f"**Suggested:** {label(OBSTACLE_SUGGESTION_LABELS, obstacle.suggestion) or '-'}")
        if obstacle.action_taken:
            st.write(f"**Executed:** {label(OBSTACLE_ACTION_LABELS, obstacle.action_taken)}")


def render_work_plan(snapshot):
    st.subheader("📋 Current Work Plan")
    plan = snapshot.work_plan
    if plan is None:
        st.info("No work plan is running.")
        return

    st.write(f"**{plan.description}** · {label(WORK_PLAN_STATUS_LABELS, plan.status)}")
    st.progress(min(max(plan.progress, 0), 100) / 100, text=f"Progress: {plan.progress:g}%")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Temperature threshold", f"±{plan.temp_threshold:g}°C")
    with col2:
        st.metric("Humidity threshold", f"±{plan.hum_threshold:g}%")
    with col3:
        st.metric("Max violations", plan.violation_count)

    latest = plan.latest_measurement()
    if latest is None:
        st.caption("No readings yet.")
        return

    with st.container(border=True):
        st.write(f"🌡️ **Latest reading:** {latest.uid} - {latest.location_name}")
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Temperature", format_reading(latest.latest_temperature, "°C"))
        with col2:
            st.metric("Humidity", format_reading(latest.latest_humidity, "%"))
        with col3:
            st.metric("Readings", f"{latest.current_measurements}/{latest.measurement_frequency}")
        st.caption(f"Measured at {format_datetime(latest.latest_created_at)}")

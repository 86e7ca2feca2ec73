import streamlit as st
from streamlit_autorefresh import st_autorefresh
from loguru import logger

from robot_console.config import configure_logging, settings
from robot_console.services.realtime_service import get_listener

# Import components
from components.dashboard_view import render_dashboard
from components.alert_logs_view import render_alert_logs
from components.logs_view import render_command_logs, render_obstacle_logs, render_robot_status_logs
from components.rfid_tags_view import render_rfid_tags
from components.work_plans_view import render_work_plans
from components.measurements_view import render_measurements
from components.send_command_view import leave_send_command, render_send_command

PAGES = {
    "Dashboard": render_dashboard,
    "Send Command": render_send_command,
    "Alert Log": render_alert_logs,
    "Command Log": render_command_logs,
    "Obstacle Log": render_obstacle_logs,
    "Robot Status": render_robot_status_logs,
    "RFID Tags": render_rfid_tags,
    "Work Plans": render_work_plans,
    "Measurements": render_measurements,
}

TOAST_ICONS = {
    "success": "✅",
    "info": "ℹ️",
    "warning": "⚠️",
    "error": "🚨",
}

# Page configuration
st.set_page_config(
    page_title="IoT Robot Console",
    page_icon="🤖",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f77b4;
        text-align: center;
        margin-bottom: 2rem;
    }
    div[data-testid="stButton"] button {
        text-align: left;
    }
</style>
""", unsafe_allow_html=True)


def main():
    """Main application function"""

    configure_logging()

    # Header
    st.markdown('<h1 class="main-header">🤖 IoT Robot Console</h1>', unsafe_allow_html=True)

    # Pending realtime notifications are shown on the next rerun
    st_autorefresh(interval=settings.NOTIFICATION_REFRESH_MS, key="main_refresh")

    listener = get_listener() if settings.REALTIME_ENABLED else None

    # Sidebar navigation
    st.sidebar.title("Navigation")
    page = st.sidebar.selectbox("Choose a page", list(PAGES))

    previous = st.session_state.get("current_page")
    if previous != page:
        if previous == "Send Command":
            leave_send_command()
        st.session_state.current_page = page
        st.session_state.screen_entered = True

    render_connection_status(listener)
    show_notifications(listener)

    # Route to appropriate page
    if page == "Dashboard":
        render_dashboard(listener)
    else:
        PAGES[page]()


def render_connection_status(listener):
    """Show the realtime channel state in the sidebar"""
    if listener is None:
        st.sidebar.info("⚪ Realtime updates disabled")
    elif listener.connected:
        st.sidebar.success("🟢 Realtime Connected")
    else:
        st.sidebar.error("🔴 Realtime Unavailable")
        st.sidebar.caption(f"Make sure the realtime server is running at {settings.REALTIME_URL}")
    st.sidebar.caption(f"API: {settings.BACKEND_API_URL}")


def show_notifications(listener):
    if listener is None:
        return
    notifications = listener.drain()
    for notification in notifications:
        st.toast(notification.body, icon=TOAST_ICONS.get(notification.level, "🔔"))
    if notifications:
        logger.debug(f"Shown {len(notifications)} realtime notifications")


if __name__ == "__main__":
    main()

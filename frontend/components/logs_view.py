import streamlit as st
import pandas as pd
import plotly.express as px

from robot_console.display import (
    COMMAND_LABELS, OBSTACLE_ACTION_LABELS, OBSTACLE_SUGGESTION_LABELS, ROBOT_STATUS_LABELS,
    format_datetime, label,
)
from components.pagination import get_controller, render_pager, render_refresh_button


def render_command_logs():
    """Render the command history page"""

    st.header("📜 Command Log")

    controller = get_controller("commands")
    logs = controller.items

    if logs:
        df = pd.DataFrame([
            {
                'No.': controller.row_number(index),
                'Command': label(COMMAND_LABELS, log.command),
                'Sent At': format_datetime(log.timestamp),
                'Saved At': format_datetime(log.created_at)
            }
            for index, log in enumerate(logs)
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)

        command_counts = pd.Series([log.command for log in logs]).value_counts()
        fig = px.bar(x=command_counts.index, y=command_counts.values,
                     title="Commands on This Page",
                     labels={'x': 'Command', 'y': 'Count'})
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.info("No commands have been sent yet.")

    render_pager(controller, key="commands")
    render_refresh_button(controller, key="commands")


def render_obstacle_logs():
    """Render the obstacle detection page"""

    st.header("🚧 Obstacle Log")

    controller = get_controller("obstacle-logs")
    logs = controller.items

    if logs:
        df = pd.DataFrame([
            {
                'No.': controller.row_number(index),
                'Center': f"{log.center_distance:.2f} cm",
                'Left': f"{log.left_distance:.2f} cm",
                'Right': f"{log.right_distance:.2f} cm",
                'Suggested': label(OBSTACLE_SUGGESTION_LABELS, log.suggestion),
                'Executed': label(OBSTACLE_ACTION_LABELS, log.action_taken),
                'Detected At': format_datetime(log.created_at)
            }
            for index, log in enumerate(logs)
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.info("No obstacles recorded.")

    render_pager(controller, key="obstacles")
    render_refresh_button(controller, key="obstacles")


def render_robot_status_logs():
    """Render the robot status history page"""

    st.header("🤖 Robot Status")

    controller = get_controller("robot-status")
    statuses = controller.items

    if statuses:
        def color_status(val):
            colors = {
                'Running': 'background-color: #e8f5e8',
                'Idle': 'background-color: #fff3e0',
                'Error': 'background-color: #ffebee'
            }
            return colors.get(val, '')

        df = pd.DataFrame([
            {
                'No.': controller.row_number(index),
                'Status': label(ROBOT_STATUS_LABELS, status.status),
                'Message': status.message,
                'Mode': label(ROBOT_STATUS_LABELS, status.mode),
                'Executed At': format_datetime(status.timestamp),
                'Saved At': format_datetime(status.created_at)
            }
            for index, status in enumerate(statuses)
        ])
        st.dataframe(df.style.map(color_status, subset=['Status']), use_container_width=True, hide_index=True)
    else:
        st.info("No robot status records.")

    render_pager(controller, key="robot_status")
    render_refresh_button(controller, key="robot_status")

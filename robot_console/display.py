"""
Display helpers shared by the dashboard pages and realtime notifications.

Codes coming from the backend are shown through the label maps below; an
unknown code is shown as-is.
"""

from datetime import datetime
from typing import Any, Dict, Optional
import pandas as pd

from robot_console.config.settings import settings

WORK_PLAN_STATUS_LABELS = {
    "NOT_RECEIVED": "Not received",
    "RECEIVED": "Received",
    "IN_PROGRESS": "In progress",
    "COMPLETED": "Completed",
    "FAILED": "Failed",
    "SUSPENDED": "Suspended",
}

WORK_PLAN_STATUS_COLORS = {
    "COMPLETED": "#4caf50",
    "IN_PROGRESS": "#2196f3",
    "RECEIVED": "#9e9e9e",
    "NOT_RECEIVED": "#ff9800",
    "FAILED": "#f44336",
    "SUSPENDED": "#607d8b",
}

ALERT_TYPE_LABELS = {
    "TEMP_HIGH": "🌡️ High temperature",
    "TEMP_LOW": "❄️ Low temperature",
    "HUM_HIGH": "💧 High humidity",
    "HUM_LOW": "🏜️ Low humidity",
}

ALERT_TYPE_COLORS = {
    "TEMP_HIGH": "#f44336",
    "TEMP_LOW": "#00bcd4",
    "HUM_HIGH": "#2196f3",
    "HUM_LOW": "#ff9800",
}

COMMAND_LABELS = {
    "FORWARD": "⬆️ Forward",
    "BACKWARD": "⬇️ Backward",
    "TURN_LEFT": "⬅️ Turn left",
    "TURN_RIGHT": "➡️ Turn right",
    "STOP": "🛑 Stop",
    "AUTO": "🤖 Auto mode",
    "MANUAL": "🕹️ Manual mode",
    "FOLLOW_LINE_MODE": "〰️ Follow line",
    "TURN_LEFT_FOR_OBSTACLE_AVOID": "↩️ Avoid obstacle (left)",
    "TURN_RIGHT_FOR_OBSTACLE_AVOID": "↪️ Avoid obstacle (right)",
}

OBSTACLE_SUGGESTION_LABELS = {
    "TURN_RIGHT": "Turn right",
    "TURN_LEFT": "Turn left",
    "EMERGENCY_STOP": "Emergency stop",
    "STOP": "Stop",
    "BACKWARD": "Back up",
    "REVERSE": "Reverse",
    "SLOW_DOWN": "Slow down",
    "AVOID_RIGHT": "Avoid on the right",
    "AVOID_LEFT": "Avoid on the left",
}

OBSTACLE_ACTION_LABELS = {
    "TURN_RIGHT": "Turned right",
    "TURN_LEFT": "Turned left",
    "STOP": "Stopped",
    "REVERSE": "Reversed",
    "SLOW_DOWN": "Slowed down",
}

ROBOT_STATUS_LABELS = {
    "RUNNING": "Running",
    "IDLE": "Idle",
    "WORKING": "Working",
    "PAUSED": "Paused",
    "ERROR": "Error",
    "NONE": "None",
    "AUTO": "Auto",
    "MANUAL": "Manual",
}

ROBOT_STATUS_ICONS = {
    "NONE": "⚪",
    "WORKING": "🟢",
    "RUNNING": "🟢",
    "ERROR": "🔴",
    "PAUSED": "🟡",
    "IDLE": "🟡",
}


def label(labels: Dict[str, str], code: Any) -> str:
    if code is None:
        return ""
    return labels.get(code, str(code)) if isinstance(code, str) else str(code)


def format_datetime(value: Any, with_seconds: bool = True, placeholder: str = "-") -> str:
    """
    Format an ISO timestamp as HH:MM[:SS] DD/MM/YYYY in the display timezone

    Args:
        value: ISO-8601 string (or anything pandas can parse)
        with_seconds: Include seconds in the time part
        placeholder: Returned when value is empty or unparseable

    Returns:
        Formatted timestamp
    """
    if not isinstance(value, (str, int, float, datetime)) or isinstance(value, bool) or value == "":
        return placeholder
    timestamp = pd.to_datetime(value, errors="coerce", utc=True)
    if pd.isna(timestamp):
        return placeholder
    timestamp = timestamp.tz_convert(settings.DISPLAY_TIMEZONE)
    return timestamp.strftime("%H:%M:%S %d/%m/%Y" if with_seconds else "%H:%M %d/%m/%Y")


def format_reading(value: Optional[float], unit: str) -> str:
    if value is None:
        return "-"
    return f"{value:g}{unit}"

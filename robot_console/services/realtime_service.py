import atexit
import threading
from collections import deque
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import socketio
from socketio.exceptions import ConnectionError as SocketConnectionError
from pydantic import BaseModel
from loguru import logger

from robot_console.config.settings import settings
from robot_console.display import (
    ALERT_TYPE_LABELS, COMMAND_LABELS, OBSTACLE_SUGGESTION_LABELS, ROBOT_STATUS_ICONS,
    WORK_PLAN_STATUS_LABELS, format_datetime, label,
)
from robot_console.models.common import as_mapping
from robot_console.models.logs import CommandLog, ObstacleLog, RobotStatusLog
from robot_console.models.work_plan import LiveWorkPlan

SUBSCRIBED_EVENTS = (
    "work_plan_status",
    "work_plan_progress",
    "alert",
    "status",
    "command_sended",
    "obstacle",
    "robot.connected",
    "manual_command_response",
)

MAX_PENDING_NOTIFICATIONS = 50


class Notification(BaseModel):
    level: str
    title: str
    lines: List[str] = []
    event: str = ""
    created_at: datetime

    @property
    def body(self) -> str:
        return "\n".join([f"**{self.title}**"] + self.lines)


class DashboardSnapshot(BaseModel):
    connected: bool = False
    last_command: Optional[CommandLog] = None
    work_plan: Optional[LiveWorkPlan] = None
    obstacle: Optional[ObstacleLog] = None
    robot_status: Optional[RobotStatusLog] = None


def _value(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _lookup(mapping: Dict[str, str], code: Any, default: str) -> str:
    return mapping.get(code, default) if isinstance(code, str) else default


class RealtimeListener:
    """
    Socket.IO client for the robot's realtime event channel.

    Every subscribed event becomes a Notification waiting in a bounded queue
    until the dashboard drains it, and the latest command, work plan,
    obstacle and robot status are kept for the dashboard's live panel.
    Payloads are not validated: missing fields simply render empty.
    """

    def __init__(self, url: Optional[str] = None, client: Optional[socketio.Client] = None):
        self.url = url or settings.REALTIME_URL
        self.sio = client or socketio.Client(
            reconnection=True,
            reconnection_attempts=settings.REALTIME_RECONNECT_ATTEMPTS,
            reconnection_delay=settings.REALTIME_RECONNECT_DELAY,
        )
        self.logger = logger
        self._lock = threading.Lock()
        self._pending = deque(maxlen=MAX_PENDING_NOTIFICATIONS)
        self._snapshot = DashboardSnapshot()
        self._formatters: Dict[str, Callable[[Dict[str, Any]], Notification]] = {
            "work_plan_status": self._format_work_plan_status,
            "work_plan_progress": self._format_work_plan_progress,
            "alert": self._format_alert,
            "status": self._format_status,
            "command_sended": self._format_command_sent,
            "obstacle": self._format_obstacle,
            "robot.connected": self._format_robot_connected,
            "manual_command_response": self._format_manual_command_response,
        }

        self.sio.on("connect", self._on_connect)
        self.sio.on("disconnect", self._on_disconnect)
        self.sio.on("connect_error", self._on_connect_error)
        for event in SUBSCRIBED_EVENTS:
            self.sio.on(event, self._make_handler(event))

    # Connection lifecycle

    def start(self):
        """Connect in the background; connection failures are logged only"""
        thread = threading.Thread(target=self._connect, name="realtime-listener", daemon=True)
        thread.start()
        return thread

    def _connect(self):
        try:
            # retry keeps the reconnection policy in force for the first connection too
            self.sio.connect(self.url, transports=["websocket"], retry=True)
        except SocketConnectionError as e:
            self.logger.error(f"Realtime connection to {self.url} failed: {e}")

    def stop(self):
        """Disconnect, or abort a reconnection loop that is still running"""
        self.sio.shutdown()
        self.logger.info("Realtime listener stopped")

    def _on_connect(self):
        self.logger.info(f"Realtime channel connected: {self.sio.sid}")
        with self._lock:
            self._snapshot.connected = True
        self._push(Notification(level="success", title="🔌 Connected to server", event="connect",
                                created_at=datetime.now()))

    def _on_disconnect(self, *args):
        self.logger.info("Realtime channel disconnected")
        with self._lock:
            self._snapshot.connected = False
        self._push(Notification(level="warning", title="⚠️ Lost connection to server", event="disconnect",
                                created_at=datetime.now()))

    def _on_connect_error(self, data=None):
        self.logger.error(f"Realtime connection error: {data}")

    # Event handling

    def _make_handler(self, event: str):
        def handler(*args):
            self.handle_event(event, args[0] if args else None)
        return handler

    def handle_event(self, event: str, payload: Any) -> Optional[Notification]:
        """Turn one event payload into a queued notification and update the live snapshot"""
        self.logger.debug(f"{event}: {payload}")
        formatter = self._formatters.get(event)
        if formatter is None:
            return None
        notification = formatter(as_mapping(payload))
        notification.event = event
        self._push(notification)
        return notification

    def _push(self, notification: Notification):
        with self._lock:
            self._pending.append(notification)

    def drain(self) -> List[Notification]:
        """Take every pending notification, oldest first"""
        with self._lock:
            notifications = list(self._pending)
            self._pending.clear()
        return notifications

    def snapshot(self) -> DashboardSnapshot:
        with self._lock:
            return self._snapshot.model_copy(deep=True)

    @property
    def connected(self) -> bool:
        with self._lock:
            return self._snapshot.connected

    # Formatters

    def _format_work_plan_status(self, data: Dict[str, Any]) -> Notification:
        plan = as_mapping(data.get("data"))
        with self._lock:
            self._snapshot.work_plan = LiveWorkPlan.from_api(plan)
        return Notification(
            level="info",
            title="📋 Work plan status",
            lines=[
                f"ID: {_value(plan, 'id')}",
                f"Description: {_value(plan, 'description')}",
                f"Status: {label(WORK_PLAN_STATUS_LABELS, plan.get('status'))}",
                f"Progress: {_value(plan, 'progress')}%",
            ],
            created_at=datetime.now(),
        )

    def _format_work_plan_progress(self, data: Dict[str, Any]) -> Notification:
        plan = as_mapping(data.get("data"))
        with self._lock:
            self._snapshot.work_plan = LiveWorkPlan.from_api(plan)
        return Notification(
            level="info",
            title="📊 Progress update",
            lines=[
                f"Plan: {_value(plan, 'description')}",
                f"Progress: {_value(plan, 'progress')}%",
                f"Violations: {_value(plan, 'violation_count')}",
            ],
            created_at=datetime.now(),
        )

    def _format_alert(self, data: Dict[str, Any]) -> Notification:
        return Notification(
            level="error",
            title=_lookup(ALERT_TYPE_LABELS, data.get("alert_type"), "⚠️ Alert"),
            lines=[
                f"Location: {_value(data, 'location_name')}",
                f"Measured: {_value(data, 'measured_value')}",
                f"Reference: {_value(data, 'reference_value')}",
                f"Threshold: ±{_value(data, 'threshold')}",
                f"Measurement #: {_value(data, 'measurement_number')}",
                f"_{_value(data, 'message')}_",
            ],
            created_at=datetime.now(),
        )

    def _format_status(self, data: Dict[str, Any]) -> Notification:
        with self._lock:
            self._snapshot.robot_status = RobotStatusLog.from_api(data)
        icon = _lookup(ROBOT_STATUS_ICONS, data.get("status"), "🤖")
        return Notification(
            level="info",
            title=f"{icon} Robot status",
            lines=[
                f"Status: {_value(data, 'status')}",
                f"Mode: {_value(data, 'mode')}",
                f"Command: {_value(data, 'command_excuted')}",
                f"Message: {_value(data, 'message')}",
            ],
            created_at=datetime.now(),
        )

    def _format_command_sent(self, data: Dict[str, Any]) -> Notification:
        with self._lock:
            self._snapshot.last_command = CommandLog.from_api(data)
        return Notification(
            level="success",
            title="📡 Command sent",
            lines=[
                f"Command: {label(COMMAND_LABELS, data.get('command'))}",
                f"Time: {format_datetime(data.get('timestamp'))}",
            ],
            created_at=datetime.now(),
        )

    def _format_obstacle(self, data: Dict[str, Any]) -> Notification:
        with self._lock:
            self._snapshot.obstacle = ObstacleLog.from_api(data)
        return Notification(
            level="warning",
            title="⚠️ Obstacle detected",
            lines=[
                f"Center distance: {_value(data, 'center_distance')}cm",
                f"Left distance: {_value(data, 'left_distance')}cm",
                f"Right distance: {_value(data, 'right_distance')}cm",
                f"Suggestion: {label(OBSTACLE_SUGGESTION_LABELS, data.get('suggestion'))}",
            ],
            created_at=datetime.now(),
        )

    def _format_robot_connected(self, data: Dict[str, Any]) -> Notification:
        return Notification(
            level="success",
            title="Robot connected",
            lines=[f"Robot IP: {_value(data, 'esp32_ip')}"],
            created_at=datetime.now(),
        )

    def _format_manual_command_response(self, data: Dict[str, Any]) -> Notification:
        response = as_mapping(data.get("responses"))
        status = response.get("status")
        return Notification(
            level="success" if status == "SUCCESS" else "error",
            title="Movement" if data.get("type") == "MANUAL_MOVE" else "Command",
            lines=[
                _value(response, "command"),
                f"Status: {_value(response, 'status')}",
                _value(response, "message"),
                format_datetime(response.get("timestamp")),
            ],
            created_at=datetime.now(),
        )


_listener: Optional[RealtimeListener] = None
_listener_lock = threading.Lock()


def get_listener(start: bool = True) -> RealtimeListener:
    """
    Return the process-wide realtime listener, creating and starting it once

    Args:
        start: Connect the listener when it is first created
    """
    global _listener
    with _listener_lock:
        if _listener is None:
            _listener = RealtimeListener()
            if start:
                _listener.start()
                atexit.register(shutdown_listener)
        return _listener


def shutdown_listener():
    """Disconnect and forget the process-wide listener"""
    global _listener
    with _listener_lock:
        if _listener is not None:
            _listener.stop()
            _listener = None

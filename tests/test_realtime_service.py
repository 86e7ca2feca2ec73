"""Unit tests for the realtime notification listener.

The Socket.IO client is a MagicMock; nothing connects to a server.
"""

from unittest.mock import MagicMock, patch

import pytest

from robot_console.config.settings import settings
from robot_console.services import realtime_service
from robot_console.services.realtime_service import SUBSCRIBED_EVENTS, RealtimeListener


@pytest.fixture()
def sio():
    client = MagicMock()
    client.connected = False
    return client


@pytest.fixture()
def listener(sio):
    return RealtimeListener(url="http://realtime.test", client=sio)


def registered_handler(sio, event):
    for call in sio.on.call_args_list:
        if call.args[0] == event:
            return call.args[1]
    raise AssertionError(f"no handler for {event}")


class TestSubscription:
    def test_every_event_has_a_handler(self, listener, sio):
        events = [call.args[0] for call in sio.on.call_args_list]
        for event in ("connect", "disconnect", "connect_error") + SUBSCRIBED_EVENTS:
            assert event in events

    def test_registered_handler_queues_notification(self, listener, sio):
        registered_handler(sio, "alert")({"alert_type": "TEMP_HIGH", "location_name": "Dock"})
        notifications = listener.drain()
        assert len(notifications) == 1
        assert notifications[0].event == "alert"

    def test_connect_and_disconnect_toasts(self, listener, sio):
        registered_handler(sio, "connect")()
        assert listener.connected
        registered_handler(sio, "disconnect")()
        assert not listener.connected

        titles = [n.title for n in listener.drain()]
        assert titles == ["🔌 Connected to server", "⚠️ Lost connection to server"]

    def test_connect_error_is_only_logged(self, listener, sio):
        registered_handler(sio, "connect_error")({"message": "refused"})
        assert listener.drain() == []


class TestFormatting:
    def test_alert(self, listener):
        notification = listener.handle_event("alert", {
            "alert_type": "HUM_LOW",
            "location_name": "Rack 3",
            "measured_value": 40,
            "reference_value": 60,
            "threshold": 8,
            "measurement_number": 2,
            "message": "Too dry",
        })
        assert notification.level == "error"
        assert "Location: Rack 3" in notification.lines
        assert "Threshold: ±8" in notification.lines
        assert "Rack 3" in notification.body

    def test_obstacle_updates_snapshot(self, listener):
        notification = listener.handle_event("obstacle", {
            "center_distance": 12.5, "left_distance": 40, "right_distance": 8, "suggestion": "TURN_LEFT",
        })
        assert notification.level == "warning"
        assert listener.snapshot().obstacle.center_distance == 12.5

    def test_command_sent_updates_last_command(self, listener):
        notification = listener.handle_event("command_sended", {"command": "FORWARD"})
        assert notification.level == "success"
        assert listener.snapshot().last_command.command == "FORWARD"

    def test_status_updates_robot_status(self, listener):
        listener.handle_event("status", {"status": "RUNNING", "mode": "AUTO", "command_excuted": "FORWARD"})
        status = listener.snapshot().robot_status
        assert status.status == "RUNNING"
        assert status.command_executed == "FORWARD"

    @pytest.mark.parametrize("event", ["work_plan_status", "work_plan_progress"])
    def test_work_plan_events_update_snapshot(self, listener, event):
        listener.handle_event(event, {"data": {"id": 3, "description": "Sweep", "progress": 40, "items": []}})
        plan = listener.snapshot().work_plan
        assert plan.id == 3
        assert plan.progress == 40

    @pytest.mark.parametrize("status,level", [("SUCCESS", "success"), ("FAILED", "error"), (None, "error")])
    def test_manual_command_response_level(self, listener, status, level):
        notification = listener.handle_event("manual_command_response", {
            "type": "MANUAL_MOVE", "responses": {"command": "FORWARD", "status": status},
        })
        assert notification.level == level
        assert notification.title == "Movement"

    def test_robot_connected(self, listener):
        notification = listener.handle_event("robot.connected", {"esp32_ip": "10.0.0.7"})
        assert notification.lines == ["Robot IP: 10.0.0.7"]

    @pytest.mark.parametrize("event", SUBSCRIBED_EVENTS)
    @pytest.mark.parametrize("payload", [None, "text", 42, [1, 2], {"alert_type": ["x"], "status": {}}])
    def test_malformed_payloads_still_notify(self, listener, event, payload):
        notification = listener.handle_event(event, payload)
        assert notification is not None
        assert notification.title

    def test_unknown_event_is_ignored(self, listener):
        assert listener.handle_event("mystery", {}) is None
        assert listener.drain() == []


class TestQueue:
    def test_drain_empties_queue_in_order(self, listener):
        listener.handle_event("command_sended", {"command": "FORWARD"})
        listener.handle_event("command_sended", {"command": "STOP"})

        drained = listener.drain()

        assert [n.lines[0] for n in drained] == ["Command: ⬆️ Forward", "Command: 🛑 Stop"]
        assert listener.drain() == []

    def test_queue_is_bounded(self, listener):
        for _ in range(realtime_service.MAX_PENDING_NOTIFICATIONS + 10):
            listener.handle_event("robot.connected", {})
        assert len(listener.drain()) == realtime_service.MAX_PENDING_NOTIFICATIONS

    def test_snapshot_is_a_copy(self, listener):
        listener.handle_event("command_sended", {"command": "FORWARD"})
        snapshot = listener.snapshot()
        snapshot.last_command.command = "CHANGED"
        assert listener.snapshot().last_command.command == "FORWARD"


class TestLifecycle:
    def test_connect_uses_websocket_transport(self, listener, sio):
        listener._connect()
        sio.connect.assert_called_once_with("http://realtime.test", transports=["websocket"], retry=True)

    def test_failed_first_connection_is_logged(self, listener, sio):
        sio.connect.side_effect = realtime_service.SocketConnectionError("refused")
        listener._connect()
        assert not listener.connected

    def test_client_uses_configured_reconnection_policy(self):
        with patch.object(realtime_service.socketio, "Client") as client_cls:
            RealtimeListener(url="http://realtime.test")
        client_cls.assert_called_once_with(
            reconnection=True,
            reconnection_attempts=settings.REALTIME_RECONNECT_ATTEMPTS,
            reconnection_delay=settings.REALTIME_RECONNECT_DELAY,
        )

    def test_stop_shuts_down_client(self, listener, sio):
        listener.stop()
        sio.shutdown.assert_called_once()

    def test_get_listener_is_a_singleton(self):
        with patch.object(realtime_service, "_listener", None):
            first = realtime_service.get_listener(start=False)
            assert realtime_service.get_listener(start=False) is first

            realtime_service.shutdown_listener()
            assert realtime_service._listener is None

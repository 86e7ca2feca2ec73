"""Shared fixtures for the robot console test suite."""

from unittest.mock import MagicMock

import pytest

from robot_console.services.api_client import ApiClient


# ── Alert-log payloads ───────────────────────────────────────────────────────


def make_alert(alert_id, alert_type="TEMP_HIGH", measured=30.0, reference=25.0, threshold=3.0):
    return {
        "alert_id": alert_id,
        "alert_type": alert_type,
        "measured_value": measured,
        "reference_value": reference,
        "threshold": threshold,
        "message": f"{alert_type} at measurement {alert_id}",
        "measurement_number": 1,
        "created_at": "2024-05-01T03:00:00.000Z",
    }


def make_record(plan_id, tag_id, alerts, description="Cold room sweep"):
    return {
        "work_plan": {
            "work_plan_id": plan_id,
            "description": description,
            "status": "IN_PROGRESS",
            "temp_threshold": 3,
            "hum_threshold": 8,
            "violation_count": 2,
            "created_at": "2024-05-01T01:00:00.000Z",
        },
        "rfid_tags": [
            {
                "rfid_tag": {
                    "rfid_tag_id": tag_id,
                    "uid": f"UID-{tag_id}",
                    "location_name": f"Rack {tag_id}",
                    "reference_temperature": 25,
                    "reference_humidity": 60,
                },
                "alerts": alerts,
            }
        ],
    }


@pytest.fixture()
def alert_records():
    """One alert-logs page: plan 1 seen twice (tags 10 and 11), then plan 2."""
    return [
        make_record(1, 10, [make_alert(100, "TEMP_HIGH"), make_alert(101, "HUM_LOW", 40, 60, 8)]),
        make_record(2, 20, [make_alert(200, "TEMP_LOW", 20, 25)], description="Freezer check"),
        make_record(1, 11, [make_alert(102, "HUM_HIGH", 75, 60, 8)]),
        make_record(1, 10, [make_alert(103, "TEMP_HIGH")]),
    ]


# ── HTTP doubles ─────────────────────────────────────────────────────────────


def make_response(status_code=200, json_body=None, content=b"{}"):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.content = content
    response.json.return_value = json_body
    return response


@pytest.fixture()
def session():
    """A requests.Session stand-in; tests set session.request.return_value."""
    return MagicMock()


@pytest.fixture()
def client(session):
    return ApiClient(base_url="http://backend.test/", timeout=5, session=session)


@pytest.fixture()
def mock_client():
    """An ApiClient double for services that only need get/post/patch/delete."""
    return MagicMock(spec=ApiClient)

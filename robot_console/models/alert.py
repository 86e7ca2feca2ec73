from typing import Any, List, Optional
from pydantic import BaseModel

from robot_console.models.common import Identifier, as_mapping, number, text

ALERT_TYPES = ("TEMP_HIGH", "TEMP_LOW", "HUM_HIGH", "HUM_LOW")


class WorkPlan(BaseModel):
    work_plan_id: Identifier
    description: str = "No description"
    status: str = "UNKNOWN"
    temp_threshold: float = 0
    hum_threshold: float = 0
    violation_count: int = 0
    created_at: str = ""

    @classmethod
    def from_api(cls, raw: Any, work_plan_id: Identifier) -> "WorkPlan":
        raw = as_mapping(raw)
        return cls(
            work_plan_id=work_plan_id,
            description=text(raw.get("description"), "No description"),
            status=text(raw.get("status"), "UNKNOWN"),
            temp_threshold=number(raw.get("temp_threshold")),
            hum_threshold=number(raw.get("hum_threshold")),
            violation_count=int(number(raw.get("violation_count"))),
            created_at=text(raw.get("created_at")),
        )


class RFIDTag(BaseModel):
    rfid_tag_id: Identifier
    uid: str = "UNKNOWN"
    location_name: str = "Unknown location"
    reference_temperature: float = 0
    reference_humidity: float = 0

    @classmethod
    def from_api(cls, raw: Any, rfid_tag_id: Identifier) -> "RFIDTag":
        raw = as_mapping(raw)
        return cls(
            rfid_tag_id=rfid_tag_id,
            uid=text(raw.get("uid"), "UNKNOWN"),
            location_name=text(raw.get("location_name"), "Unknown location"),
            reference_temperature=number(raw.get("reference_temperature")),
            reference_humidity=number(raw.get("reference_humidity")),
        )


class Alert(BaseModel):
    alert_id: Optional[Identifier] = None
    alert_type: str = "UNKNOWN"
    measured_value: float = 0
    reference_value: float = 0
    threshold: float = 0
    message: str = ""
    measurement_number: int = 0
    created_at: str = ""

    @classmethod
    def from_api(cls, raw: Any) -> "Alert":
        raw = as_mapping(raw)
        alert_id = raw.get("alert_id")
        return cls(
            alert_id=alert_id if isinstance(alert_id, (int, str)) and not isinstance(alert_id, bool) else None,
            alert_type=text(raw.get("alert_type"), "UNKNOWN"),
            measured_value=number(raw.get("measured_value")),
            reference_value=number(raw.get("reference_value")),
            threshold=number(raw.get("threshold")),
            message=text(raw.get("message")),
            measurement_number=int(number(raw.get("measurement_number"))),
            created_at=text(raw.get("created_at")),
        )

    @property
    def is_temperature(self) -> bool:
        return "TEMP" in self.alert_type

    @property
    def unit(self) -> str:
        return "°C" if self.is_temperature else "%"

    @property
    def deviation(self) -> float:
        return abs(self.measured_value - self.reference_value)


class RFIDAlertGroup(BaseModel):
    rfid_tag: RFIDTag
    alerts: List[Alert] = []


class AlertLogTree(BaseModel):
    """One work plan with its alerts grouped per RFID tag"""

    work_plan: WorkPlan
    rfid_tags: List[RFIDAlertGroup] = []

    @property
    def alert_count(self) -> int:
        return sum(len(group.alerts) for group in self.rfid_tags)

    @property
    def location_count(self) -> int:
        return len(self.rfid_tags)


class AlertSummary(BaseModel):
    total: int = 0
    TEMP_HIGH: int = 0
    TEMP_LOW: int = 0
    HUM_HIGH: int = 0
    HUM_LOW: int = 0

    def by_type(self) -> dict:
        return {alert_type: getattr(self, alert_type) for alert_type in ALERT_TYPES}

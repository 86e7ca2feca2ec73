from typing import Any, List, Optional
import pandas as pd
from pydantic import BaseModel, Field

from robot_console.models.common import (
    Identifier, as_list, as_mapping, identifier, number, optional_number, text,
)
from robot_console.models.rfid_tag import RFIDTagRecord

WORK_PLAN_STATUSES = ("NOT_RECEIVED", "RECEIVED", "IN_PROGRESS", "COMPLETED", "FAILED", "SUSPENDED")

# A plan can only be removed once the robot is not working on it
DELETABLE_STATUSES = ("COMPLETED", "NOT_RECEIVED", "FAILED")


class WorkPlanItem(BaseModel):
    id: Optional[Identifier] = None
    rfid_tag_id: Optional[Identifier] = None
    measurement_frequency: int = 0
    rfid_tag: RFIDTagRecord = Field(default_factory=RFIDTagRecord)

    @classmethod
    def from_api(cls, raw: Any) -> "WorkPlanItem":
        raw = as_mapping(raw)
        tag = as_mapping(raw.get("rfidTag", raw.get("rfid_tag")))
        return cls(
            id=identifier(raw.get("id")),
            rfid_tag_id=identifier(raw.get("rfid_tag_id", tag.get("id"))),
            measurement_frequency=int(number(raw.get("measurement_frequency"))),
            rfid_tag=RFIDTagRecord.from_api(tag),
        )


class WorkPlanRecord(BaseModel):
    id: Optional[Identifier] = None
    description: str = "No description"
    status: str = "UNKNOWN"
    progress: float = 0
    temp_threshold: float = 0
    hum_threshold: float = 0
    violation_count: int = 0
    items: List[WorkPlanItem] = []
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_api(cls, raw: Any) -> "WorkPlanRecord":
        raw = as_mapping(raw)
        return cls(
            id=identifier(raw.get("id", raw.get("work_plan_id"))),
            description=text(raw.get("description"), "No description"),
            status=text(raw.get("status"), "UNKNOWN"),
            progress=number(raw.get("progress")),
            temp_threshold=number(raw.get("temp_threshold")),
            hum_threshold=number(raw.get("hum_threshold")),
            violation_count=int(number(raw.get("violation_count"))),
            items=[WorkPlanItem.from_api(item) for item in as_list(raw.get("items"))],
            created_at=text(raw.get("created_at")),
            updated_at=text(raw.get("updated_at")),
        )

    @property
    def is_deletable(self) -> bool:
        return self.status in DELETABLE_STATUSES


class WorkPlanItemCreate(BaseModel):
    rfid_tag_id: int = Field(..., ge=1)
    measurement_frequency: int = Field(1, ge=1, description="Number of readings to take at the tag")


class WorkPlanCreate(BaseModel):
    description: str = Field(..., min_length=1)
    items: List[WorkPlanItemCreate] = Field(..., min_length=1)
    temp_threshold: float = Field(..., allow_inf_nan=False, description="Allowed temperature deviation in °C")
    hum_threshold: float = Field(..., allow_inf_nan=False, description="Allowed humidity deviation in %")
    violation_count: int = Field(..., ge=0, description="Violations tolerated before the plan fails")

    class Config:
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "description": "Morning cold-chain sweep",
                "items": [
                    {"rfid_tag_id": 1, "measurement_frequency": 3},
                    {"rfid_tag_id": 2, "measurement_frequency": 1},
                ],
                "temp_threshold": 3.0,
                "hum_threshold": 8.0,
                "violation_count": 2,
            }
        }


class Measurement(BaseModel):
    measurement_number: int = 0
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    created_at: str = ""

    @classmethod
    def from_api(cls, raw: Any) -> "Measurement":
        raw = as_mapping(raw)
        return cls(
            measurement_number=int(number(raw.get("measurement_number"))),
            temperature=optional_number(raw.get("temperature")),
            humidity=optional_number(raw.get("humidity")),
            created_at=text(raw.get("created_at")),
        )

    @property
    def is_complete(self) -> bool:
        return self.temperature is not None and self.humidity is not None


class CollectedItem(BaseModel):
    rfid_tag_id: Optional[Identifier] = None
    uid: str = "UNKNOWN"
    location_name: str = "Unknown location"
    measurement_frequency: int = 0
    measurements: List[Measurement] = []

    @classmethod
    def from_api(cls, raw: Any) -> "CollectedItem":
        raw = as_mapping(raw)
        tag = as_mapping(raw.get("rfid_tag"))
        return cls(
            rfid_tag_id=identifier(tag.get("rfid_tag_id")),
            uid=text(tag.get("uid"), "UNKNOWN"),
            location_name=text(tag.get("location_name"), "Unknown location"),
            measurement_frequency=int(number(raw.get("measurement_frequency"))),
            measurements=[Measurement.from_api(m) for m in as_list(raw.get("measurements"))],
        )

    @property
    def completed_count(self) -> int:
        return len([m for m in self.measurements if m.is_complete])


class CollectedPlan(BaseModel):
    """A work plan together with the readings gathered so far"""

    work_plan_id: Optional[Identifier] = None
    description: str = "No description"
    status: str = "UNKNOWN"
    progress: float = 0
    temp_threshold: float = 0
    hum_threshold: float = 0
    violation_count: int = 0
    items: List[CollectedItem] = []

    @classmethod
    def from_api(cls, raw: Any) -> "CollectedPlan":
        raw = as_mapping(raw)
        return cls(
            work_plan_id=identifier(raw.get("work_plan_id")),
            description=text(raw.get("description"), "No description"),
            status=text(raw.get("status"), "UNKNOWN"),
            progress=number(raw.get("progress")),
            temp_threshold=number(raw.get("temp_threshold")),
            hum_threshold=number(raw.get("hum_threshold")),
            violation_count=int(number(raw.get("violation_count"))),
            items=[CollectedItem.from_api(item) for item in as_list(raw.get("items"))],
        )

    @property
    def total_measurements(self) -> int:
        return sum(item.measurement_frequency for item in self.items)

    @property
    def completed_measurements(self) -> int:
        return sum(item.completed_count for item in self.items)


class LiveWorkPlanItem(BaseModel):
    rfid_tag_id: Optional[Identifier] = None
    uid: str = "UNKNOWN"
    location_name: str = "Unknown location"
    measurement_frequency: int = 0
    current_measurements: int = 0
    latest_temperature: Optional[float] = None
    latest_humidity: Optional[float] = None
    latest_created_at: str = ""

    @classmethod
    def from_api(cls, raw: Any) -> "LiveWorkPlanItem":
        raw = as_mapping(raw)
        return cls(
            rfid_tag_id=identifier(raw.get("rfid_tag_id")),
            uid=text(raw.get("uid"), "UNKNOWN"),
            location_name=text(raw.get("location_name"), "Unknown location"),
            measurement_frequency=int(number(raw.get("measurement_frequency"))),
            current_measurements=int(number(raw.get("current_measurements"))),
            latest_temperature=optional_number(raw.get("latest_temperature")),
            latest_humidity=optional_number(raw.get("latest_humidity")),
            latest_created_at=text(raw.get("latest_created_at")),
        )


class LiveWorkPlan(BaseModel):
    """Work plan as pushed by the work_plan_status / work_plan_progress events"""

    id: Optional[Identifier] = None
    description: str = "No description"
    status: str = "UNKNOWN"
    progress: float = 0
    temp_threshold: float = 0
    hum_threshold: float = 0
    violation_count: int = 0
    items: List[LiveWorkPlanItem] = []

    @classmethod
    def from_api(cls, raw: Any) -> "LiveWorkPlan":
        raw = as_mapping(raw)
        return cls(
            id=identifier(raw.get("id", raw.get("work_plan_id"))),
            description=text(raw.get("description"), "No description"),
            status=text(raw.get("status"), "UNKNOWN"),
            progress=number(raw.get("progress")),
            temp_threshold=number(raw.get("temp_threshold")),
            hum_threshold=number(raw.get("hum_threshold")),
            violation_count=int(number(raw.get("violation_count"))),
            items=[LiveWorkPlanItem.from_api(item) for item in as_list(raw.get("items"))],
        )

    def latest_measurement(self) -> Optional[LiveWorkPlanItem]:
        """
        The location with the most recent complete reading

        Only items carrying both a temperature and a humidity are considered;
        an item without a timestamp counts as the oldest. Ties keep the
        earlier item.
        """
        candidates = [
            item for item in self.items
            if item.latest_temperature is not None and item.latest_humidity is not None
        ]
        if not candidates:
            return None

        def sort_key(item):
            timestamp = pd.to_datetime(item.latest_created_at or None, errors="coerce", utc=True)
            return 0 if pd.isna(timestamp) else timestamp.value

        latest = candidates[0]
        for item in candidates[1:]:
            if sort_key(item) > sort_key(latest):
                latest = item
        return latest

from typing import Any, Optional
from pydantic import BaseModel, Field

from robot_console.models.common import Identifier, as_mapping, identifier, number, text


class RFIDTagRecord(BaseModel):
    id: Optional[Identifier] = None
    uid: str = "UNKNOWN"
    location_name: str = "Unknown location"
    description: str = ""
    reference_temperature: float = 0
    reference_humidity: float = 0
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_api(cls, raw: Any) -> "RFIDTagRecord":
        raw = as_mapping(raw)
        return cls(
            id=identifier(raw.get("id", raw.get("rfid_tag_id"))),
            uid=text(raw.get("uid"), "UNKNOWN"),
            location_name=text(raw.get("location_name"), "Unknown location"),
            description=text(raw.get("description")),
            reference_temperature=number(raw.get("reference_temperature")),
            reference_humidity=number(raw.get("reference_humidity")),
            created_at=text(raw.get("created_at")),
            updated_at=text(raw.get("updated_at")),
        )

    @property
    def label(self) -> str:
        return f"{self.uid} - {self.location_name}"


class RFIDTagCreate(BaseModel):
    uid: str = Field(..., min_length=1, description="Tag UID printed on the card")
    location_name: str = Field(..., min_length=1, description="Where the tag is mounted")
    description: str = Field(..., min_length=1)
    reference_temperature: float = Field(..., allow_inf_nan=False, description="Baseline temperature in °C")
    reference_humidity: float = Field(..., allow_inf_nan=False, description="Baseline relative humidity in %")

    class Config:
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "uid": "A1B2C3D4",
                "location_name": "Warehouse A - Rack 3",
                "description": "Cold storage shelf",
                "reference_temperature": 4.0,
                "reference_humidity": 65.0,
            }
        }

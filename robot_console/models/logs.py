from typing import Any, Optional
from pydantic import BaseModel

from robot_console.models.common import Identifier, as_mapping, identifier, number, text


class CommandLog(BaseModel):
    id: Optional[Identifier] = None
    command: str = "UNKNOWN"
    timestamp: str = ""
    created_at: str = ""

    @classmethod
    def from_api(cls, raw: Any) -> "CommandLog":
        raw = as_mapping(raw)
        return cls(
            id=identifier(raw.get("id")),
            command=text(raw.get("command"), "UNKNOWN"),
            timestamp=text(raw.get("timestamp")),
            created_at=text(raw.get("created_at")),
        )


class ObstacleLog(BaseModel):
    id: Optional[Identifier] = None
    center_distance: float = 0
    left_distance: float = 0
    right_distance: float = 0
    suggestion: str = "UNKNOWN"
    action_taken: str = ""
    created_at: str = ""

    @classmethod
    def from_api(cls, raw: Any) -> "ObstacleLog":
        raw = as_mapping(raw)
        # Realtime payloads use the shortened *_dist keys
        return cls(
            id=identifier(raw.get("id")),
            center_distance=number(raw.get("center_distance", raw.get("center_dist"))),
            left_distance=number(raw.get("left_distance", raw.get("left_dist"))),
            right_distance=number(raw.get("right_distance", raw.get("right_dist"))),
            suggestion=text(raw.get("suggestion"), "UNKNOWN"),
            action_taken=text(raw.get("action_taken")),
            created_at=text(raw.get("created_at")),
        )


class RobotStatusLog(BaseModel):
    id: Optional[Identifier] = None
    status: str = "UNKNOWN"
    message: str = ""
    mode: str = ""
    command_executed: str = ""
    timestamp: str = ""
    created_at: str = ""

    @classmethod
    def from_api(cls, raw: Any) -> "RobotStatusLog":
        raw = as_mapping(raw)
        return cls(
            id=identifier(raw.get("id")),
            status=text(raw.get("status"), "UNKNOWN"),
            message=text(raw.get("message")),
            mode=text(raw.get("mode")),
            # the robot firmware spells this key "command_excuted"
            command_executed=text(raw.get("command_excuted", raw.get("command_executed"))),
            timestamp=text(raw.get("timestamp")),
            created_at=text(raw.get("created_at")),
        )

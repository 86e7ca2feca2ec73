"""
View-models for the IoT Robot Console.

This package contains pydantic models for:
- Alert logs: work plans, RFID tags and alerts grouped into trees
- Activity logs: commands, obstacle detections and robot status
- RFID tags and work plans, including their create payloads
"""

from .common import Page
from .alert import Alert, AlertLogTree, AlertSummary, RFIDAlertGroup, RFIDTag, WorkPlan, ALERT_TYPES
from .logs import CommandLog, ObstacleLog, RobotStatusLog
from .rfid_tag import RFIDTagCreate, RFIDTagRecord
from .work_plan import (
    CollectedItem, CollectedPlan, LiveWorkPlan, LiveWorkPlanItem, Measurement, WorkPlanCreate, WorkPlanItem,
    WorkPlanItemCreate, WorkPlanRecord, WORK_PLAN_STATUSES,
)

__all__ = [
    "Page",
    "Alert", "AlertLogTree", "AlertSummary", "RFIDAlertGroup", "RFIDTag", "WorkPlan", "ALERT_TYPES",
    "CommandLog", "ObstacleLog", "RobotStatusLog",
    "RFIDTagCreate", "RFIDTagRecord",
    "CollectedItem", "CollectedPlan", "LiveWorkPlan", "LiveWorkPlanItem", "Measurement", "WorkPlanCreate", "WorkPlanItem",
    "WorkPlanItemCreate", "WorkPlanRecord", "WORK_PLAN_STATUSES",
]

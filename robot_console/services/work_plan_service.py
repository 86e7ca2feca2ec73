from typing import Any, Dict, List, Optional
from loguru import logger

from robot_console.models.work_plan import WorkPlanCreate, WorkPlanItemCreate, WorkPlanRecord
from robot_console.services.api_client import ApiClient, api_client


class WorkPlanService:
    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or api_client
        self.logger = logger

    def template_from(self, plan: Optional[WorkPlanRecord]) -> Dict[str, Any]:
        """
        Pre-fill values for the create form

        Re-applying an existing plan copies its description, locations and
        thresholds; a new plan starts with one location measured once.
        """
        if plan is None:
            return {
                "description": "",
                "items": [{"rfid_tag_id": None, "measurement_frequency": 1}],
                "temp_threshold": None,
                "hum_threshold": None,
                "violation_count": None,
            }
        return {
            "description": plan.description,
            "items": [
                {"rfid_tag_id": item.rfid_tag_id, "measurement_frequency": item.measurement_frequency or 1}
                for item in plan.items
            ] or [{"rfid_tag_id": None, "measurement_frequency": 1}],
            "temp_threshold": plan.temp_threshold,
            "hum_threshold": plan.hum_threshold,
            "violation_count": plan.violation_count,
        }

    def build_payload(self, form: Dict[str, Any]) -> WorkPlanCreate:
        """
        Validate the create form

        Rows without a selected tag or frequency are ignored (blank rows of
        the location editor); at least one complete row must remain.

        Raises:
            pydantic.ValidationError: on a missing description, threshold or location
        """
        rows: List[Dict[str, Any]] = [
            row for row in form.get("items") or []
            if row.get("rfid_tag_id") not in (None, "") and row.get("measurement_frequency") not in (None, "")
        ]
        return WorkPlanCreate(
            description=form.get("description") or "",
            items=[WorkPlanItemCreate(**row) for row in rows],
            temp_threshold=form.get("temp_threshold"),
            hum_threshold=form.get("hum_threshold"),
            violation_count=form.get("violation_count"),
        )

    def create_plan(self, form: Dict[str, Any]) -> Any:
        payload = self.build_payload(form)
        result = self.client.post("work-plans", payload.model_dump())
        self.logger.info(f"Work plan created: {payload.description} ({len(payload.items)} locations)")
        return result

    def delete_plan(self, plan_id) -> None:
        self.client.delete(f"work-plans/{plan_id}")
        self.logger.info(f"Work plan {plan_id} deleted")


# Create service instance
work_plan_service = WorkPlanService()

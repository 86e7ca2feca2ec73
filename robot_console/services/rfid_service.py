from typing import Any, Dict, List, Optional
from loguru import logger

from robot_console.models.common import as_list, as_mapping
from robot_console.models.rfid_tag import RFIDTagCreate, RFIDTagRecord
from robot_console.services.api_client import ApiClient, api_client

EDITABLE_FIELDS = ("uid", "location_name", "description", "reference_temperature", "reference_humidity")


class RFIDService:
    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or api_client
        self.logger = logger

    def list_all_tags(self) -> List[RFIDTagRecord]:
        """
        Fetch every RFID tag without pagination (used by the work plan tag picker)

        Raises:
            ApiError: when the backend call fails
        """
        body = as_mapping(self.client.get("rfid-tags"))
        return [RFIDTagRecord.from_api(row) for row in as_list(body.get("data"))]

    def create_tag(self, form: Dict[str, Any]) -> Any:
        """
        Validate the form and create a new RFID tag

        Args:
            form: Raw form values

        Returns:
            The backend response body

        Raises:
            pydantic.ValidationError: when a field is missing or not a number
            ApiError: when the backend call fails
        """
        payload = RFIDTagCreate(**form)
        result = self.client.post("rfid-tags", payload.model_dump())
        self.logger.info(f"RFID tag created: {payload.uid}")
        return result

    def changed_fields(self, tag: RFIDTagRecord, form: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate the edit form and return only the fields that differ from tag

        Raises:
            pydantic.ValidationError: when a field is missing or not a number
        """
        edited = RFIDTagCreate(**form)
        return {
            field: getattr(edited, field)
            for field in EDITABLE_FIELDS
            if getattr(edited, field) != getattr(tag, field)
        }

    def update_tag(self, tag: RFIDTagRecord, form: Dict[str, Any]) -> Dict[str, Any]:
        """
        PATCH the changed fields of an RFID tag

        Nothing is sent when no field changed.

        Returns:
            The fields that were sent
        """
        changes = self.changed_fields(tag, form)
        if not changes:
            self.logger.info(f"No changes for RFID tag {tag.id}, skipping update")
            return {}
        self.client.patch(f"rfid-tags/{tag.id}", changes)
        self.logger.info(f"RFID tag {tag.id} updated: {sorted(changes)}")
        return changes

    def delete_tag(self, tag_id) -> None:
        self.client.delete(f"rfid-tags/{tag_id}")
        self.logger.info(f"RFID tag {tag_id} deleted")


# Create service instance
rfid_service = RFIDService()

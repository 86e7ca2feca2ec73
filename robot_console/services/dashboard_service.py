from typing import Optional
from loguru import logger

from robot_console.models.logs import CommandLog
from robot_console.services.api_client import ApiClient, ApiError, api_client
from robot_console.services.realtime_service import DashboardSnapshot


class DashboardService:
    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or api_client
        self.logger = logger

    def fetch_latest_command(self) -> Optional[CommandLog]:
        """Poll the most recent command; None when the backend has none or is unreachable"""
        try:
            body = self.client.get("commands/latest")
        except ApiError as e:
            self.logger.error(f"Error fetching latest command: {e}")
            return None
        if not isinstance(body, dict) or not body:
            return None
        return CommandLog.from_api(body)

    def latest_command(self, snapshot: DashboardSnapshot) -> Optional[CommandLog]:
        """The polled command, or the last one pushed over the realtime channel"""
        return self.fetch_latest_command() or snapshot.last_command


# Create service instance
dashboard_service = DashboardService()

"""
Services for the IoT Robot Console.

This package contains:
- ApiClient: HTTP access to the robot backend
- AlertTreeService: Grouping alert logs into work plan / RFID tag trees
- PageController: Per-screen pagination state
- RFIDService, WorkPlanService: Create, update and delete operations
- CommandSender: Robot movement and mode commands
- RealtimeListener: Socket.IO notifications and live dashboard snapshot
"""

from .api_client import ApiClient, ApiError, api_client
from .alert_tree_service import alert_tree_service
from .pagination_service import PageController, controller_for
from .rfid_service import rfid_service
from .work_plan_service import work_plan_service
from .command_service import CommandSender, CommandType
from .realtime_service import RealtimeListener, get_listener, shutdown_listener
from .dashboard_service import dashboard_service

__all__ = [
    "ApiClient", "ApiError", "api_client",
    "alert_tree_service",
    "PageController", "controller_for",
    "rfid_service", "work_plan_service",
    "CommandSender", "CommandType",
    "RealtimeListener", "get_listener", "shutdown_listener",
    "dashboard_service",
]

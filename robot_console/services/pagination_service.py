from typing import Any, Callable, List, Optional
from loguru import logger

from robot_console.config.settings import settings
from robot_console.models import (
    CollectedPlan, CommandLog, ObstacleLog, RFIDTagRecord, RobotStatusLog, WorkPlanRecord,
)
from robot_console.models.common import Page, as_list, number
from robot_console.services.alert_tree_service import alert_tree_service
from robot_console.services.api_client import ApiClient, ApiError, api_client

Parser = Callable[[List[Any]], List[Any]]


def parse_each(model) -> Parser:
    """Build a page parser that maps every raw row through model.from_api"""
    def parser(rows):
        return [model.from_api(row) for row in rows]
    return parser


class PageController:
    """
    Page state for one paginated screen.

    Keeps the current page, the last known page count and the rows of the
    current page. Any failed fetch resets the screen to an empty page with a
    page count of one.
    """

    def __init__(self, resource: str, parser: Parser, limit: Optional[int] = None,
                 client: Optional[ApiClient] = None):
        self.resource = resource
        self.parser = parser
        self.limit = limit or settings.PAGE_SIZE
        self.client = client or api_client
        self.current_page = 1
        self.total_pages = 1
        self.items: List[Any] = []
        self.loaded = False
        self.logger = logger

    def load(self, page: Optional[int] = None) -> Page:
        if page is not None:
            self.current_page = max(1, int(page))
        try:
            body = self.client.get_page(self.resource, self.current_page, self.limit)
            self.items = self.parser(as_list(body.get("data")))
            self.total_pages = max(1, int(number(body.get("totalPages"), default=1)))
        except ApiError as e:
            self.logger.error(f"Error fetching {self.resource} page {self.current_page}: {e}")
            self.items = []
            self.total_pages = 1
        self.loaded = True
        return self.page

    def refresh(self) -> Page:
        return self.load(self.current_page)

    def ensure_loaded(self) -> Page:
        if not self.loaded:
            return self.load()
        return self.page

    @property
    def page(self) -> Page:
        return Page(items=self.items, total_pages=self.total_pages, page=self.current_page)

    def row_number(self, index: int) -> int:
        """1-based position of a row across all pages"""
        return index + 1 + (self.current_page - 1) * self.limit


def screen_parsers():
    return {
        "alert-logs": alert_tree_service.parse_alert_logs,
        "commands": parse_each(CommandLog),
        "rfid-tags": parse_each(RFIDTagRecord),
        "obstacle-logs": parse_each(ObstacleLog),
        "robot-status": parse_each(RobotStatusLog),
        "work-plans": parse_each(WorkPlanRecord),
        "work-plans/measurements": parse_each(CollectedPlan),
    }


def controller_for(resource: str, client: Optional[ApiClient] = None) -> PageController:
    """Create the page controller for one of the dashboard's list screens"""
    parsers = screen_parsers()
    if resource not in parsers:
        raise ValueError(f"Unknown list resource: {resource}")
    return PageController(resource, parsers[resource], client=client)

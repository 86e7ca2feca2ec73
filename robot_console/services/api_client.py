from typing import Any, Dict, Optional
import requests
from loguru import logger

from robot_console.config.settings import settings


class ApiError(Exception):
    """A backend call failed: network error, timeout, non-2xx status or bad JSON"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.BACKEND_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.logger = logger

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, **kwargs) -> Any:
        """
        Perform an HTTP request against the backend API

        Args:
            method: HTTP method
            path: Path relative to the configured base URL
            **kwargs: Passed through to requests (params, json)

        Returns:
            Decoded JSON body, or None for an empty body
        """
        url = self.url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            raise ApiError(f"{method} {url} returned {response.status_code}", status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"{method} {url} returned invalid JSON", status_code=response.status_code) from e

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def get_page(self, resource: str, page: int, limit: int) -> Dict[str, Any]:
        """
        Fetch one page of a paginated list endpoint

        Args:
            resource: List endpoint, e.g. "alert-logs"
            page: 1-based page number
            limit: Page size

        Returns:
            The response envelope ({"data": [...], "totalPages": n, ...})
        """
        body = self.get(resource, params={"page": page, "limit": limit})
        if not isinstance(body, dict):
            raise ApiError(f"GET {self.url(resource)} returned an unexpected body")
        return body

    def post(self, path: str, payload: Dict[str, Any]) -> Any:
        return self.request("POST", path, json=payload)

    def patch(self, path: str, payload: Dict[str, Any]) -> Any:
        return self.request("PATCH", path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


# Create client instance
api_client = ApiClient()

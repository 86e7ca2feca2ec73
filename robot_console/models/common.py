import math
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union
from pydantic import BaseModel

T = TypeVar("T")

Identifier = Union[int, str]


def as_mapping(value: Any) -> Dict[str, Any]:
    """Return value when it is a JSON object, else an empty dict"""
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def identifier(value: Any) -> Optional[Identifier]:
    """
    Return a usable record identifier or None.

    Missing, null, zero, empty-string and boolean values are not usable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, str)) and value not in (0, ""):
        return value
    return None


def text(value: Any, default: str = "") -> str:
    if value is None or value == "":
        return default
    return value if isinstance(value, str) else str(value)


def number(value: Any, default: float = 0) -> float:
    """Coerce a JSON number (or numeric string) to a number, falling back to default"""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return default
    if isinstance(value, (int, float)):
        try:
            return value if math.isfinite(value) else default
        except OverflowError:
            return default
    return default


def optional_number(value: Any) -> Optional[float]:
    return number(value, default=None)


class Page(BaseModel, Generic[T]):
    """One page of a paginated list endpoint"""

    items: List[T] = []
    total_pages: int = 1
    page: int = 1

"""Turns loosely-typed TOA JSON into plain Python mappings.

Detail endpoints wrap a single object in an array; `unwrap_singleton` is the
only place that convention is handled.
"""

from typing import Any, Dict, List

import httpx
from loguru import logger

from pytoa.errors import ParseError, ShapeError
from pytoa.models.enums import Season

# Type alias for a normalized JSON object
PropertyMap = Dict[str, str]

# Field holding the last season a team competed in, as a season code
LAST_ACTIVE_KEY = "last_active"


def decode_json(response: httpx.Response, path: str) -> Any:
    """Parse a response body as JSON."""
    try:
        return response.json()
    except ValueError as e:
        logger.debug(f"Raw response content from {path}: {response.text[:200]!r}")
        raise ParseError(f"Response from {path} is not valid JSON: {e}") from e


def expect_list(data: Any, path: str) -> List[Any]:
    if not isinstance(data, list):
        raise ShapeError(
            f"Expected a JSON array from {path}, got {type(data).__name__}"
        )
    return data


def unwrap_singleton(data: Any, path: str) -> Dict[str, Any]:
    """Return the object inside a one-element array."""
    items = expect_list(data, path)
    if not items:
        raise ShapeError(f"Expected one object from {path}, got an empty array")
    obj = items[0]
    if not isinstance(obj, dict):
        raise ShapeError(
            f"Expected an object inside the array from {path}, got {type(obj).__name__}"
        )
    return obj


def normalize_value(key: str, value: Any) -> str:
    """Coerce a scalar JSON value to its string form."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise ShapeError(
        f"Field '{key}' holds a nested {type(value).__name__}, expected a scalar"
    )


def normalize_properties(obj: Dict[str, Any]) -> PropertyMap:
    """Normalize one JSON object into a string-to-string mapping.

    The `last_active` season code is replaced by the season's label.
    """
    properties: PropertyMap = {}
    for key, value in obj.items():
        text = normalize_value(key, value)
        if key == LAST_ACTIVE_KEY:
            text = Season.value_of(text).label
        properties[key] = text
    return properties


class Normalizer:
    """Normalizes decoded responses from detail endpoints."""

    def properties(self, data: Any, path: str) -> PropertyMap:
        obj = unwrap_singleton(data, path)
        properties = normalize_properties(obj)
        logger.debug(f"Normalized {len(properties)} properties from {path}")
        return properties

    def records(self, data: Any, path: str) -> List[Dict[str, Any]]:
        """Check that a response is an array of objects and return it."""
        items = expect_list(data, path)
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ShapeError(
                    f"Record {index} from {path} is a {type(item).__name__}, expected an object"
                )
        logger.debug(f"Received {len(items)} records from {path}")
        return items

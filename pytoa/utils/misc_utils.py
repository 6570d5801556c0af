# pytoa/utils/misc_utils.py
import re
from typing import Dict, TypeVar

T = TypeVar("T")

# Leading "<season>-<region>-" part of an event key, e.g. "1920-CMP-" in "1920-CMP-HOU1"
EVENT_KEY_PREFIX = re.compile(r"^\d{4}-\w+-")


def event_map_key(name: str) -> str:
    """Map key for an event display name: lower-cased, spaces to underscores."""
    return name.lower().replace(" ", "_")


def disambiguation_suffix(event_key: str) -> str:
    """The part of an event key after its season and region, lower-cased."""
    return EVENT_KEY_PREFIX.sub("", event_key, count=1).lower()


def insert_event(mapping: Dict[str, T], name: str, event_key: str, event: T) -> str:
    """Insert `event` under a key derived from its name and return that key.

    When the name is already taken the event key suffix is appended. Two
    collisions with the same suffix still overwrite each other.
    """
    key = event_map_key(name)
    if key in mapping:
        key = f"{key}_{disambiguation_suffix(event_key)}"
    mapping[key] = event
    return key

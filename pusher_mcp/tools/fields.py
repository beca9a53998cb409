"""JSON Schema fragments and value helpers shared by the Pusher tools."""

import json
from typing import Any, Dict, List
from urllib.parse import quote

MAX_NAME_LENGTH = 200
MAX_TRIGGER_CHANNELS = 100
MAX_BATCH_EVENTS = 10

INFO_ATTRIBUTES = ["user_count", "subscription_count"]

# Characters encodeURIComponent leaves alone besides letters, digits and "_.-"
URI_COMPONENT_SAFE = "!~*'()"


def name_field(description: str, **extra: Any) -> Dict[str, Any]:
    """A 1-200 character string (channel and event names)."""
    field = {
        "type": "string",
        "minLength": 1,
        "maxLength": MAX_NAME_LENGTH,
        "description": description,
    }
    field.update(extra)
    return field


def payload_field(description: str) -> Dict[str, Any]:
    """Event data: a string sent verbatim, or an object sent as JSON."""
    return {
        "anyOf": [{"type": "string"}, {"type": "object"}],
        "description": description,
    }


def info_field(description: str) -> Dict[str, Any]:
    return {
        "type": "array",
        "items": {"type": "string", "enum": INFO_ATTRIBUTES},
        "description": description,
    }


def encode_payload(data: Any) -> str:
    """Strings pass through untouched; anything else becomes compact JSON."""
    if isinstance(data, str):
        return data
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def channel_path(channel: str, suffix: str = "") -> str:
    """`/channels/<name>` with the name percent-encoded like encodeURIComponent."""
    return "/channels/" + quote(channel, safe=URI_COMPONENT_SAFE) + suffix


def join_info(info: List[str]) -> str:
    return ",".join(info)


def format_value(value: Any) -> str:
    """Render a JSON value for result text (booleans as true/false)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

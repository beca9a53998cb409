"""
Channel inspection tools: list_channels, get_channel_info, get_presence_users.

All three read from the Pusher HTTP API with a signed GET.  A non-2xx status
is reported as a tool error carrying the status code; it is not raised.
"""

import logging
from typing import Any, Dict, List

from pusher_mcp.mcp.schema import MCPTool, MCPToolResult
from pusher_mcp.mcp.tools import MCPToolRegistry
from pusher_mcp.utils.pusher_client import ClientAccessor

from .fields import channel_path, format_value, info_field, join_info, name_field
from .results import failure_result, status_error_result, text_result

logger = logging.getLogger("pusher_mcp.tools.channels")

PRESENCE_PREFIX = "presence-"


LIST_CHANNELS = MCPTool(
    name="list_channels",
    description=(
        "List all active channels in your Pusher app. Optionally filter by "
        "prefix (e.g. 'presence-' or 'private-') and request subscription or "
        "user counts."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "prefix": {
                "type": "string",
                "description": "Filter channels by prefix (e.g. 'presence-', 'private-chat-')",
            },
            "info": info_field("Additional attributes to include for each channel"),
        },
    },
    annotations={"readOnlyHint": True},
)

GET_CHANNEL_INFO = MCPTool(
    name="get_channel_info",
    description=(
        "Get detailed information about a specific Pusher channel, including "
        "whether it is occupied and optional subscription/user counts."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "channel": name_field("The channel name to query"),
            "info": info_field("Additional attributes to request"),
        },
        "required": ["channel"],
    },
    annotations={"readOnlyHint": True},
)

GET_PRESENCE_USERS = MCPTool(
    name="get_presence_users",
    description=(
        "List all users currently connected to a presence channel. Only works "
        "with channels that start with 'presence-'."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "channel": name_field(
                "Presence channel name (must start with 'presence-')",
                pattern=f"^{PRESENCE_PREFIX}",
            ),
        },
        "required": ["channel"],
    },
    annotations={"readOnlyHint": True},
)


class ChannelTools:
    """Handlers that query channel state from the Pusher HTTP API."""

    def __init__(self, accessor: ClientAccessor):
        self.accessor = accessor

    def register(self, registry: MCPToolRegistry) -> None:
        registry.register_tool(LIST_CHANNELS, self.list_channels)
        registry.register_tool(GET_CHANNEL_INFO, self.get_channel_info)
        registry.register_tool(GET_PRESENCE_USERS, self.get_presence_users)

    def list_channels(self, arguments: Dict[str, Any]) -> MCPToolResult:
        prefix = arguments.get("prefix")
        info = arguments.get("info")

        params = {}
        if prefix:
            params["filter_by_prefix"] = prefix
        if info:
            params["info"] = join_info(info)

        try:
            response = self.accessor.get_client().get("/channels", params)
            if not response.ok:
                return status_error_result(response.status)
            channels = response.json().get("channels") or {}
            lines = _channel_lines(channels)
        except Exception as e:
            return failure_result("list channels", e)

        if not lines:
            if prefix:
                return text_result(f'No active channels matching prefix "{prefix}"')
            return text_result("No active channels")
        return text_result(f"Active channels ({len(lines)}):\n" + "\n".join(lines))

    def get_channel_info(self, arguments: Dict[str, Any]) -> MCPToolResult:
        channel = arguments["channel"]
        info = arguments.get("info")

        params = {}
        if info:
            params["info"] = join_info(info)

        try:
            response = self.accessor.get_client().get(channel_path(channel), params)
            if not response.ok:
                return status_error_result(response.status, channel)
            lines = _channel_info_lines(channel, response.json())
        except Exception as e:
            return failure_result("get channel info", e)

        return text_result("\n".join(lines))

    def get_presence_users(self, arguments: Dict[str, Any]) -> MCPToolResult:
        channel = arguments["channel"]

        try:
            response = self.accessor.get_client().get(channel_path(channel, "/users"))
            if not response.ok:
                return status_error_result(response.status, channel)
            users = response.json().get("users") or []
            user_ids = [user.get("id") for user in users]
        except Exception as e:
            return failure_result("get presence users", e)

        if not user_ids:
            return text_result(f"No users connected to {channel}")

        user_list = "\n".join(f"  {user_id}" for user_id in user_ids)
        return text_result(f"Users on {channel} ({len(user_ids)}):\n{user_list}")


def _channel_lines(channels: Dict[str, Any]) -> List[str]:
    """One line per channel, with whichever counts the API returned."""
    lines = []
    for name, attributes in channels.items():
        attributes = attributes or {}
        parts = [name]
        if "subscription_count" in attributes:
            parts.append(f"subscriptions: {format_value(attributes['subscription_count'])}")
        if "user_count" in attributes:
            parts.append(f"users: {format_value(attributes['user_count'])}")
        lines.append(" — ".join(parts))
    return lines


def _channel_info_lines(channel: str, body: Dict[str, Any]) -> List[str]:
    lines = [f"Channel: {channel}"]
    if "occupied" in body:
        lines.append(f"Occupied: {format_value(body['occupied'])}")
    if "subscription_count" in body:
        lines.append(f"Subscriptions: {format_value(body['subscription_count'])}")
    if "user_count" in body:
        lines.append(f"Users: {format_value(body['user_count'])}")
    return lines

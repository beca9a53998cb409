"""
authorize_channel: sign a private or presence channel subscription.

The signature is computed locally by the SDK; nothing is sent to Pusher.
"""

import json
import logging
from typing import Any, Dict

from pusher_mcp.mcp.schema import MCPTool, MCPToolResult
from pusher_mcp.mcp.tools import MCPToolRegistry
from pusher_mcp.utils.pusher_client import ClientAccessor

from .fields import name_field
from .results import error_result, failure_result, text_result

logger = logging.getLogger("pusher_mcp.tools.auth")

PRIVATE_PREFIX = "private-"
PRESENCE_PREFIX = "presence-"


AUTHORIZE_CHANNEL = MCPTool(
    name="authorize_channel",
    description=(
        "Generate an authorization token for a private or presence channel. "
        "Useful when building auth endpoints for Pusher client connections."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "socketId": {
                "type": "string",
                "minLength": 1,
                "description": "The socket ID from the client connection",
            },
            "channel": name_field(
                "Private or presence channel name (must start with 'private-' or 'presence-')"
            ),
            "presenceData": {
                "type": "object",
                "properties": {
                    "user_id": {
                        "type": "string",
                        "minLength": 1,
                        "description": "Unique user identifier",
                    },
                    "user_info": {
                        "type": "object",
                        "description": "Optional user metadata (name, avatar, etc.)",
                    },
                },
                "required": ["user_id"],
                "description": "Required for presence channels — identifies the connecting user",
            },
        },
        "required": ["socketId", "channel"],
    },
    annotations={"readOnlyHint": True},
)


class AuthTools:
    """Handler for channel authorization."""

    def __init__(self, accessor: ClientAccessor):
        self.accessor = accessor

    def register(self, registry: MCPToolRegistry) -> None:
        registry.register_tool(AUTHORIZE_CHANNEL, self.authorize_channel)

    def authorize_channel(self, arguments: Dict[str, Any]) -> MCPToolResult:
        socket_id = arguments["socketId"]
        channel = arguments["channel"]
        presence_data = arguments.get("presenceData")

        if not channel.startswith((PRIVATE_PREFIX, PRESENCE_PREFIX)):
            return error_result(
                'Channel must start with "private-" or "presence-" for authorization'
            )
        if channel.startswith(PRESENCE_PREFIX) and not presence_data:
            return error_result("presenceData is required for presence channels")

        try:
            client = self.accessor.get_client()
            logger.debug(f"Authorizing socket {socket_id} for {channel}")
            auth = client.authorize_channel(socket_id, channel, presence_data)
        except Exception as e:
            return failure_result("authorize channel", e)

        return text_result(f"Authorization for {channel}:\n{json.dumps(auth, indent=2)}")

"""terminate_user_connections: force a user offline across all channels."""

import logging
from typing import Any, Dict

from pusher_mcp.mcp.schema import MCPTool, MCPToolResult
from pusher_mcp.mcp.tools import MCPToolRegistry
from pusher_mcp.utils.pusher_client import ClientAccessor

from .results import failure_result, text_result

logger = logging.getLogger("pusher_mcp.tools.users")


TERMINATE_USER_CONNECTIONS = MCPTool(
    name="terminate_user_connections",
    description=(
        "Disconnect all connections for a specific user. Useful for moderation "
        "or security — forces a user offline across all channels."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "userId": {
                "type": "string",
                "minLength": 1,
                "description": "The user ID to disconnect from all channels",
            },
        },
        "required": ["userId"],
    },
    annotations={"destructiveHint": True},
)


class UserTools:
    def __init__(self, accessor: ClientAccessor):
        self.accessor = accessor

    def register(self, registry: MCPToolRegistry) -> None:
        registry.register_tool(TERMINATE_USER_CONNECTIONS, self.terminate_user_connections)

    def terminate_user_connections(self, arguments: Dict[str, Any]) -> MCPToolResult:
        user_id = arguments["userId"]

        try:
            logger.info(f"Terminating connections for user {user_id}")
            self.accessor.get_client().terminate_user_connections(user_id)
        except Exception as e:
            return failure_result("terminate user connections", e)

        return text_result(f'All connections terminated for user "{user_id}"')

"""
Exception types for the Pusher MCP server.

Only failures that must stop a request before a tool handler runs are
exceptions here.  Business-rule and provider failures inside a handler are
reported as `MCPToolResult` values with `is_error=True` instead.
"""

from typing import List, Optional


class PusherMCPError(Exception):
    """Base class for all pusher_mcp errors."""


class ConfigurationError(PusherMCPError):
    """
    Raised when required Pusher credentials are missing from the environment.

    `missing` holds every absent variable name in canonical order.
    """

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required environment variables: {', '.join(self.missing)}. "
            "Set these in your MCP server configuration or .env file."
        )


class UnknownToolError(PusherMCPError):
    """Raised by the registry when a tools/call names an unregistered tool."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Tool {tool_name} not found")


class ToolInputError(PusherMCPError):
    """
    Raised by the registry when tool arguments violate the tool's inputSchema.

    The handler never runs for such a call; the server reports it as a
    JSON-RPC INVALID_PARAMS error.
    """

    def __init__(self, tool_name: str, detail: str, path: Optional[List] = None):
        self.tool_name = tool_name
        self.detail = detail
        self.path = list(path or [])
        super().__init__(f"Invalid arguments for tool {tool_name}: {detail}")

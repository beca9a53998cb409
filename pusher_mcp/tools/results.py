"""
Builders for tool results.

Every handler ends in one of these, so all seven tools share the same
result shape: a list of text blocks plus an isError flag.
"""

from pusher_mcp.errors import ConfigurationError
from pusher_mcp.mcp.schema import ErrorKind, MCPToolResult, TextContent

UNKNOWN_ERROR = "Unknown error"


def text_result(text: str) -> MCPToolResult:
    """Successful result with a single text block."""
    return MCPToolResult(content=[TextContent(text=text)])


def error_result(text: str, kind: ErrorKind = ErrorKind.SEMANTIC) -> MCPToolResult:
    """Failed result with a single text block."""
    return MCPToolResult(
        content=[TextContent(text=text)],
        is_error=True,
        error_kind=kind,
    )


def error_message(error: BaseException) -> str:
    """The exception's message, or "Unknown error" when it has none."""
    message = str(error)
    return message if message else UNKNOWN_ERROR


def failure_result(action: str, error: BaseException) -> MCPToolResult:
    """
    Result for an exception caught while executing a tool.

    Produces "Failed to <action>: <message>".
    """
    kind = ErrorKind.CONFIGURATION if isinstance(error, ConfigurationError) else ErrorKind.PROVIDER
    return error_result(f"Failed to {action}: {error_message(error)}", kind)


def status_error_result(status: int, channel: str = None) -> MCPToolResult:
    """Result for a non-2xx response from the Pusher HTTP API."""
    text = f"Pusher API returned status {status}"
    if channel is not None:
        text += f' for channel "{channel}"'
    return error_result(text, ErrorKind.PROVIDER)

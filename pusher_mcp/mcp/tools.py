"""
MCP Tool Registry

Maps tool names to their MCP definition and handler, following the
MCP 2025-11-25 specification:
https://modelcontextprotocol.io/specification/2025-11-25

Every `tools/call` goes through three steps here:
1. Look up the tool.  Unknown names raise `UnknownToolError`.
2. Validate the arguments against the tool's JSON Schema inputSchema.
   Violations raise `ToolInputError`; the handler never runs.
3. Run the handler, which returns an `MCPToolResult`.

Steps 1 and 2 are protocol-level failures that the server turns into
JSON-RPC errors.  Handler failures come back as results with isError=true.
"""

from typing import Dict, List, Any, Callable, Optional
import logging

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from pusher_mcp.errors import ToolInputError, UnknownToolError
from .schema import (
    ErrorKind,
    MCPTool,
    MCPToolCall,
    MCPToolResult,
    TextContent,
)


logger = logging.getLogger("pusher_mcp.mcp.tools")

ToolHandler = Callable[[Dict[str, Any]], MCPToolResult]


class MCPToolRegistry:
    """
    Registry for MCP-compliant tools.

    Tools are registered with an `MCPTool` schema and a handler, then
    discovered via `list_tools()` and invoked via `call_tool()`.  The set of
    tools is fixed once the server starts; there is no unregistration.
    """

    def __init__(self):
        """Initialize an empty tool registry."""
        self._tools: Dict[str, MCPTool] = {}
        self._handlers: Dict[str, ToolHandler] = {}
        self._validators: Dict[str, Draft202012Validator] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_tool(self, tool: MCPTool, handler: ToolHandler) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: MCP tool definition (name, description, inputSchema).
            handler: Callable receiving the validated arguments dict and
                     returning an MCPToolResult.

        Raises:
            ValueError: If a tool with the same name is already registered.
            jsonschema.exceptions.SchemaError: If inputSchema is not valid
                JSON Schema.
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")

        Draft202012Validator.check_schema(tool.input_schema)
        self._tools[tool.name] = tool
        self._handlers[tool.name] = handler
        self._validators[tool.name] = Draft202012Validator(tool.input_schema)
        logger.info(f"Registered MCP tool: {tool.name}")

    # ------------------------------------------------------------------
    # MCP tools/list
    # ------------------------------------------------------------------

    def list_tools(self, cursor: Optional[str] = None) -> Dict[str, Any]:
        """
        Return tools in MCP `tools/list` response format.

        MCP spec result: { tools: Tool[], nextCursor?: string }
        All tools fit in a single page, so `cursor` is ignored.
        """
        return {
            "tools": [tool.to_dict() for tool in self._tools.values()],
        }

    @property
    def tool_names(self) -> List[str]:
        return list(self._tools)

    # ------------------------------------------------------------------
    # MCP tools/call
    # ------------------------------------------------------------------

    def validate_arguments(self, name: str, arguments: Any) -> Dict[str, Any]:
        """
        Check `arguments` against the inputSchema of tool `name`.

        Returns:
            The arguments dict (an empty dict when None was given).

        Raises:
            UnknownToolError: If no tool is registered under `name`.
            ToolInputError: If the arguments violate the schema.
        """
        validator = self._validators.get(name)
        if validator is None:
            raise UnknownToolError(name)

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ToolInputError(name, "arguments must be an object")

        error = best_match(validator.iter_errors(arguments))
        if error is not None:
            path = list(error.absolute_path)
            location = ".".join(str(part) for part in path)
            detail = f"{location}: {error.message}" if location else error.message
            raise ToolInputError(name, detail, path)

        return arguments

    def call_tool(self, call: MCPToolCall) -> MCPToolResult:
        """
        Execute a tool call per the MCP `tools/call` specification.

        Args:
            call: MCPToolCall with name and arguments.

        Returns:
            MCPToolResult with content blocks and isError flag.

        Raises:
            UnknownToolError: If the tool is not registered.
            ToolInputError: If the arguments fail schema validation.
        """
        arguments = self.validate_arguments(call.name, call.arguments)
        handler = self._handlers[call.name]

        try:
            result = handler(arguments)
        except Exception as e:
            # Handlers normalize their own failures; reaching this is a bug
            logger.error(f"Error executing tool {call.name}: {e}", exc_info=True)
            result = MCPToolResult(
                content=[TextContent(text=f"Execution error: {e}")],
                is_error=True,
                error_kind=ErrorKind.INTERNAL,
            )

        result.tool_name = call.name
        result.call_id = call.call_id
        if result.is_error:
            logger.warning(f"Tool {call.name} returned an error: {result.get_text()}")
        return result

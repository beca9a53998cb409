"""
MCP Server Implementation

Exposes the Pusher tool registry over JSON-RPC 2.0 stdio transport,
following the MCP 2025-11-25 specification:
https://modelcontextprotocol.io/specification/2025-11-25

The server handles the MCP lifecycle a tool server needs:
1. initialize / initialized handshake
2. tools/list - enumerate available tools
3. tools/call - execute tool invocations
4. ping - liveness check
5. notifications/cancelled - logged only

Transport: Reads newline-delimited JSON-RPC messages from stdin, writes
responses to stdout.  Logging never goes to stdout.
"""

import sys
import json
import logging
from typing import Optional, Dict, Any, TextIO

from pusher_mcp.config import SERVER_NAME, SERVER_VERSION
from pusher_mcp.errors import ToolInputError, UnknownToolError
from .schema import (
    JSONRPCResponse,
    JSONRPCError,
    MCPInitializeResult,
    MCPServerCapabilities,
    MCPToolCall,
    JSONRPC_VERSION,
    PARSE_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
    negotiate_protocol_version,
)
from .tools import MCPToolRegistry


logger = logging.getLogger("pusher_mcp.mcp.server")


class MCPServer:
    """
    MCP Server that exposes tools over JSON-RPC 2.0 stdio transport.

    Usage:
        server = MCPServer(registry)
        server.run()  # blocks, reading from stdin

    Or for programmatic use:
        server = MCPServer(registry)
        response = server.handle_message(json_string)
    """

    def __init__(
        self,
        registry: MCPToolRegistry,
        name: str = SERVER_NAME,
        version: str = SERVER_VERSION,
    ):
        """
        Initialize the MCP server.

        Args:
            registry: Tool registry to serve.
            name: Server name reported in serverInfo.
            version: Server version reported in serverInfo.
        """
        self.registry = registry
        self.server_info = {"name": name, "version": version}
        self._initialized = False
        self._client_info: Optional[Dict[str, str]] = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    # ------------------------------------------------------------------
    # Stdio transport
    # ------------------------------------------------------------------

    def run(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        """
        Run the server, reading JSON-RPC messages from stdin and writing
        responses to stdout.  Blocks until stdin is closed or EOF.
        """
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        logger.info("MCP Server starting on stdio transport")

        for line in stdin:
            line = line.strip()
            if not line:
                continue

            response = self.handle_message(line)
            if response is not None:
                stdout.write(response + "\n")
                stdout.flush()

        logger.info("MCP Server shutting down (stdin closed)")

    # ------------------------------------------------------------------
    # Message handling
    # ------------------------------------------------------------------

    def handle_message(self, raw: str) -> Optional[str]:
        """
        Parse and dispatch a single JSON-RPC message.

        Args:
            raw: Raw JSON string.

        Returns:
            JSON string response, or None for notifications.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            return JSONRPCError(
                code=PARSE_ERROR,
                message=f"Parse error: {e}",
            ).to_json()

        if not isinstance(data, dict):
            return JSONRPCError(
                code=INVALID_REQUEST,
                message="Invalid request: expected JSON object",
            ).to_json()

        jsonrpc = data.get("jsonrpc")
        if jsonrpc != JSONRPC_VERSION:
            return JSONRPCError(
                code=INVALID_REQUEST,
                message=f"Invalid JSON-RPC version: {jsonrpc}",
                id=data.get("id"),
            ).to_json()

        method = data.get("method")
        params = data.get("params")
        msg_id = data.get("id")

        if params is None:
            params = {}
        elif not isinstance(params, dict):
            if msg_id is None:
                logger.warning(f"Dropping notification {method} with non-object params")
                return None
            return JSONRPCError(
                code=INVALID_PARAMS,
                message="Invalid params: expected JSON object",
                id=msg_id,
            ).to_json()

        # Notification (no id) – no response expected
        if msg_id is None:
            self._handle_notification(method, params)
            return None

        if not isinstance(method, str):
            return JSONRPCError(
                code=INVALID_REQUEST,
                message="Invalid request: missing method",
                id=msg_id,
            ).to_json()

        return self._handle_request(method, params, msg_id)

    # ------------------------------------------------------------------
    # Request dispatch
    # ------------------------------------------------------------------

    def _handle_request(
        self, method: str, params: Dict[str, Any], msg_id: Any
    ) -> str:
        """Dispatch a JSON-RPC request and return the response JSON."""
        try:
            if method == "initialize":
                return self._handle_initialize(params, msg_id)
            elif method == "ping":
                return JSONRPCResponse(result={}, id=msg_id).to_json()
            elif method == "tools/list":
                return self._handle_tools_list(params, msg_id)
            elif method == "tools/call":
                return self._handle_tools_call(params, msg_id)
            else:
                return JSONRPCError(
                    code=METHOD_NOT_FOUND,
                    message=f"Method not found: {method}",
                    id=msg_id,
                ).to_json()
        except Exception as e:
            logger.error(f"Internal error handling {method}: {e}", exc_info=True)
            return JSONRPCError(
                code=INTERNAL_ERROR,
                message=f"Internal error: {e}",
                id=msg_id,
            ).to_json()

    def _handle_notification(self, method: Optional[str], params: Dict[str, Any]) -> None:
        """Handle a JSON-RPC notification (no response)."""
        if method == "notifications/initialized":
            logger.info("Client confirmed initialization")
            self._initialized = True
        elif method == "notifications/cancelled":
            request_id = params.get("requestId")
            reason = params.get("reason", "unknown")
            logger.info(f"Client cancelled request {request_id}: {reason}")
        else:
            logger.debug(f"Unhandled notification: {method}")

    # ------------------------------------------------------------------
    # MCP method handlers
    # ------------------------------------------------------------------

    def _handle_initialize(
        self, params: Dict[str, Any], msg_id: Any
    ) -> str:
        """Handle the initialize request."""
        self._client_info = params.get("clientInfo") or {}
        requested = params.get("protocolVersion")
        logger.info(
            f"Initialize from {self._client_info.get('name', 'unknown')} "
            f"(protocol {requested or 'unknown'})"
        )

        result = MCPInitializeResult(
            server_info=self.server_info,
            protocol_version=negotiate_protocol_version(requested),
            capabilities=MCPServerCapabilities(
                tools={"listChanged": False},
            ),
        )
        return JSONRPCResponse(result=result.to_dict(), id=msg_id).to_json()

    def _handle_tools_list(
        self, params: Dict[str, Any], msg_id: Any
    ) -> str:
        """Handle tools/list request."""
        cursor = params.get("cursor")
        result = self.registry.list_tools(cursor=cursor)
        return JSONRPCResponse(result=result, id=msg_id).to_json()

    def _handle_tools_call(
        self, params: Dict[str, Any], msg_id: Any
    ) -> str:
        """Handle tools/call request."""
        name = params.get("name")
        if not name:
            return JSONRPCError(
                code=INVALID_PARAMS,
                message="Missing required parameter: name",
                id=msg_id,
            ).to_json()

        call = MCPToolCall(name=name, arguments=params.get("arguments"), call_id=msg_id)
        try:
            tool_result = self.registry.call_tool(call)
        except (UnknownToolError, ToolInputError) as e:
            logger.warning(f"Rejected tools/call: {e}")
            return JSONRPCError(
                code=INVALID_PARAMS,
                message=str(e),
                id=msg_id,
            ).to_json()

        # MCP spec: tool execution errors are returned in the result
        # (isError=true), NOT as JSON-RPC errors.
        return JSONRPCResponse(
            result=tool_result.to_dict(), id=msg_id
        ).to_json()

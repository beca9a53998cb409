"""
MCP (Model Context Protocol) Server Module

Implements the MCP 2025-11-25 specification for tool-calling:
https://modelcontextprotocol.io/specification/2025-11-25

Components:
- schema: MCP data types (tools, content blocks, JSON-RPC messages, initialize)
- tools: Tool registry with schema validation and tools/list + tools/call
- server: MCP server over JSON-RPC stdio transport
"""

from .schema import (
    # JSON-RPC 2.0 transport
    JSONRPCResponse,
    JSONRPCError,
    JSONRPC_VERSION,
    MCP_PROTOCOL_VERSION,
    # JSON-RPC error codes
    PARSE_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
    # Content types
    ContentType,
    TextContent,
    # Tool definitions
    MCPTool,
    MCPToolCall,
    MCPToolResult,
    ErrorKind,
    # Initialize handshake
    MCPServerCapabilities,
    MCPInitializeResult,
)

from .tools import MCPToolRegistry
from .server import MCPServer

__all__ = [
    # JSON-RPC transport
    "JSONRPCResponse",
    "JSONRPCError",
    "JSONRPC_VERSION",
    "MCP_PROTOCOL_VERSION",
    # Error codes
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    # Content types
    "ContentType",
    "TextContent",
    # Tool definitions
    "MCPTool",
    "MCPToolCall",
    "MCPToolResult",
    "ErrorKind",
    # Initialize
    "MCPServerCapabilities",
    "MCPInitializeResult",
    # Registry and server
    "MCPToolRegistry",
    "MCPServer",
]

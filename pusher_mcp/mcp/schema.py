"""
MCP (Model Context Protocol) Schema Definitions

Implements the data structures the Pusher MCP server needs from the
MCP 2025-11-25 specification:
https://modelcontextprotocol.io/specification/2025-11-25

Key MCP concepts implemented:
- Tool definitions with JSON Schema inputSchema
- Tool call requests and results using text content blocks
- JSON-RPC 2.0 message wrappers for protocol transport
- The initialize handshake result
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List, Union
from enum import Enum
import json


# ---------------------------------------------------------------------------
# JSON-RPC 2.0 base types (MCP transport layer)
# ---------------------------------------------------------------------------

JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2025-11-25"

# Newest first; the server answers initialize with the client's version when
# it is listed here, otherwise with MCP_PROTOCOL_VERSION.
SUPPORTED_PROTOCOL_VERSIONS = (
    "2025-11-25",
    "2025-06-18",
    "2025-03-26",
    "2024-11-05",
)


@dataclass
class JSONRPCResponse:
    """
    JSON-RPC 2.0 success response.
    """
    result: Any
    id: Optional[Union[str, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "result": self.result,
            "id": self.id,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass
class JSONRPCError:
    """
    JSON-RPC 2.0 error response.
    """
    code: int
    message: str
    data: Optional[Any] = None
    id: Optional[Union[str, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        error_obj: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.data is not None:
            error_obj["data"] = self.data
        return {
            "jsonrpc": JSONRPC_VERSION,
            "error": error_obj,
            "id": self.id,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


# ---------------------------------------------------------------------------
# MCP Content types
# ---------------------------------------------------------------------------

class ContentType(str, Enum):
    """Content block types per MCP spec.  Only text is produced here."""
    TEXT = "text"


@dataclass
class TextContent:
    """
    Text content block.

    MCP spec: { type: "text", text: string, annotations?: { ... } }
    """
    text: str
    annotations: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": ContentType.TEXT.value,
            "text": self.text,
        }
        if self.annotations:
            result["annotations"] = self.annotations
        return result


# ---------------------------------------------------------------------------
# MCP Tool definitions
# ---------------------------------------------------------------------------

@dataclass
class MCPTool:
    """
    MCP Tool definition following the 2025-11-25 specification.

    A tool has:
    - name: unique identifier
    - description: human-readable description
    - inputSchema: JSON Schema object describing the tool's parameters
    - annotations: optional behaviour hints (readOnlyHint, destructiveHint, ...)

    This is returned by `tools/list`.  The registry also validates
    `tools/call` arguments against `input_schema` before any handler runs.
    """
    name: str
    description: str = ""
    input_schema: Dict[str, Any] = field(default_factory=lambda: {
        "type": "object",
        "properties": {},
    })
    annotations: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to MCP tools/list response item format."""
        result: Dict[str, Any] = {
            "name": self.name,
            "inputSchema": self.input_schema,
        }
        if self.description:
            result["description"] = self.description
        if self.annotations:
            result["annotations"] = self.annotations
        return result


# ---------------------------------------------------------------------------
# MCP tools/call request and result
# ---------------------------------------------------------------------------

@dataclass
class MCPToolCall:
    """
    Represents a tools/call request per the MCP specification.

    MCP spec `tools/call` params:
    {
        name: string,
        arguments?: { [key: string]: unknown }
    }

    `call_id` is the JSON-RPC request id, kept for log correlation.
    """
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    call_id: Optional[Union[str, int]] = None


class ErrorKind(str, Enum):
    """Why a tool result carries isError=True.  Not sent to the client."""
    SEMANTIC = "semantic"
    PROVIDER = "provider"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class MCPToolResult:
    """
    Result of a tools/call per the MCP specification.

    MCP spec tools/call result:
    {
        content: TextContent[],
        isError?: boolean
    }

    `tool_name`, `call_id` and `error_kind` are bookkeeping only.
    """
    content: List[TextContent]
    is_error: bool = False
    tool_name: str = ""
    call_id: Optional[Union[str, int]] = None
    error_kind: Optional[ErrorKind] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to MCP tools/call result format."""
        result: Dict[str, Any] = {
            "content": [c.to_dict() for c in self.content],
        }
        if self.is_error:
            result["isError"] = True
        return result

    def get_text(self) -> str:
        """Concatenate all text blocks into a single string."""
        return "\n".join(block.text for block in self.content)


# ---------------------------------------------------------------------------
# MCP Initialize handshake
# ---------------------------------------------------------------------------

@dataclass
class MCPServerCapabilities:
    """Server capabilities declared during initialize."""
    tools: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.tools is not None:
            result["tools"] = self.tools
        return result


@dataclass
class MCPInitializeResult:
    """Result of the initialize request (server → client)."""
    server_info: Dict[str, str]
    protocol_version: str = MCP_PROTOCOL_VERSION
    capabilities: MCPServerCapabilities = field(default_factory=MCPServerCapabilities)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "protocolVersion": self.protocol_version,
            "capabilities": self.capabilities.to_dict(),
            "serverInfo": self.server_info,
        }


def negotiate_protocol_version(requested: Optional[str]) -> str:
    """Pick the protocol version to answer an initialize request with."""
    if requested in SUPPORTED_PROTOCOL_VERSIONS:
        return requested
    return MCP_PROTOCOL_VERSION

"""
pusher-mcp - Pusher Channels tools for MCP clients.

Exposes the Pusher Channels HTTP API as Model Context Protocol tools so an
AI agent can trigger events, inspect channels, authorize private/presence
subscriptions and terminate user connections.

Architecture:
- MCP 2025-11-25 over newline-delimited JSON-RPC on stdio (pusher_mcp.mcp)
- Seven tool contracts with JSON Schema inputs (pusher_mcp.tools)
- One lazily created Pusher client per process (pusher_mcp.utils)
"""

__version__ = "1.0.0"

# Errors and configuration
from pusher_mcp.errors import (
    PusherMCPError,
    ConfigurationError,
    ToolInputError,
    UnknownToolError,
)
from pusher_mcp.config import ProviderCredentials, load_credentials

# MCP server and registry
from pusher_mcp.mcp import MCPServer, MCPToolRegistry, MCPToolResult

# Provider client
from pusher_mcp.utils import ChannelsClient, ClientAccessor, ProviderResponse

# Tools
from pusher_mcp.tools import TOOL_NAMES, create_registry

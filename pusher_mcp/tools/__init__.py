"""
The seven Pusher Channels tools.

`create_registry()` is the only place tools are registered.  Adding a tool
means adding it here; nothing is discovered at runtime.
"""

from typing import Optional

from pusher_mcp.mcp.tools import MCPToolRegistry
from pusher_mcp.utils.pusher_client import ClientAccessor

from .auth import AuthTools
from .channels import ChannelTools
from .events import EventTools
from .users import UserTools

TOOL_NAMES = (
    "trigger_event",
    "trigger_batch_events",
    "list_channels",
    "get_channel_info",
    "get_presence_users",
    "authorize_channel",
    "terminate_user_connections",
)


def create_registry(accessor: Optional[ClientAccessor] = None) -> MCPToolRegistry:
    """
    Build a registry holding all seven tools, bound to one client accessor.

    Args:
        accessor: Source of the Pusher client.  A fresh `ClientAccessor`
                  reading os.environ is used if None.
    """
    accessor = accessor or ClientAccessor()
    registry = MCPToolRegistry()

    EventTools(accessor).register(registry)
    ChannelTools(accessor).register(registry)
    AuthTools(accessor).register(registry)
    UserTools(accessor).register(registry)

    return registry


__all__ = ["TOOL_NAMES", "create_registry"]

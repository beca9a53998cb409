"""Provider client utilities."""

from .pusher_client import ChannelsClient, ClientAccessor, ProviderResponse

__all__ = ["ChannelsClient", "ClientAccessor", "ProviderResponse"]

"""Shared fixtures: a recording fake Pusher client and a registry bound to it."""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pusher_mcp.mcp import MCPServer, MCPToolCall
from pusher_mcp.tools import create_registry
from pusher_mcp.utils.pusher_client import ProviderResponse


class FakeChannelsClient:
    """Stands in for ChannelsClient; records calls and returns canned values."""

    def __init__(self):
        self.calls = []
        self.responses = []
        self.auth = {
            "auth": "test-app-key:auth-signature",
            "channel_data": '{"user_id":"123"}',
        }
        self.fail_with = {}

    def queue_response(self, status=200, body=None):
        text = json.dumps(body) if body is not None else ""
        self.responses.append(ProviderResponse(status=status, body=text))

    def fail(self, method, error):
        """Make the next call to `method` raise `error`."""
        self.fail_with[method] = error

    def _record(self, method, *args):
        self.calls.append((method,) + args)
        error = self.fail_with.pop(method, None)
        if error is not None:
            raise error

    def calls_to(self, method):
        return [call[1:] for call in self.calls if call[0] == method]

    def trigger(self, channels, event_name, data, socket_id=None):
        self._record("trigger", channels, event_name, data, socket_id)
        return {}

    def trigger_batch(self, batch):
        self._record("trigger_batch", batch)
        return {}

    def terminate_user_connections(self, user_id):
        self._record("terminate_user_connections", user_id)
        return {}

    def authorize_channel(self, socket_id, channel, presence_data=None):
        self._record("authorize_channel", socket_id, channel, presence_data)
        return self.auth

    def get(self, path, params=None):
        self._record("get", path, dict(params or {}))
        if self.responses:
            return self.responses.pop(0)
        return ProviderResponse(status=200, body="{}")


class FakeAccessor:
    """ClientAccessor stand-in handing out one fake client."""

    def __init__(self, client, error=None):
        self.client = client
        self.error = error
        self.requests = 0

    def get_client(self):
        self.requests += 1
        if self.error is not None:
            raise self.error
        return self.client


@pytest.fixture
def fake_client():
    return FakeChannelsClient()


@pytest.fixture
def registry(fake_client):
    return create_registry(FakeAccessor(fake_client))


@pytest.fixture
def server(registry):
    return MCPServer(registry)


@pytest.fixture
def call(registry):
    """Call a tool in-process: call("list_channels", prefix="x")."""
    def _call(name, **arguments):
        return registry.call_tool(MCPToolCall(name=name, arguments=arguments))
    return _call


@pytest.fixture
def rpc(server):
    """Send one JSON-RPC request through the server and decode the reply."""
    counter = {"id": 0}

    def _rpc(method, params=None):
        counter["id"] += 1
        message = {"jsonrpc": "2.0", "id": counter["id"], "method": method}
        if params is not None:
            message["params"] = params
        response = server.handle_message(json.dumps(message))
        return json.loads(response)
    return _rpc

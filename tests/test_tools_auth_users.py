"""authorize_channel and terminate_user_connections."""

import json

import pytest

from pusher_mcp.errors import ToolInputError
from pusher_mcp.mcp.schema import ErrorKind


class TestAuthorizeChannel:

    def test_private_channel(self, call, fake_client):
        fake_client.auth = {"auth": "key:signature"}

        result = call("authorize_channel", socketId="100.200", channel="private-chat")

        assert not result.is_error
        assert fake_client.calls_to("authorize_channel") == [("100.200", "private-chat", None)]
        assert result.get_text() == (
            "Authorization for private-chat:\n" + json.dumps({"auth": "key:signature"}, indent=2)
        )

    def test_presence_channel_forwards_presence_data(self, call, fake_client):
        presence = {"user_id": "123", "user_info": {"name": "Alice"}}

        result = call(
            "authorize_channel",
            socketId="100.200",
            channel="presence-room",
            presenceData=presence,
        )

        assert not result.is_error
        assert fake_client.calls_to("authorize_channel") == [("100.200", "presence-room", presence)]
        assert result.get_text().startswith("Authorization for presence-room:\n{\n  ")
        assert '"channel_data": "{\\"user_id\\":\\"123\\"}"' in result.get_text()

    def test_public_channel_is_refused_without_signing(self, call, fake_client):
        result = call("authorize_channel", socketId="1.2", channel="public-x")

        assert result.is_error
        assert result.error_kind == ErrorKind.SEMANTIC
        assert result.get_text() == 'Channel must start with "private-" or "presence-" for authorization'
        assert fake_client.calls == []

    def test_presence_channel_requires_presence_data(self, call, fake_client):
        result = call("authorize_channel", socketId="1.2", channel="presence-room")

        assert result.is_error
        assert result.get_text() == "presenceData is required for presence channels"
        assert fake_client.calls == []

    def test_signing_failure(self, call, fake_client):
        fake_client.fail("authorize_channel", ValueError("Invalid socket ID"))

        result = call("authorize_channel", socketId="bad", channel="private-x")

        assert result.get_text() == "Failed to authorize channel: Invalid socket ID"

    @pytest.mark.parametrize("arguments", [
        {"socketId": "", "channel": "private-x"},
        {"channel": "private-x"},
        {"socketId": "1.2", "channel": "private-x", "presenceData": {}},
        {"socketId": "1.2", "channel": "private-x", "presenceData": {"user_id": ""}},
        {"socketId": "1.2", "channel": "presence-x", "presenceData": {"user_id": "u", "user_info": "x"}},
    ])
    def test_schema_violations(self, call, fake_client, arguments):
        with pytest.raises(ToolInputError):
            call("authorize_channel", **arguments)
        assert fake_client.calls == []


class TestTerminateUserConnections:

    def test_terminates(self, call, fake_client):
        result = call("terminate_user_connections", userId="user-123")

        assert fake_client.calls_to("terminate_user_connections") == [("user-123",)]
        assert result.to_dict() == {
            "content": [{"type": "text", "text": 'All connections terminated for user "user-123"'}],
        }

    def test_failure(self, call, fake_client):
        fake_client.fail("terminate_user_connections", RuntimeError("User not found"))

        result = call("terminate_user_connections", userId="ghost")

        assert result.is_error
        assert result.get_text() == "Failed to terminate user connections: User not found"

    def test_rejects_empty_user_id(self, call, fake_client):
        with pytest.raises(ToolInputError):
            call("terminate_user_connections", userId="")
        assert fake_client.calls == []

"""End-to-end: JSON-RPC messages through MCPServer to the tools and back."""

import io
import json

from pusher_mcp.mcp import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    MCP_PROTOCOL_VERSION,
    PARSE_ERROR,
)


def _text(response):
    return response["result"]["content"][0]["text"]


def test_initialize_handshake(rpc, server):
    response = rpc("initialize", {
        "protocolVersion": "2025-06-18",
        "clientInfo": {"name": "test-client", "version": "1.0.0"},
        "capabilities": {},
    })

    assert response["result"] == {
        "protocolVersion": "2025-06-18",
        "capabilities": {"tools": {"listChanged": False}},
        "serverInfo": {"name": "pusher-channels", "version": "1.0.0"},
    }

    assert server.handle_message('{"jsonrpc": "2.0", "method": "notifications/initialized"}') is None
    assert server.initialized


def test_initialize_with_unknown_version_falls_back(rpc):
    response = rpc("initialize", {"protocolVersion": "1999-01-01"})
    assert response["result"]["protocolVersion"] == MCP_PROTOCOL_VERSION


def test_ping(rpc):
    assert rpc("ping")["result"] == {}


def test_tools_list_exposes_all_seven(rpc):
    tools = rpc("tools/list")["result"]["tools"]

    assert sorted(tool["name"] for tool in tools) == [
        "authorize_channel",
        "get_channel_info",
        "get_presence_users",
        "list_channels",
        "terminate_user_connections",
        "trigger_batch_events",
        "trigger_event",
    ]


def test_trigger_list_info_workflow(rpc, fake_client):
    response = rpc("tools/call", {
        "name": "trigger_event",
        "arguments": {
            "channel": "notifications",
            "event": "alert",
            "data": {"level": "warning", "message": "CPU usage high"},
        },
    })
    assert "isError" not in response["result"]
    assert len(fake_client.calls_to("trigger")) == 1

    fake_client.queue_response(body={
        "channels": {"notifications": {"subscription_count": 42}},
    })
    response = rpc("tools/call", {
        "name": "list_channels",
        "arguments": {"info": ["subscription_count"]},
    })
    assert _text(response) == "Active channels (1):\nnotifications — subscriptions: 42"

    fake_client.queue_response(body={"occupied": True})
    response = rpc("tools/call", {
        "name": "get_channel_info",
        "arguments": {"channel": "notifications"},
    })
    assert _text(response) == "Channel: notifications\nOccupied: true"


def test_provider_404_is_a_tool_error(rpc, fake_client):
    fake_client.queue_response(status=404)

    response = rpc("tools/call", {
        "name": "get_channel_info",
        "arguments": {"channel": "nonexistent"},
    })

    assert response["result"]["isError"] is True
    assert _text(response) == 'Pusher API returned status 404 for channel "nonexistent"'


def test_moderation_flow(rpc, fake_client):
    fake_client.queue_response(body={"users": [{"id": "user-good"}, {"id": "user-bad"}]})
    response = rpc("tools/call", {
        "name": "get_presence_users",
        "arguments": {"channel": "presence-chatroom"},
    })
    assert "user-bad" in _text(response)

    response = rpc("tools/call", {
        "name": "terminate_user_connections",
        "arguments": {"userId": "user-bad"},
    })
    assert "isError" not in response["result"]
    assert fake_client.calls_to("terminate_user_connections") == [("user-bad",)]


def test_failure_does_not_affect_later_calls(rpc, fake_client):
    fake_client.fail("trigger", RuntimeError("API down"))
    response = rpc("tools/call", {
        "name": "trigger_event",
        "arguments": {"channel": "ch", "event": "evt", "data": "x"},
    })
    assert response["result"]["isError"] is True
    assert _text(response) == "Failed to trigger event: API down"

    fake_client.queue_response(body={"channels": {"test-ch": {}}})
    response = rpc("tools/call", {"name": "list_channels", "arguments": {}})
    assert "isError" not in response["result"]
    assert "test-ch" in _text(response)


def test_unknown_tool_is_a_protocol_error(rpc):
    response = rpc("tools/call", {"name": "nonexistent_tool", "arguments": {}})

    assert "result" not in response
    assert response["error"]["code"] == INVALID_PARAMS
    assert response["error"]["message"] == "Tool nonexistent_tool not found"


def test_schema_violation_is_a_protocol_error(rpc, fake_client):
    response = rpc("tools/call", {
        "name": "get_presence_users",
        "arguments": {"channel": "private-room"},
    })

    assert response["error"]["code"] == INVALID_PARAMS
    assert response["error"]["message"].startswith("Invalid arguments for tool get_presence_users")
    assert fake_client.calls == []


def test_missing_tool_name(rpc):
    response = rpc("tools/call", {"arguments": {}})
    assert response["error"]["code"] == INVALID_PARAMS


def test_call_without_arguments(rpc, fake_client):
    fake_client.queue_response(body={"channels": {}})
    response = rpc("tools/call", {"name": "list_channels"})
    assert _text(response) == "No active channels"


def test_protocol_errors(server, rpc):
    assert json.loads(server.handle_message("{not json"))["error"]["code"] == PARSE_ERROR
    assert json.loads(server.handle_message("[1, 2]"))["error"]["code"] == INVALID_REQUEST
    assert json.loads(server.handle_message('{"jsonrpc": "1.0", "id": 1, "method": "ping"}'))["error"]["code"] == INVALID_REQUEST
    assert rpc("resources/list")["error"]["code"] == METHOD_NOT_FOUND


def test_non_object_params_on_request(server, fake_client):
    response = json.loads(server.handle_message(
        '{"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": ["list_channels"]}'
    ))

    assert response["id"] == 3
    assert response["error"]["code"] == INVALID_PARAMS
    assert fake_client.calls == []


def test_non_object_params_on_notification_keeps_server_running(server):
    stdin = io.StringIO(
        '{"jsonrpc": "2.0", "method": "notifications/cancelled", "params": [1]}\n'
        '{"jsonrpc": "2.0", "id": 1, "method": "ping"}\n'
    )
    stdout = io.StringIO()

    server.run(stdin=stdin, stdout=stdout)

    assert [json.loads(line) for line in stdout.getvalue().splitlines()] == [
        {"jsonrpc": "2.0", "result": {}, "id": 1},
    ]


def test_run_reads_lines_until_eof(server, fake_client):
    fake_client.queue_response(body={"channels": {"a": {}}})
    stdin = io.StringIO(
        '{"jsonrpc": "2.0", "id": 1, "method": "ping"}\n'
        "\n"
        '{"jsonrpc": "2.0", "method": "notifications/cancelled", "params": {"requestId": 1}}\n'
        '{"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "list_channels"}}\n'
    )
    stdout = io.StringIO()

    server.run(stdin=stdin, stdout=stdout)

    lines = [json.loads(line) for line in stdout.getvalue().splitlines()]
    assert [line["id"] for line in lines] == [1, 2]
    assert lines[1]["result"]["content"][0]["text"] == "Active channels (1):\na"

"""
Event tools: trigger_event and trigger_batch_events.

Object payloads are JSON-encoded here, before they reach the SDK.  String
payloads are sent exactly as given, so a caller that already serialized its
data does not get it encoded twice.
"""

import logging
from typing import Any, Dict

from pusher_mcp.mcp.schema import MCPTool, MCPToolResult
from pusher_mcp.mcp.tools import MCPToolRegistry
from pusher_mcp.utils.pusher_client import ClientAccessor

from .fields import (
    MAX_BATCH_EVENTS,
    MAX_TRIGGER_CHANNELS,
    encode_payload,
    name_field,
    payload_field,
)
from .results import failure_result, text_result

logger = logging.getLogger("pusher_mcp.tools.events")


TRIGGER_EVENT = MCPTool(
    name="trigger_event",
    description=(
        "Send an event to one or more Pusher channels. Use this to push "
        "realtime messages to connected clients."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "channel": {
                "anyOf": [
                    name_field("Channel name"),
                    {
                        "type": "array",
                        "items": name_field("Channel name"),
                        "minItems": 1,
                        "maxItems": MAX_TRIGGER_CHANNELS,
                    },
                ],
                "description": "Channel name or array of channel names (max 100)",
            },
            "event": name_field("Event name to trigger (e.g. 'new-message', 'update')"),
            "data": payload_field("Event payload — string or JSON object (max 10KB)"),
            "socketId": {
                "type": "string",
                "description": (
                    "Optional socket ID to exclude from receiving the event "
                    "(prevents echo)"
                ),
            },
        },
        "required": ["channel", "event", "data"],
    },
    annotations={"destructiveHint": False, "idempotentHint": False},
)

TRIGGER_BATCH_EVENTS = MCPTool(
    name="trigger_batch_events",
    description=(
        "Send up to 10 events in a single API call. More efficient than "
        "triggering events individually when you need to notify multiple channels."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "events": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "channel": name_field("Target channel name"),
                        "name": name_field("Event name"),
                        "data": payload_field("Event payload"),
                        "socketId": {
                            "type": "string",
                            "description": "Socket ID to exclude",
                        },
                    },
                    "required": ["channel", "name", "data"],
                },
                "minItems": 1,
                "maxItems": MAX_BATCH_EVENTS,
                "description": "Array of events to send (max 10)",
            },
        },
        "required": ["events"],
    },
    annotations={"destructiveHint": False, "idempotentHint": False},
)


class EventTools:
    """Handlers that publish events through the Pusher client."""

    def __init__(self, accessor: ClientAccessor):
        self.accessor = accessor

    def register(self, registry: MCPToolRegistry) -> None:
        registry.register_tool(TRIGGER_EVENT, self.trigger_event)
        registry.register_tool(TRIGGER_BATCH_EVENTS, self.trigger_batch_events)

    def trigger_event(self, arguments: Dict[str, Any]) -> MCPToolResult:
        channel = arguments["channel"]
        event = arguments["event"]
        socket_id = arguments.get("socketId")

        try:
            client = self.accessor.get_client()
            payload = encode_payload(arguments["data"])
            logger.debug(f"Triggering {event} on {channel}")
            client.trigger(channel, event, payload, socket_id=socket_id)
        except Exception as e:
            return failure_result("trigger event", e)

        channels = channel if isinstance(channel, list) else [channel]
        return text_result(
            f'Event "{event}" triggered on {len(channels)} channel(s): '
            f"{', '.join(channels)}"
        )

    def trigger_batch_events(self, arguments: Dict[str, Any]) -> MCPToolResult:
        events = arguments["events"]

        try:
            client = self.accessor.get_client()
            batch = []
            for event in events:
                item = {
                    "channel": event["channel"],
                    "name": event["name"],
                    "data": encode_payload(event["data"]),
                }
                if event.get("socketId"):
                    item["socket_id"] = event["socketId"]
                batch.append(item)

            logger.debug(f"Triggering batch of {len(batch)} event(s)")
            client.trigger_batch(batch)
        except Exception as e:
            return failure_result("trigger batch events", e)

        summary = "\n".join(f'  "{e["name"]}" → {e["channel"]}' for e in events)
        return text_result(f"Batch of {len(events)} event(s) triggered:\n{summary}")

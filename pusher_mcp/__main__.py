"""Main entry point for the Pusher MCP server."""

import sys
import json
import argparse
import logging

from pusher_mcp.config import configure_logging, get_log_level, load_credentials
from pusher_mcp.errors import ConfigurationError

logger = logging.getLogger("pusher_mcp")


def main(argv=None) -> int:
    """Main entry point for pusher-mcp."""
    parser = argparse.ArgumentParser(
        prog="pusher-mcp",
        description="pusher-mcp - Pusher Channels tools over the Model Context Protocol"
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=["serve", "tools", "check", "version"],
        default="serve",
        help="Command to run (default: serve)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level for stderr output (default: $PUSHER_MCP_LOG_LEVEL or INFO)"
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level or get_log_level())

    if args.command == "version":
        from pusher_mcp import __version__
        print(f"pusher-mcp version {__version__}")
        return 0

    if args.command == "check":
        try:
            credentials = load_credentials()
        except ConfigurationError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Configuration OK (app {credentials.app_id}, cluster {credentials.cluster})")
        return 0

    from pusher_mcp.tools import create_registry

    if args.command == "tools":
        registry = create_registry()
        print(json.dumps(registry.list_tools(), indent=2, ensure_ascii=False))
        return 0

    # serve
    from pusher_mcp.mcp import MCPServer

    try:
        load_credentials()
    except ConfigurationError as e:
        # Tools still list; each provider call reports the problem
        logger.warning(str(e))

    try:
        server = MCPServer(create_registry())
        print("Pusher MCP Server running on stdio", file=sys.stderr)
        server.run()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

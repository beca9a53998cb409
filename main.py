def main():
    """Launch the Pusher MCP server on stdio."""
    import sys
    from pusher_mcp.__main__ import main as pusher_mcp_main

    sys.exit(pusher_mcp_main(sys.argv[1:]))


if __name__ == "__main__":
    main()

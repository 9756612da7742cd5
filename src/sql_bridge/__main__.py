"""Entry point for the sql-bridge MCP server."""

from sql_bridge.server import create_server


def main() -> None:
    """Run the sql-bridge MCP server."""
    server = create_server()
    server.run(transport="stdio")


if __name__ == "__main__":
    main()

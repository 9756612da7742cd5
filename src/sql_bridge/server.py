"""FastMCP server with lifespan management and tool registration."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from sql_bridge.bridge import SqlBridge
from sql_bridge.config import get_log_level
from sql_bridge.errors import BridgeError
from sql_bridge.tools.sql_catalog import register_sql_catalog
from sql_bridge.tools.sql_connect import register_sql_connect
from sql_bridge.tools.sql_execute import register_sql_execute


async def shutdown_bridge(bridge: SqlBridge) -> None:
    """Close a connection left open by the client."""
    logger = logging.getLogger(__name__)
    if not bridge.is_connected:
        return
    try:
        await bridge.close()
        logger.info("Open connection closed at shutdown")
    except BridgeError as e:
        logger.warning("Failed to close connection at shutdown: %s", e.message)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Own the bridge for the lifetime of the server."""
    # Configure logging to stderr (stdout is MCP stdio transport)
    logging.basicConfig(
        level=getattr(logging, get_log_level()),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    bridge = SqlBridge()
    try:
        yield {"bridge": bridge}
    finally:
        await shutdown_bridge(bridge)


_INSTRUCTIONS = """\
This server gives you one connection to a SQL database.

1. sql_connect with host, username, password (port, database and scheme are \
optional; scheme is postgresql, mysql or sqlite). Only one connection may be \
open; sql_close it before connecting elsewhere.
2. Run statements:
- sql_execute: any statement; returns rows or an affected-row count.
- sql_execute_query: statements that return rows.
- sql_execute_update: INSERT/UPDATE/DELETE/DDL; returns the affected-row count.
3. Browse the schema with sql_list_databases, sql_list_tables and \
sql_describe_table. sql_get_row fetches one row by primary key, and \
sql_use_database switches database on a MySQL connection.
4. sql_close when done.

SQL is executed exactly as written. There are no bound parameters, so quote \
literals yourself. Every tool returns {"ok": true, "result": ...} or \
{"ok": false, "error": {"code", "error", "message"}}; code 404 means no open \
connection, 500 means the database or driver reported an error.
"""


def create_server() -> FastMCP:
    """Create and configure the MCP server with all tools."""
    mcp = FastMCP(
        "sql-bridge",
        instructions=_INSTRUCTIONS,
        lifespan=lifespan,
    )

    register_sql_connect(mcp)
    register_sql_execute(mcp)
    register_sql_catalog(mcp)

    return mcp

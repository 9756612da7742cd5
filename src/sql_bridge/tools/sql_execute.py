"""sql_execute, sql_execute_query and sql_execute_update MCP tools."""

from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from sql_bridge.tools.context import get_bridge
from sql_bridge.tools.formatters import format_outcome, format_rows, respond

SqlText = Annotated[str, Field(description="SQL statement, sent to the database unmodified")]


def register_sql_execute(mcp: FastMCP) -> None:
    """Register the statement execution tools with the MCP server."""

    @mcp.tool()
    async def sql_execute(sql: SqlText, ctx: Context | None = None) -> dict[str, Any]:
        """Run any single SQL statement.

        Returns {"kind": "row_set", "rows": [...]} for statements that produce
        rows and {"kind": "affected_count", "count": n} for everything else.
        There is no parameter binding: the text is executed as written.
        """
        return await respond(get_bridge(ctx).execute(sql), format_outcome)

    @mcp.tool()
    async def sql_execute_query(sql: SqlText, ctx: Context | None = None) -> dict[str, Any]:
        """Run a SELECT-like statement and return its rows as a list of objects."""
        return await respond(get_bridge(ctx).execute_query(sql), format_rows)

    @mcp.tool()
    async def sql_execute_update(sql: SqlText, ctx: Context | None = None) -> dict[str, Any]:
        """Run an INSERT/UPDATE/DELETE/DDL statement and return the affected-row count."""
        return await respond(get_bridge(ctx).execute_update(sql))

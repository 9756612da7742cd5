"""Schema browsing MCP tools."""

from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from sql_bridge.catalog import (
    KeyValue,
    describe_table,
    get_row,
    list_databases,
    list_tables,
    use_database,
)
from sql_bridge.models.result import row_to_plain
from sql_bridge.tools.context import get_bridge
from sql_bridge.tools.formatters import format_rows, respond


def register_sql_catalog(mcp: FastMCP) -> None:
    """Register the catalog tools with the MCP server."""

    @mcp.tool()
    async def sql_list_databases(ctx: Context | None = None) -> dict[str, Any]:
        """List databases on the connected server."""
        return await respond(list_databases(get_bridge(ctx)), format_rows)

    @mcp.tool()
    async def sql_use_database(
        database: Annotated[str, Field(description="Database to switch to")],
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Switch the open connection to another database (MySQL only)."""
        return await respond(use_database(get_bridge(ctx), database))

    @mcp.tool()
    async def sql_list_tables(ctx: Context | None = None) -> dict[str, Any]:
        """List user tables in the current database."""
        return await respond(list_tables(get_bridge(ctx)), format_rows)

    @mcp.tool()
    async def sql_describe_table(
        table: Annotated[str, Field(description="Table name")],
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Describe a table's columns.

        Each column has name, type, nullable, default_value, position, key,
        primary_key, comment, character_maximum_length and
        character_octet_length.
        """
        return await respond(describe_table(get_bridge(ctx), table), format_rows)

    @mcp.tool()
    async def sql_get_row(
        table: Annotated[str, Field(description="Table name")],
        keys: Annotated[
            dict[str, KeyValue],
            Field(description="Primary key column → value; null matches NULL"),
        ],
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Fetch one row by its primary key values; result is null if no row matches."""
        return await respond(
            get_row(get_bridge(ctx), table, keys),
            lambda row: row_to_plain(row) if row is not None else None,
        )

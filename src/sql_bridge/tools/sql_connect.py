"""sql_connect and sql_close MCP tools: connection lifecycle."""

from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field, ValidationError

from sql_bridge.bridge import SqlBridge
from sql_bridge.errors import ConnectionFailedError
from sql_bridge.models.connection import ConnectionConfig
from sql_bridge.tools.context import get_bridge
from sql_bridge.tools.formatters import failure, respond


async def connect_bridge(
    bridge: SqlBridge,
    *,
    host: str,
    username: str,
    password: str,
    port: int | None = None,
    database: str | None = None,
    scheme: str | None = None,
) -> dict[str, Any]:
    """Validate the connection fields and open the connection.

    Invalid fields (empty host, out-of-range port) are reported as a
    connection failure, the same as a descriptor the driver rejects.
    """
    fields: dict[str, Any] = {
        "host": host,
        "port": port,
        "database": database,
        "username": username,
        "password": password,
    }
    if scheme is not None:
        fields["scheme"] = scheme
    try:
        config = ConnectionConfig(**fields)
    except ValidationError as e:
        return failure(ConnectionFailedError(str(e)))

    return await respond(bridge.connect(config))


def register_sql_connect(mcp: FastMCP) -> None:
    """Register the sql_connect and sql_close tools with the MCP server."""

    @mcp.tool()
    async def sql_connect(
        host: Annotated[str, Field(description="Database server host name or address")],
        username: Annotated[str, Field(description="User to authenticate as")],
        password: Annotated[str, Field(description="Password for the user")],
        port: Annotated[
            int | None, Field(description="Server port (driver default if omitted)")
        ] = None,
        database: Annotated[str | None, Field(description="Database to open")] = None,
        scheme: Annotated[
            str | None,
            Field(
                description="Driver scheme: postgresql, mysql or sqlite"
                " (server default if omitted)"
            ),
        ] = None,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Open the bridge's single database connection.

        Fails if a connection is already open; call sql_close first.
        """
        return await connect_bridge(
            get_bridge(ctx),
            host=host,
            username=username,
            password=password,
            port=port,
            database=database,
            scheme=scheme,
        )

    @mcp.tool()
    async def sql_close(ctx: Context | None = None) -> dict[str, Any]:
        """Close the open database connection."""
        return await respond(get_bridge(ctx).close())

"""MySQL implementation of the Connection protocol.

Uses a single aiomysql connection in autocommit mode. Statements are sent
without arguments, so the driver never applies ``%`` formatting to them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import aiomysql

    from sql_bridge.db.backend import Cursor

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3306


class MySQLCursor:
    """Wraps aiomysql.Cursor to satisfy the Cursor protocol."""

    def __init__(self, cursor: aiomysql.Cursor) -> None:
        """Initialize with an executed aiomysql cursor."""
        self._cursor = cursor
        description = cursor.description
        self._columns = [d[0] for d in description] if description else None

    @property
    def columns(self) -> list[str] | None:
        """Column names, or None for statements without a row set."""
        return self._columns

    @property
    def rowcount(self) -> int:
        """Number of rows affected by the last operation."""
        rc = self._cursor.rowcount
        return rc if rc is not None else -1

    async def fetchall(self) -> list[Sequence[Any]]:
        """Fetch all remaining rows."""
        return list(await self._cursor.fetchall())

    async def close(self) -> None:
        """Discard any unread result and release the cursor."""
        await self._cursor.close()


class MySQLBackend:
    """MySQL implementation of the Connection protocol."""

    def __init__(self, conn: aiomysql.Connection) -> None:
        """Initialize with an open aiomysql connection."""
        self._conn = conn

    @classmethod
    async def create(
        cls,
        host: str,
        *,
        port: int | None,
        database: str | None,
        user: str,
        password: str,
        timeout: float,
    ) -> MySQLBackend:
        """Open a connection to ``host``, optionally selecting ``database``."""
        import aiomysql as _aiomysql

        conn = await _aiomysql.connect(
            host=host,
            port=port or DEFAULT_PORT,
            user=user,
            password=password,
            db=database,
            autocommit=True,
            connect_timeout=timeout,
        )
        logger.debug("Opened MySQL connection to %s:%s", host, port or DEFAULT_PORT)
        return cls(conn)

    async def execute(self, sql: str) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        cursor = await self._conn.cursor()
        try:
            await cursor.execute(sql)
        except Exception:
            await cursor.close()
            raise
        return MySQLCursor(cursor)

    async def close(self) -> None:
        """Send QUIT and close the connection."""
        await self._conn.ensure_closed()

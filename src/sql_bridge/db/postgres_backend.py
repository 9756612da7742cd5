"""PostgreSQL implementation of the Connection protocol.

Uses a single asyncpg connection. Each statement is prepared first: a
statement with result attributes is a row set and runs when its rows are
fetched; anything else runs immediately and reports its affected-row count
through the command status tag.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import asyncpg

    from sql_bridge.db.backend import Cursor

logger = logging.getLogger(__name__)


def _parse_rowcount(status: str | None) -> int:
    """Parse affected row count from an asyncpg status string.

    Examples: "INSERT 0 1" → 1, "UPDATE 3" → 3, "CREATE TABLE" → -1.
    """
    if not status:
        return -1
    parts = status.split()
    if len(parts) >= 2:
        try:
            return int(parts[-1])
        except ValueError:
            pass
    return -1


class PostgresCursor:
    """Wraps a prepared asyncpg statement as a Cursor.

    Row-producing statements are not run until ``fetchall()``, so errors
    raised while rows are produced or decoded surface from the fetch rather
    than from ``execute()``. Records are read positionally because column
    names may repeat.
    """

    def __init__(
        self,
        statement: asyncpg.prepared_stmt.PreparedStatement | None = None,
        columns: list[str] | None = None,
        status: str | None = None,
    ) -> None:
        """Initialize with a pending statement and its columns, or a status string."""
        self._statement = statement
        self._columns = columns
        self._rowcount = _parse_rowcount(status)

    @property
    def columns(self) -> list[str] | None:
        """Column names, or None for statements without a row set."""
        return self._columns

    @property
    def rowcount(self) -> int:
        """Number of rows affected by the last operation."""
        return self._rowcount

    async def fetchall(self) -> list[Sequence[Any]]:
        """Run the pending statement and return every record as a tuple."""
        if self._statement is None:
            return []
        statement, self._statement = self._statement, None
        records = await statement.fetch()
        return [tuple(record.values()) for record in records]

    async def close(self) -> None:
        """Drop the pending statement without running it."""
        self._statement = None


class PostgresBackend:
    """PostgreSQL implementation of the Connection protocol.

    Statements run in asyncpg's default autocommit mode.
    """

    def __init__(self, conn: asyncpg.Connection) -> None:
        """Initialize with an open asyncpg connection."""
        self._conn = conn

    @classmethod
    async def create(
        cls, descriptor: str, *, user: str, password: str, timeout: float
    ) -> PostgresBackend:
        """Open a connection from a ``postgresql://host[:port][/database]`` descriptor."""
        import asyncpg as _asyncpg

        conn = await _asyncpg.connect(descriptor, user=user, password=password, timeout=timeout)
        return cls(conn)

    async def execute(self, sql: str) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        stmt = await self._conn.prepare(sql)
        attributes = stmt.get_attributes()
        if attributes:
            return PostgresCursor(stmt, columns=[attr.name for attr in attributes])
        await stmt.fetch()
        return PostgresCursor(status=stmt.get_statusmsg())

    async def close(self) -> None:
        """Close the connection."""
        await self._conn.close()

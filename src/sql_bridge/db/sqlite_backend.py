"""SQLite implementation of the Connection protocol.

Thin wrapper around aiosqlite.Connection. The connection is opened in
autocommit mode so every statement is durable as soon as it returns.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import aiosqlite

    from sql_bridge.db.backend import Cursor

logger = logging.getLogger(__name__)


class SQLiteCursor:
    """Wraps aiosqlite.Cursor to satisfy the Cursor protocol."""

    def __init__(self, cursor: aiosqlite.Cursor) -> None:
        """Initialize with an aiosqlite cursor."""
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
        """Finalize the statement so it stops holding its lock."""
        await self._cursor.close()


class SQLiteBackend:
    """SQLite implementation of the Connection protocol."""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        """Initialize with an aiosqlite connection."""
        self._conn = conn

    @classmethod
    async def create(cls, path: str, *, timeout: float) -> SQLiteBackend:
        """Open a SQLite database file (or ``:memory:``)."""
        import aiosqlite as _aiosqlite

        conn = await _aiosqlite.connect(path, timeout=timeout, isolation_level=None)
        logger.debug("Opened SQLite database %s", path)
        return cls(conn)

    async def execute(self, sql: str) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        cursor = await self._conn.execute(sql)
        return SQLiteCursor(cursor)

    async def close(self) -> None:
        """Close the database connection."""
        await self._conn.close()

"""Driver protocols: the surface the bridge needs from a database driver.

Each backend (SQLite, Postgres) wraps its driver's connection and cursor
in these shapes. SQL is handed to the driver exactly as given: no
placeholder translation, no escaping.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Cursor(Protocol):
    """Result of one executed statement."""

    @property
    def columns(self) -> list[str] | None:
        """Column names in left-to-right order, or None if no row set was produced."""
        ...

    @property
    def rowcount(self) -> int:
        """Number of rows affected, or -1 if the driver did not report one."""
        ...

    async def fetchall(self) -> list[Sequence[Any]]:
        """Fetch all remaining rows as positional sequences."""
        ...

    async def close(self) -> None:
        """Release the underlying statement."""
        ...


@runtime_checkable
class Connection(Protocol):
    """A single live database connection."""

    async def execute(self, sql: str) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        ...

    async def close(self) -> None:
        """Close the connection."""
        ...

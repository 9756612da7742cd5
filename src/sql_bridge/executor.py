"""Statement execution against the managed connection.

SQL text is submitted exactly as given. There is no parameter binding, so
literal ``?`` or ``:name`` tokens reach the database untouched and callers
own injection safety.
"""

import logging

from sql_bridge.db.backend import Cursor
from sql_bridge.errors import ExecutionError, driver_message
from sql_bridge.manager import ConnectionManager
from sql_bridge.marshal import marshal
from sql_bridge.models.result import AffectedCount, ExecutionOutcome, ResultRow, RowSet

logger = logging.getLogger(__name__)


class StatementExecutor:
    """Runs SQL on the manager's connection and shapes the outcome.

    Every cursor is closed before the call returns or raises, including
    when the outcome is rejected.
    """

    def __init__(self, manager: ConnectionManager) -> None:
        """Initialize with the connection owner."""
        self.manager = manager

    async def _submit(self, sql: str) -> Cursor:
        handle = self.manager.require()
        logger.debug("Executing: %s", sql)
        try:
            return await handle.execute(sql)
        except Exception as e:
            logger.warning("Statement submission failed: %s", e)
            raise ExecutionError(driver_message(e), stage="submit") from e

    async def _drain(self, cursor: Cursor) -> list[ResultRow]:
        try:
            return await marshal(cursor)
        except Exception as e:
            logger.warning("Reading row set failed: %s", e)
            raise ExecutionError(driver_message(e), stage="drain") from e

    async def _release(self, cursor: Cursor) -> None:
        try:
            await cursor.close()
        except Exception as e:
            logger.warning("Closing cursor failed: %s", e)
            raise ExecutionError(driver_message(e), stage="drain") from e

    async def execute(self, sql: str) -> ExecutionOutcome:
        """Run any statement; return its rows or its affected-row count."""
        cursor = await self._submit(sql)
        try:
            if cursor.columns is not None:
                return RowSet(rows=await self._drain(cursor))
            return AffectedCount(count=_affected(cursor))
        finally:
            await self._release(cursor)

    async def execute_query(self, sql: str) -> list[ResultRow]:
        """Run a row-producing statement and return its rows.

        A statement that produces no row set is an ExecutionError.
        """
        cursor = await self._submit(sql)
        try:
            if cursor.columns is None:
                raise ExecutionError("Statement did not produce a row set")
            return await self._drain(cursor)
        finally:
            await self._release(cursor)

    async def execute_update(self, sql: str) -> int:
        """Run a non-row-producing statement and return the affected-row count.

        A statement that produces a row set is an ExecutionError.
        """
        cursor = await self._submit(sql)
        try:
            if cursor.columns is not None:
                raise ExecutionError("Statement produced a row set; use execute_query")
            return _affected(cursor)
        finally:
            await self._release(cursor)


def _affected(cursor: Cursor) -> int:
    """Affected-row count; statements without one (DDL) count as 0."""
    return max(cursor.rowcount, 0)

"""Host-facing façade over the connection manager and statement executor."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sql_bridge.executor import StatementExecutor
from sql_bridge.manager import ConnectionManager
from sql_bridge.models.connection import ConnectionConfig
from sql_bridge.models.result import ExecutionOutcome, ResultRow

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlBridge:
    """The five bridge operations, one at a time.

    Every operation runs under a single lock, so overlapping calls from the
    host queue up instead of interleaving on the one connection. Failures
    are raised as BridgeError subclasses; ``BridgeError.report()`` gives
    the host-facing form.
    """

    def __init__(self, manager: ConnectionManager | None = None) -> None:
        """Initialize with an optional pre-built connection manager."""
        self.manager = manager or ConnectionManager()
        self.executor = StatementExecutor(self.manager)
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        """True while a connection is open."""
        return self.manager.is_connected

    async def _serialized(self, op: Callable[..., Awaitable[T]], *args: Any) -> T:
        async with self._lock:
            return await op(*args)

    async def connect(self, config: ConnectionConfig) -> None:
        """Open the connection."""
        await self._serialized(self.manager.connect, config)

    async def execute(self, sql: str) -> ExecutionOutcome:
        """Run any statement."""
        return await self._serialized(self.executor.execute, sql)

    async def execute_query(self, sql: str) -> list[ResultRow]:
        """Run a row-producing statement."""
        return await self._serialized(self.executor.execute_query, sql)

    async def execute_update(self, sql: str) -> int:
        """Run a non-row-producing statement."""
        return await self._serialized(self.executor.execute_update, sql)

    async def close(self) -> None:
        """Close the connection."""
        await self._serialized(self.manager.close)

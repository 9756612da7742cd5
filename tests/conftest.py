"""Shared test fixtures."""

import asyncio
from types import SimpleNamespace

import pytest
import pytest_asyncio

from sql_bridge.bridge import SqlBridge
from sql_bridge.models.connection import ConnectionConfig


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """Config for a private in-memory SQLite database."""
    return ConnectionConfig(scheme="sqlite", host="localhost", username="tester", password="secret")


@pytest_asyncio.fixture
async def bridge(sqlite_config):
    """Bridge connected to an in-memory SQLite database."""
    bridge = SqlBridge()
    await bridge.connect(sqlite_config)
    yield bridge
    if bridge.is_connected:
        await bridge.close()


@pytest_asyncio.fixture
async def people(bridge):
    """Bridge with an empty ``people`` table."""
    await bridge.execute_update(
        "CREATE TABLE people ("
        " id INTEGER PRIMARY KEY,"
        " name TEXT,"
        " score REAL,"
        " avatar BLOB,"
        " born DATE)"
    )
    return bridge


class FakeCursor:
    """Cursor with canned columns and rows.

    ``fail_fetch`` makes fetchall raise, as a connection dropping mid-scan would.
    """

    def __init__(self, columns=None, records=None, rowcount=-1, fail_fetch=None):
        self._columns = columns
        self._records = records or []
        self._rowcount = rowcount
        self.fail_fetch = fail_fetch
        self.fetch_count = 0
        self.closed = False

    @property
    def columns(self):
        return self._columns

    @property
    def rowcount(self):
        return self._rowcount

    async def fetchall(self):
        self.fetch_count += 1
        if self.fail_fetch is not None:
            raise self.fail_fetch
        return list(self._records)

    async def close(self):
        self.closed = True


class FakeConnection:
    """Connection that returns a fixed cursor and records what it ran."""

    def __init__(self, cursor=None, fail_execute=None, fail_close=None, delay=0.0):
        self.cursor = cursor or FakeCursor(rowcount=0)
        self.fail_execute = fail_execute
        self.fail_close = fail_close
        self.delay = delay
        self.executed: list[str] = []
        self.closed = False
        self.active = 0
        self.max_active = 0

    async def execute(self, sql):
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            self.executed.append(sql)
            if self.fail_execute is not None:
                raise self.fail_execute
            return self.cursor
        finally:
            self.active -= 1

    async def close(self):
        if self.fail_close is not None:
            raise self.fail_close
        self.closed = True


class ToolRecorder:
    """Stands in for FastMCP so registered tool functions can be called directly."""

    def __init__(self):
        self.tools = {}

    def tool(self):
        def decorator(fn):
            self.tools[fn.__name__] = fn
            return fn

        return decorator


def tool_context(bridge):
    """Minimal Context carrying the lifespan-owned bridge."""
    return SimpleNamespace(lifespan_context={"bridge": bridge})

"""Tests for the single-connection lifecycle."""

from unittest.mock import AsyncMock, patch

import pytest

from sql_bridge.errors import (
    AlreadyConnectedError,
    CloseError,
    ConnectionFailedError,
    NotConnectedError,
)
from sql_bridge.manager import ConnectionManager
from sql_bridge.models.connection import ConnectionConfig
from tests.conftest import FakeConnection


@pytest.mark.asyncio
async def test_close_without_connect():
    manager = ConnectionManager()
    with pytest.raises(NotConnectedError):
        await manager.close()


@pytest.mark.asyncio
async def test_close_twice(sqlite_config):
    manager = ConnectionManager()
    await manager.connect(sqlite_config)
    assert manager.is_connected

    await manager.close()
    assert not manager.is_connected

    with pytest.raises(NotConnectedError):
        await manager.close()


@pytest.mark.asyncio
async def test_require_before_connect():
    with pytest.raises(NotConnectedError):
        ConnectionManager().require()


@pytest.mark.asyncio
async def test_second_connect_rejected(sqlite_config):
    manager = ConnectionManager()
    await manager.connect(sqlite_config)
    first = manager.require()
    try:
        with pytest.raises(AlreadyConnectedError, match="sqlite://localhost"):
            await manager.connect(sqlite_config)
        # The original connection is untouched and still usable
        assert manager.require() is first
        cursor = await first.execute("SELECT 1")
        assert await cursor.fetchall() == [(1,)]
    finally:
        await manager.close()


@pytest.mark.asyncio
async def test_failed_connect_leaves_no_handle():
    manager = ConnectionManager()
    config = ConnectionConfig(scheme="oracle", host="localhost", username="u", password="p")
    with pytest.raises(ConnectionFailedError):
        await manager.connect(config)
    assert not manager.is_connected
    assert manager.descriptor is None


@pytest.mark.asyncio
async def test_descriptor_and_scheme(sqlite_config):
    manager = ConnectionManager()
    await manager.connect(sqlite_config)
    try:
        assert manager.descriptor == "sqlite://localhost"
        assert manager.scheme == "sqlite"
    finally:
        await manager.close()
    assert manager.scheme is None


@pytest.mark.asyncio
async def test_close_failure_is_close_error(sqlite_config):
    fake = FakeConnection(fail_close=OSError("socket already closed"))
    manager = ConnectionManager()
    with patch("sql_bridge.manager.open_connection", AsyncMock(return_value=fake)):
        await manager.connect(sqlite_config)

    with pytest.raises(CloseError) as excinfo:
        await manager.close()
    assert excinfo.value.message == "socket already closed"
    assert excinfo.value.report().code == "500"
    assert not manager.is_connected

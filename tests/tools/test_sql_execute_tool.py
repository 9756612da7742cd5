"""Tests for the statement execution and catalog MCP tools."""

import pytest

from sql_bridge.bridge import SqlBridge
from sql_bridge.tools.sql_catalog import register_sql_catalog
from sql_bridge.tools.sql_execute import register_sql_execute
from tests.conftest import ToolRecorder, tool_context


@pytest.fixture
def tools():
    recorder = ToolRecorder()
    register_sql_execute(recorder)
    register_sql_catalog(recorder)
    return recorder.tools


@pytest.mark.asyncio
async def test_execute_row_set(tools, people):
    ctx = tool_context(people)
    await tools["sql_execute_update"](
        sql="INSERT INTO people (id, name) VALUES (1, 'Ada')", ctx=ctx
    )

    response = await tools["sql_execute"](sql="SELECT id, name FROM people", ctx=ctx)
    assert response == {
        "ok": True,
        "result": {"kind": "row_set", "rows": [{"id": 1, "name": "Ada"}]},
    }


@pytest.mark.asyncio
async def test_execute_affected_count(tools, people):
    response = await tools["sql_execute"](
        sql="INSERT INTO people (name) VALUES ('a'), ('b')", ctx=tool_context(people)
    )
    assert response == {"ok": True, "result": {"kind": "affected_count", "count": 2}}


@pytest.mark.asyncio
async def test_execute_query_rows(tools, bridge):
    response = await tools["sql_execute_query"](
        sql="SELECT 1 AS x, NULL AS y, 'hi' AS z", ctx=tool_context(bridge)
    )
    assert response == {"ok": True, "result": [{"x": 1, "y": None, "z": "hi"}]}


@pytest.mark.asyncio
async def test_execute_update_count(tools, people):
    response = await tools["sql_execute_update"](
        sql="DELETE FROM people", ctx=tool_context(people)
    )
    assert response == {"ok": True, "result": 0}


@pytest.mark.asyncio
async def test_statement_error_envelope(tools, bridge):
    response = await tools["sql_execute_query"](sql="SELECT * FROM ghost", ctx=tool_context(bridge))
    assert response["ok"] is False
    assert response["error"]["code"] == "500"
    assert response["error"]["error"] == "ExecutionError"
    assert "no such table" in response["error"]["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["sql_execute", "sql_execute_query", "sql_execute_update"])
async def test_not_connected(tools, name):
    response = await tools[name](sql="SELECT 1", ctx=tool_context(SqlBridge()))
    assert response["ok"] is False
    assert response["error"] == {
        "code": "404",
        "error": "NotConnectedError",
        "message": "No open connection",
    }


@pytest.mark.asyncio
async def test_get_row_found_and_missing(tools, people):
    ctx = tool_context(people)
    await tools["sql_execute_update"](
        sql="INSERT INTO people (id, name) VALUES (1, 'Ada')", ctx=ctx
    )

    found = await tools["sql_get_row"](table="people", keys={"id": 1}, ctx=ctx)
    assert found["result"]["name"] == "Ada"

    missing = await tools["sql_get_row"](table="people", keys={"id": 2}, ctx=ctx)
    assert missing == {"ok": True, "result": None}


@pytest.mark.asyncio
async def test_describe_table_tool(tools, people):
    response = await tools["sql_describe_table"](table="people", ctx=tool_context(people))
    assert response["result"][0]["name"] == "id"
    assert response["result"][0]["key"] == "PRI"


@pytest.mark.asyncio
async def test_use_database_tool_on_sqlite(tools, bridge):
    response = await tools["sql_use_database"](database="other", ctx=tool_context(bridge))
    assert response["error"]["error"] == "ExecutionError"

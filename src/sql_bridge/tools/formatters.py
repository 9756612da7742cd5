"""JSON envelopes for tool responses."""

from collections.abc import Awaitable, Callable
from typing import Any

from sql_bridge.errors import BridgeError
from sql_bridge.models.result import AffectedCount, ExecutionOutcome, ResultRow, row_to_plain


def format_rows(rows: list[ResultRow]) -> list[dict[str, Any]]:
    """Flatten rows to plain JSON objects."""
    return [row_to_plain(row) for row in rows]


def format_outcome(outcome: ExecutionOutcome) -> dict[str, Any]:
    """Flatten an execution outcome, keeping its kind."""
    if isinstance(outcome, AffectedCount):
        return {"kind": outcome.kind, "count": outcome.count}
    return {"kind": outcome.kind, "rows": format_rows(outcome.rows)}


def success(result: Any = None) -> dict[str, Any]:
    """Envelope for a successful operation."""
    return {"ok": True, "result": result}


def failure(error: BridgeError) -> dict[str, Any]:
    """Envelope for a failed operation."""
    return {"ok": False, "error": error.report().model_dump()}


async def respond(
    call: Awaitable[Any], render: Callable[[Any], Any] | None = None
) -> dict[str, Any]:
    """Await a bridge call and wrap the outcome in an envelope."""
    try:
        result = await call
    except BridgeError as e:
        return failure(e)
    return success(render(result) if render else result)

"""Conversion of driver rows into portable ResultRows."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sql_bridge.models.result import (
    BooleanValue,
    DoubleValue,
    IntegerValue,
    NullValue,
    ResultRow,
    ResultValue,
    StringValue,
)

if TYPE_CHECKING:
    from sql_bridge.db.backend import Cursor

logger = logging.getLogger(__name__)

# Signed 64-bit range; wider integers fall back to their string form.
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


def coerce(value: Any) -> ResultValue:
    """Convert one column value into a ResultValue.

    Priority: null, integer, boolean, floating point/decimal, text, then
    the value's ``str()`` for everything else (dates, blobs, UUIDs, ...).
    ``bool`` is matched ahead of ``int`` because Python booleans are ints;
    no value can match both in the driver's own type system.
    """
    match value:
        case None:
            return NullValue()
        case bool():
            return BooleanValue(value=value)
        case int() if _INT_MIN <= value <= _INT_MAX:
            return IntegerValue(value=value)
        case float() | Decimal():
            # Decimal precision beyond a double is lost
            return DoubleValue(value=float(value))
        case str():
            return StringValue(value=value)
        case _:
            return StringValue(value=str(value))


async def marshal(cursor: Cursor) -> list[ResultRow]:
    """Drain a cursor into a fully materialized list of ResultRows.

    Column names are read once, before any row. Either every row is
    returned or the error propagates and nothing is.
    """
    columns = cursor.columns or []
    records = await cursor.fetchall()

    rows: list[ResultRow] = []
    for record in records:
        row: ResultRow = {}
        for name, value in zip(columns, record, strict=True):
            row[name] = coerce(value)
        rows.append(row)

    logger.debug("Marshaled %d row(s) across %d column(s)", len(rows), len(columns))
    return rows

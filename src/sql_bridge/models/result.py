"""Portable result models.

Values are tagged with a ``kind`` so the host can tell ``Integer(1)`` from
``Double(1.0)`` or ``Boolean(True)`` after the result crosses a JSON
boundary.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class NullValue(BaseModel):
    """SQL NULL."""

    kind: Literal["null"] = "null"
    value: None = None


class IntegerValue(BaseModel):
    """Whole number within signed 64-bit range."""

    kind: Literal["integer"] = "integer"
    value: int


class BooleanValue(BaseModel):
    """True or false."""

    kind: Literal["boolean"] = "boolean"
    value: bool


class DoubleValue(BaseModel):
    """IEEE double."""

    kind: Literal["double"] = "double"
    value: float


class StringValue(BaseModel):
    """Text, or the string form of any other database type."""

    kind: Literal["string"] = "string"
    value: str


ResultValue = Annotated[
    NullValue | IntegerValue | BooleanValue | DoubleValue | StringValue,
    Field(discriminator="kind"),
]

# Column name → value, in column order. Duplicate column names keep the
# last value.
ResultRow = dict[str, ResultValue]


class RowSet(BaseModel):
    """Outcome of a statement that produced a row set."""

    kind: Literal["row_set"] = "row_set"
    rows: list[ResultRow] = Field(default_factory=list)


class AffectedCount(BaseModel):
    """Outcome of a statement that produced an update count."""

    kind: Literal["affected_count"] = "affected_count"
    count: int = Field(ge=0)


ExecutionOutcome = Annotated[RowSet | AffectedCount, Field(discriminator="kind")]


def row_to_plain(row: ResultRow) -> dict[str, Any]:
    """Flatten a row to plain JSON scalars."""
    return {name: value.value for name, value in row.items()}

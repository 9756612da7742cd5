"""Failure taxonomy for bridge operations.

Every error carries a numeric class code: ``404`` when there is no live
connection, ``500`` for anything the driver or the bridge itself reports.
The message is the driver's diagnostic text, unmodified.
"""

from __future__ import annotations

from typing import Literal

from sql_bridge.models.report import ErrorReport

NOT_FOUND = "404"
INTERNAL = "500"


class BridgeError(Exception):
    """Base class for failures surfaced to the host."""

    code: str = INTERNAL

    def __init__(self, message: str) -> None:
        """Initialize with a human-readable message."""
        super().__init__(message)
        self.message = message

    def report(self) -> ErrorReport:
        """Return the structured failure for the host."""
        return ErrorReport(code=self.code, error=type(self).__name__, message=self.message)


class ConnectionFailedError(BridgeError):
    """Descriptor, handshake or authentication failure during connect."""


class AlreadyConnectedError(ConnectionFailedError):
    """Connect attempted while a connection is still open."""


class NotConnectedError(BridgeError):
    """Operation attempted with no live connection."""

    code = NOT_FOUND

    def __init__(self, message: str = "No open connection") -> None:
        """Initialize with the default no-connection message."""
        super().__init__(message)


class ExecutionError(BridgeError):
    """Statement submission or result draining failed.

    ``stage`` is ``"submit"`` when the database rejected the statement and
    ``"drain"`` when reading the row set failed afterwards.
    """

    def __init__(self, message: str, *, stage: Literal["submit", "drain"] = "submit") -> None:
        """Initialize with the driver message and the failing stage."""
        super().__init__(message)
        self.stage = stage


class CloseError(BridgeError):
    """Releasing the connection failed."""


def driver_message(exc: BaseException) -> str:
    """Return the driver's diagnostic text, falling back to the exception type."""
    return str(exc) or type(exc).__name__

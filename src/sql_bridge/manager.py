"""Ownership of the single live connection."""

import logging

from sql_bridge.db.backend import Connection
from sql_bridge.db.connection import open_connection
from sql_bridge.errors import AlreadyConnectedError, CloseError, NotConnectedError, driver_message
from sql_bridge.models.connection import ConnectionConfig

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Holds at most one open connection.

    A second ``connect`` while a connection is open is rejected rather than
    silently replacing (and leaking) the first one.
    """

    def __init__(self) -> None:
        """Initialize with no connection."""
        self._handle: Connection | None = None
        self._config: ConnectionConfig | None = None

    @property
    def is_connected(self) -> bool:
        """True while a connection is open."""
        return self._handle is not None

    @property
    def descriptor(self) -> str | None:
        """Descriptor of the open connection, if any."""
        return self._config.descriptor if self._config else None

    @property
    def scheme(self) -> str | None:
        """Lower-cased scheme of the open connection, if any."""
        return self._config.scheme.lower() if self._config else None

    async def connect(self, config: ConnectionConfig) -> None:
        """Open the connection described by ``config``."""
        if self._handle is not None:
            raise AlreadyConnectedError(
                f"Already connected to {self.descriptor}; close it before connecting again"
            )
        self._handle = await open_connection(config)
        self._config = config
        logger.info("Connected to %s", config.descriptor)

    def require(self) -> Connection:
        """Return the open connection or raise NotConnectedError."""
        if self._handle is None:
            raise NotConnectedError()
        return self._handle

    async def close(self) -> None:
        """Close and forget the open connection.

        The slot is cleared even when the driver fails to close, since the
        handle is no longer usable either way.
        """
        handle = self.require()
        descriptor = self.descriptor
        self._handle = None
        self._config = None
        try:
            await handle.close()
        except Exception as e:
            logger.warning("Error closing connection to %s: %s", descriptor, e)
            raise CloseError(driver_message(e)) from e
        logger.info("Closed connection to %s", descriptor)

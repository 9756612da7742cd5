"""Descriptor building and driver dispatch."""

import logging

from sql_bridge.config import get_connect_timeout
from sql_bridge.db.backend import Connection
from sql_bridge.errors import ConnectionFailedError, driver_message
from sql_bridge.models.connection import ConnectionConfig

logger = logging.getLogger(__name__)

POSTGRES_SCHEMES = frozenset({"postgresql", "postgres"})
MYSQL_SCHEMES = frozenset({"mysql"})
SQLITE_SCHEMES = frozenset({"sqlite"})


def build_descriptor(config: ConnectionConfig) -> str:
    """Return ``scheme://host[:port][/database]`` for the config."""
    return config.descriptor


async def open_connection(config: ConnectionConfig) -> Connection:
    """Open one connection, dispatching on the descriptor scheme.

    Any driver failure (DNS, network, authentication, malformed descriptor)
    is raised as ConnectionFailedError with the driver's message.
    """
    descriptor = build_descriptor(config)
    scheme = config.scheme.lower()
    timeout = get_connect_timeout()
    logger.info("Connecting to %s as %s", descriptor, config.username)

    try:
        if scheme in POSTGRES_SCHEMES:
            from sql_bridge.db.postgres_backend import PostgresBackend

            return await PostgresBackend.create(
                descriptor, user=config.username, password=config.password, timeout=timeout
            )
        if scheme in MYSQL_SCHEMES:
            from sql_bridge.db.mysql_backend import MySQLBackend

            return await MySQLBackend.create(
                config.host,
                port=config.port,
                database=config.database,
                user=config.username,
                password=config.password,
                timeout=timeout,
            )
        if scheme in SQLITE_SCHEMES:
            from sql_bridge.db.sqlite_backend import SQLiteBackend

            # host is required but meaningless for a local file
            return await SQLiteBackend.create(config.database or ":memory:", timeout=timeout)
    except Exception as e:
        logger.warning("Connection to %s failed: %s", descriptor, e)
        raise ConnectionFailedError(driver_message(e)) from e

    raise ConnectionFailedError(f"Unsupported scheme: {config.scheme}")

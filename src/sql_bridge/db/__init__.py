"""Database driver backends."""

from sql_bridge.db.backend import Connection, Cursor
from sql_bridge.db.connection import build_descriptor, open_connection

__all__ = ["Connection", "Cursor", "build_descriptor", "open_connection"]

"""Connection configuration model."""

from urllib.parse import quote

from pydantic import BaseModel, Field

from sql_bridge.config import get_default_scheme


class ConnectionConfig(BaseModel):
    """Where and as whom to connect.

    ``port`` and ``database`` are independently optional; when absent they
    are left out of the descriptor entirely.
    """

    host: str = Field(min_length=1)
    port: int | None = Field(default=None, ge=1, le=65535)
    database: str | None = None
    username: str
    password: str = Field(repr=False)
    scheme: str = Field(default_factory=get_default_scheme, min_length=1)

    @property
    def descriptor(self) -> str:
        """Connection string of the form ``scheme://host[:port][/database]``.

        IPv6 hosts are bracketed and the database segment is percent-encoded.
        """
        host = self.host
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"
        descriptor = f"{self.scheme}://{host}"
        if self.port is not None:
            descriptor += f":{self.port}"
        if self.database is not None:
            descriptor += "/" + quote(self.database, safe="")
        return descriptor

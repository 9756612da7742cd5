"""Environment-variable-based configuration."""

import os


def get_log_level() -> str:
    """Return the logging level from SQLB_LOG_LEVEL."""
    return os.environ.get("SQLB_LOG_LEVEL", "WARNING")


def get_default_scheme() -> str:
    """Return the descriptor scheme from SQLB_DEFAULT_SCHEME."""
    return os.environ.get("SQLB_DEFAULT_SCHEME", "postgresql")


def get_connect_timeout() -> float:
    """Return the driver connect timeout in seconds from SQLB_CONNECT_TIMEOUT."""
    return float(os.environ.get("SQLB_CONNECT_TIMEOUT", "10.0"))

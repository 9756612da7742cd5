"""Tests for environment configuration."""

from unittest.mock import patch

from sql_bridge.config import get_connect_timeout, get_default_scheme, get_log_level


def test_defaults():
    with patch.dict("os.environ", {}, clear=True):
        assert get_log_level() == "WARNING"
        assert get_default_scheme() == "postgresql"
        assert get_connect_timeout() == 10.0


def test_from_env():
    with patch.dict(
        "os.environ",
        {
            "SQLB_LOG_LEVEL": "DEBUG",
            "SQLB_DEFAULT_SCHEME": "sqlite",
            "SQLB_CONNECT_TIMEOUT": "2.5",
        },
    ):
        assert get_log_level() == "DEBUG"
        assert get_default_scheme() == "sqlite"
        assert get_connect_timeout() == 2.5


def test_default_scheme_feeds_connection_config():
    """ConnectionConfig picks up the scheme at construction time."""
    from sql_bridge.models.connection import ConnectionConfig

    with patch.dict("os.environ", {"SQLB_DEFAULT_SCHEME": "sqlite"}):
        config = ConnectionConfig(host="localhost", username="u", password="p")
    assert config.scheme == "sqlite"

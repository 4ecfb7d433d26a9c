"""Shared test fixtures for the canal test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

SAMPLE_TOML = """
addr = "10.0.0.1:3306"
user = "repl"
password = "s3cret"
charset = "utf8mb4"
flavor = "mariadb"
server_id = 1234
read_timeout = "1m30s"
heartbeat_period = "5s"
max_reconnect_attempts = 3
include_table_regex = [".*\\\\.canal"]
exclude_table_regex = ["mysql\\\\..*"]
parse_time = true
semi_sync_enabled = true
discard_no_meta_row_event = true
disable_retry_sync = true
use_decimal = true

[dump]
mysqldump = "/usr/bin/mysqldump"
table_db = "app"
protocol = "tcp"
where = "'id > 10'"
tables = ["orders", "users"]
ignore_tables = ["app.audit"]
dbs = ["app", "billing"]
extra_options = ["--column-statistics=0"]
max_allowed_packet_mb = 64
discard_err = true
skip_master_data = true
"""


@pytest.fixture
def sample_toml() -> str:
    """A document that sets every decodable key."""
    return SAMPLE_TOML


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Factory fixture writing TOML text to a temporary file.

    Usage:
        def test_something(write_config):
            path = write_config("addr = '127.0.0.1:3306'")
    """

    def _write(content: str, name: str = "canal.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults around each test.

    Keeps loggers from caching a configuration set up by another test.
    """
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()

"""Canal: configuration resolution for a MySQL binlog change-capture client.

Usage:
    from canal.config import new_config_with_file

    config = new_config_with_file("canal.toml")
    if config.is_table_eligible("app", "orders"):
        ...
"""

from canal.config import (
    CanalConfig,
    DumpConfig,
    new_config,
    new_config_with_file,
    new_default_config,
)
from canal.filter import TableFilter

__all__ = [
    "CanalConfig",
    "DumpConfig",
    "TableFilter",
    "new_config",
    "new_config_with_file",
    "new_default_config",
]

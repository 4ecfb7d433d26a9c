"""Configuration loading for canal.

A configuration is built once, from a TOML file, from TOML text or from
hard-coded defaults, and then handed to the replication client.

Usage:
    from canal.config import new_config_with_file, new_default_config

    config = new_config_with_file("canal.toml")
    local = new_default_config()
"""

from canal.config.defaults import derive_server_id, new_default_config
from canal.config.errors import (
    CanalConfigError,
    ConfigDecodeError,
    ConfigIOError,
    InvalidDumpScopeError,
    InvalidTablePatternError,
)
from canal.config.loader import load_toml, new_config, new_config_with_file
from canal.config.models import CanalConfig, DumpConfig, DumpTargets

__all__ = [
    "CanalConfig",
    "CanalConfigError",
    "ConfigDecodeError",
    "ConfigIOError",
    "DumpConfig",
    "DumpTargets",
    "InvalidDumpScopeError",
    "InvalidTablePatternError",
    "derive_server_id",
    "load_toml",
    "new_config",
    "new_config_with_file",
    "new_default_config",
]

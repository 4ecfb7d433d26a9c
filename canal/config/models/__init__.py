"""Configuration model exports.

    from canal.config.models import CanalConfig, DumpConfig
"""

from canal.config.models.canal import CanalConfig, parse_duration
from canal.config.models.dump import DumpConfig, DumpTargets

__all__ = [
    "CanalConfig",
    "DumpConfig",
    "DumpTargets",
    "parse_duration",
]

"""Quick-start default configuration."""

import random
import time
from collections.abc import Callable

from canal.config.models import CanalConfig
from canal.constants import (
    DEFAULT_ADDR,
    DEFAULT_CHARSET,
    DEFAULT_DUMP_EXECUTION_PATH,
    DEFAULT_USER,
    MYSQL_FLAVOR,
    SERVER_ID_BASE,
    SERVER_ID_SPAN,
)
from canal.observability.logging import get_logger

logger = get_logger(__name__)


def derive_server_id(
    clock: Callable[[], float] = time.time,
    rng_factory: Callable[[int], random.Random] = random.Random,
) -> int:
    """Draw a server id in [1001, 2000] from an RNG seeded with the clock.

    The clock is truncated to whole seconds, so calls within the same
    second yield the same id. This only makes collisions between default
    clients less likely; set server_id explicitly when uniqueness matters.
    """
    rng = rng_factory(int(clock()))
    return SERVER_ID_BASE + rng.randrange(SERVER_ID_SPAN)


def new_default_config(
    *,
    clock: Callable[[], float] = time.time,
    rng_factory: Callable[[int], random.Random] = random.Random,
) -> CanalConfig:
    """Create a fresh configuration for a local MySQL server.

    Args:
        clock: Wall-clock source used to seed the server id RNG
        rng_factory: Builds a private RNG from the seed

    Returns:
        New CanalConfig; nothing is shared between calls
    """
    config = CanalConfig(
        addr=DEFAULT_ADDR,
        user=DEFAULT_USER,
        password="",
        charset=DEFAULT_CHARSET,
        server_id=derive_server_id(clock, rng_factory),
        flavor=MYSQL_FLAVOR,
    )
    # mysqldump is looked up on PATH when the dump runs
    config.dump.execution_path = DEFAULT_DUMP_EXECUTION_PATH
    config.dump.discard_err = True
    config.dump.skip_master_data = False

    logger.debug("default_server_id_derived", server_id=config.server_id)
    return config

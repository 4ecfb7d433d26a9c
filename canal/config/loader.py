"""TOML configuration loader.

Decoding is delegated to tomllib and key binding to the pydantic models.
Read failures surface as ConfigIOError, syntax and type failures as
ConfigDecodeError, both chained from the original exception.
"""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from canal.config.errors import ConfigDecodeError, ConfigIOError
from canal.config.models import CanalConfig
from canal.observability.logging import get_logger

logger = get_logger(__name__)


def read_config_text(path: str | Path) -> str:
    """Read a whole configuration file as UTF-8 text.

    Raises:
        ConfigIOError: If the file is missing, unreadable or not a file
        ConfigDecodeError: If the file is not valid UTF-8
    """
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except OSError as e:
        raise ConfigIOError(
            f"Cannot read configuration file {file_path}: {e}", path=file_path
        ) from e
    logger.debug("config_file_read", path=str(file_path), size=len(raw))
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ConfigDecodeError(
            f"Configuration file {file_path} is not valid UTF-8: {e}", source=str(file_path)
        ) from e


def decode_toml(data: str, source: str = "<string>") -> dict[str, Any]:
    """Decode TOML text into a plain dictionary.

    Raises:
        ConfigDecodeError: If the TOML syntax is invalid
    """
    try:
        return tomllib.loads(data)
    except tomllib.TOMLDecodeError as e:
        logger.warning("config_decode_failed", source=source, error=str(e))
        raise ConfigDecodeError(f"Malformed configuration in {source}: {e}", source=source) from e


def load_toml(path: str | Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Raises:
        ConfigIOError: If the file cannot be read
        ConfigDecodeError: If the TOML syntax is invalid
    """
    return decode_toml(read_config_text(path), source=str(path))


def _build(document: dict[str, Any], source: str) -> CanalConfig:
    try:
        config = CanalConfig.from_document(document)
    except ValidationError as e:
        logger.warning("config_decode_failed", source=source, errors=e.error_count())
        raise ConfigDecodeError(f"Invalid configuration value in {source}: {e}", source=source) from e
    logger.debug("config_decoded", source=source, addr=config.addr, flavor=config.flavor)
    return config


def new_config(data: str) -> CanalConfig:
    """Decode a TOML document into a CanalConfig.

    Unknown keys are ignored and missing keys keep their zero values.
    No semantic validation is done: an empty addr or a zero server_id
    are accepted.

    Args:
        data: TOML document text

    Returns:
        Decoded configuration

    Raises:
        ConfigDecodeError: If the document is malformed or a value cannot be
            coerced to its declared type
    """
    return _build(decode_toml(data), source="<string>")


def new_config_with_file(path: str | Path) -> CanalConfig:
    """Read a TOML file and decode it into a CanalConfig.

    Args:
        path: Path to the configuration file

    Returns:
        Decoded configuration

    Raises:
        ConfigIOError: If the file cannot be read
        ConfigDecodeError: If the file contents cannot be decoded
    """
    source = str(path)
    return _build(decode_toml(read_config_text(path), source=source), source=source)

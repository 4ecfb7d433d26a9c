"""Structured logging configuration using structlog.

Provides JSON logging for production and console logging for development,
with context binding and credential redaction.
"""

import logging
import re
import sys
from collections.abc import MutableMapping
from typing import IO, Any, cast

import structlog
from structlog.types import EventDict, FilteringBoundLogger, WrappedLogger

# Sensitive key names (O(1) lookup)
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "api_key",
    "auth",
    "authorization",
    "credential",
    "credentials",
    "private_key",
    "ssl_key",
    "tls_config",
})

# user:password@host credentials in DSN-like strings
DSN_CREDENTIALS_PATTERN = re.compile(r"(?P<user>[\w.%+-]+):(?P<password>[^@/\s]+)@")


class SecretRedactor:
    """Processor that redacts credentials from log events.

    Uses two-tier approach:
    1. Key-name lookup via frozenset for known sensitive keys
    2. DSN pattern on string values for credentials embedded in addresses
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Redact secrets from event dictionary."""
        return cast(EventDict, self._redact_dict(event_dict))

    def _redact_dict(self, data: MutableMapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in SENSITIVE_KEYS:
                result[key] = "[REDACTED]"
            elif isinstance(value, dict):
                result[key] = self._redact_dict(value)
            elif isinstance(value, str):
                result[key] = self._redact_string(value)
            elif isinstance(value, list):
                result[key] = self._redact_list(value)
            else:
                result[key] = value
        return result

    def _redact_string(self, value: str) -> str:
        return DSN_CREDENTIALS_PATTERN.sub(r"\g<user>:[REDACTED]@", value)

    def _redact_list(self, items: list[Any]) -> list[Any]:
        result: list[Any] = []
        for item in items:
            if isinstance(item, dict):
                result.append(self._redact_dict(item))
            elif isinstance(item, str):
                result.append(self._redact_string(item))
            elif isinstance(item, list):
                result.append(self._redact_list(item))
            else:
                result.append(item)
        return result


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_secrets: bool = True,
    stream: IO[str] | None = None,
) -> None:
    """Configure structured logging for config loading events.

    Every event carries the ``logger`` name bound by get_logger, e.g.
    ``canal.config.loader`` for ``config_decoded``/``config_decode_failed``.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR); unknown names mean INFO
        format: "json" for production, "console" for development
        redact_secrets: Whether to redact credentials from logs
        stream: Output stream, stderr by default
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if redact_secrets:
        processors.append(SecretRedactor())
    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    level_num = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(stream or sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a logger whose events carry ``logger=name``.

    Args:
        name: Logger name (typically __name__ of the module)
    """
    return cast(FilteringBoundLogger, structlog.get_logger(logger=name))

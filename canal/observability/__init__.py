"""Observability: structured logging for the configuration layer."""

from canal.observability.logging import SecretRedactor, get_logger, setup_logging

__all__ = ["SecretRedactor", "get_logger", "setup_logging"]

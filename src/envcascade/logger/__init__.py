"""
envcascade logger module.

Usage:
    from envcascade.logger import get_logger

    logger = get_logger("envcascade-api")
    logger.info("Service starting", service="api")

Environment Variables:
    {PREFIX}_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    {PREFIX}_LOG_JSON: Set to "true" for JSON output format

    Where {PREFIX} is derived from the logger name up to the first dash
    (e.g., ENVCASCADE for "envcascade-api").
"""

import logging
import os
from typing import Mapping, Optional

from .interface import Logger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter


def _get_env_prefix(name: str) -> str:
    """Convert a logger name to its environment variable prefix.

    Examples:
        "envcascade" -> "ENVCASCADE"
        "envcascade-worker" -> "ENVCASCADE"
    """
    return name.split("-", 1)[0].upper()


def create_logger(
    name: str = "envcascade",
    level: Optional[int] = None,
    json_format: Optional[bool] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Logger:
    """Create a logger, filling unset parameters from ``env``.

    Args:
        name: Logger name (e.g., "envcascade-api")
        level: Logging level (defaults to {PREFIX}_LOG_LEVEL or INFO)
        json_format: JSON output (defaults to {PREFIX}_LOG_JSON or False)
        env: Mapping to read settings from (default: os.environ)
    """
    env = os.environ if env is None else env
    env_prefix = _get_env_prefix(name)

    if level is None:
        level_str = env.get(f"{env_prefix}_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_str, logging.INFO)

    if json_format is None:
        json_format = env.get(f"{env_prefix}_LOG_JSON", "false").lower() == "true"

    return StructuredLogger(name=name, level=level, json_format=json_format)


def get_logger(name: str = "envcascade") -> Logger:
    """Get a logger configured from the process environment."""
    return create_logger(name=name)


__all__ = [
    "Logger",
    "StructuredLogger",
    "JsonFormatter",
    "TextFormatter",
    "create_logger",
    "get_logger",
]

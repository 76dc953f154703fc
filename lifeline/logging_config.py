"""Logging configuration using Loguru.

Provides structured logging with:
- Console output for development
- File rotation for production
- No precise location or credentials in logs
"""

import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from loguru import logger

SENSITIVE_FIELDS = {"api_key", "elevenlabs_api_key", "xi-api-key", "token", "password"}


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_file: bool = True,
) -> None:
    """Configure application logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files
        enable_file: Whether to enable file logging
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    if enable_file:
        log_path = Path(log_dir)
        log_path.mkdir(exist_ok=True)

        logger.add(
            log_path / "lifeline_{time:YYYY-MM-DD}.log",
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{name}:{function}:{line} | "
                "{message}"
            ),
            level=level,
            rotation="100 MB",
            retention="30 days",
            compression="gz",
            backtrace=True,
            diagnose=False,  # Disabled for security in files
        )

        # Error-only log for quick debugging
        logger.add(
            log_path / "errors_{time:YYYY-MM-DD}.log",
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{name}:{function}:{line} | "
                "{message}\n{exception}"
            ),
            level="ERROR",
            rotation="50 MB",
            retention="90 days",
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    logger.info(f"Logging initialized at {level} level")


def get_logger(name: str) -> "logger":
    """Get a logger instance with the given name.

    Usage:
        from lifeline.logging_config import get_logger
        logger = get_logger(__name__)
        logger.info("Message")
    """
    return logger.bind(name=name)


def mask_location(location: Mapping[str, Any] | None) -> dict[str, Any]:
    """Coarsen a location for logging: 2-decimal coordinates, no address.

    CRITICAL: Use this before logging any user location.
    """
    if not location:
        return {}
    masked: dict[str, Any] = {}
    for key in ("lat", "lng", "latitude", "longitude"):
        value = location.get(key)
        if isinstance(value, int | float):
            masked[key] = round(float(value), 2)
    return masked


def sanitize_for_log(data: Mapping[str, Any]) -> dict[str, Any]:
    """Remove or mask sensitive values from a dict before logging.

    Redacts: credential fields
    Masks: location (coarse coordinates only)
    Summarizes: binary payloads as "<N bytes>"
    """
    result: dict[str, Any] = {}

    for key, value in data.items():
        if key.lower() in SENSITIVE_FIELDS:
            result[key] = "[REDACTED]"
        elif key == "location" and isinstance(value, Mapping):
            result[key] = mask_location(value)
        elif isinstance(value, bytes | bytearray | memoryview):
            result[key] = f"<{len(value)} bytes>"
        elif isinstance(value, Mapping):
            result[key] = sanitize_for_log(value)
        else:
            result[key] = value

    return result

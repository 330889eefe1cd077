"""
Logging infrastructure for RecruitCRM search.

Uses Loguru for console and rotating file output. Pipeline modules log
diagnostics (fetch status, extracted text sizes, embedding lengths) here.
"""

import sys
from typing import Any

from loguru import logger

from src.utils.config import get_settings


SENSITIVE_KEYS = frozenset({
    "password", "passwd", "pwd", "secret", "token", "api_key",
    "apikey", "auth", "credential", "private_key", "access_token",
    "refresh_token",
})


def setup_logging() -> None:
    """
    Configure application-wide logging.

    Sets up console and file logging with formatting, rotation and
    retention taken from ``LoggingSettings``.
    """
    settings = get_settings()
    log_settings = settings.logging

    # Remove default handler
    logger.remove()

    # Security: diagnose=False outside development so stack traces do not leak values
    enable_diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>",
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=enable_diagnose,
        )

    if log_settings.file_output and settings.environment != "testing":
        log_file = log_settings.file_path
        log_file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file,
            format=log_settings.format,
            level=log_settings.level,
            rotation=log_settings.rotation,
            retention=log_settings.retention,
            compression="zip",
            backtrace=True,
            diagnose=enable_diagnose,
            enqueue=True,  # Background embedding threads log here too
        )

    logger.info(f"Logging initialized - Level: {log_settings.level}")


def get_logger(name: str) -> Any:
    """
    Get a logger instance with the specified name.

    Args:
        name: The name for the logger (typically __name__)

    Returns:
        A configured logger instance
    """
    return logger.bind(name=name)


def sanitize_for_logging(data: Any) -> Any:
    """
    Sanitize data before logging to prevent sensitive information exposure.

    Redacts passwords, tokens, API keys and other sensitive fields.
    """
    if isinstance(data, dict):
        return {
            k: "***REDACTED***"
            if any(s in str(k).lower().replace("-", "_") for s in SENSITIVE_KEYS)
            else sanitize_for_logging(v)
            for k, v in data.items()
        }
    elif isinstance(data, list):
        return [sanitize_for_logging(item) for item in data]
    return data


def snippet(text: str, length: int = 200) -> str:
    """Single-line preview of a long text for log messages."""
    return " ".join((text or "")[:length].split())


class LoggerMixin:
    """
    Mixin class to add logging capability to any class.

    Usage:
        class MyClass(LoggerMixin):
            def my_method(self):
                self.logger.info("Doing something...")
    """

    @property
    def logger(self) -> Any:
        """Get a logger instance for this class."""
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger


# Module-level logger for quick access
log = logger

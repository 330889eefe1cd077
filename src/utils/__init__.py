"""
Utility modules for RecruitCRM search.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from src.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
    SRC_DIR,
    DATA_DIR,
)
from src.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    INVALID_SIMILARITY,
    CandidateStatus,
    KeywordMatchMode,
)
from src.utils.logger import (
    setup_logging,
    get_logger,
    sanitize_for_logging,
    LoggerMixin,
    log,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    "SRC_DIR",
    "DATA_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "INVALID_SIMILARITY",
    "CandidateStatus",
    "KeywordMatchMode",
    # Logger
    "setup_logging",
    "get_logger",
    "sanitize_for_logging",
    "LoggerMixin",
    "log",
]

from __future__ import annotations

"""
Domain Constants and Enumerations.

Provides the severity scale, the configuration scope selector, and the
built-in default values used whenever no persisted or in-process override
exists.
"""

from enum import Enum
from typing import Dict, Optional

CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_FILENAME_PREFIX = "adminlog_"
DEFAULT_FILENAME_DATE_FORMAT = "%Y%m%d"
DEFAULT_MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024  # 10 MiB
DEFAULT_RETENTION_DAYS = 30

LOG_FILE_EXTENSION = ".log"
ROTATION_SUFFIX_FORMAT = "%Y%m%d_%H%M%S"

GLOBAL_CONFIG_FILENAME = "logging.json"
CALLER_CONFIG_SUBDIR = "callers"


# -----------------------------------------------------------------------------
# SEVERITY SCALE
# -----------------------------------------------------------------------------

class LogLevel(str, Enum):
    """Severity of a log record, ordered from least to most severe."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @classmethod
    def parse(cls, value: object) -> Optional["LogLevel"]:
        """
        Convert a loose user value into a LogLevel.

        Accepts enum members and case-insensitive names, including the
        'WARN' shorthand.

        Returns:
            Optional[LogLevel]: The matching level, or None if unrecognized.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().upper()
        return _LEVEL_ALIASES.get(key)


_SEVERITY: Dict[LogLevel, int] = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.SUCCESS: 25,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
    LogLevel.CRITICAL: 50,
}

_LEVEL_ALIASES: Dict[str, LogLevel] = {
    "DEBUG": LogLevel.DEBUG,
    "VERBOSE": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "INFORMATION": LogLevel.INFO,
    "SUCCESS": LogLevel.SUCCESS,
    "WARNING": LogLevel.WARNING,
    "WARN": LogLevel.WARNING,
    "ERROR": LogLevel.ERROR,
    "CRITICAL": LogLevel.CRITICAL,
    "FATAL": LogLevel.CRITICAL,
}

# Console emphasis per level, expressed as colorlog color names
LEVEL_COLORS: Dict[LogLevel, str] = {
    LogLevel.DEBUG: "thin_white",
    LogLevel.INFO: "white",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.CRITICAL: "bold_red",
}


# -----------------------------------------------------------------------------
# CONFIGURATION SCOPE
# -----------------------------------------------------------------------------

class ScopeMode(str, Enum):
    """Selects which persisted file backs the effective configuration."""

    GLOBAL = "Global"
    CALLER_SPECIFIC = "CallerSpecific"

    @classmethod
    def parse(cls, value: object) -> Optional["ScopeMode"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower().replace("-", "").replace("_", "")
        return _SCOPE_ALIASES.get(key)


_SCOPE_ALIASES: Dict[str, ScopeMode] = {
    "global": ScopeMode.GLOBAL,
    "callerspecific": ScopeMode.CALLER_SPECIFIC,
    "caller": ScopeMode.CALLER_SPECIFIC,
}

from __future__ import annotations

"""
Diagnostics Configuration Models.

Defines the data structures used to initialize the internal diagnostics
channel: the stdlib logger tree under 'adminlog' through which the library
reports its own degraded paths (bad config files, failed writes).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DIAGNOSTICS_LOGGER_NAME = "adminlog"


@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    Immutable specification for the diagnostics channel.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable stderr stream output.
        log_file: Optional absolute path for persistent diagnostics.
        max_bytes: Maximum size per diagnostics segment before rotation.
        backup_count: Number of historical segments to preserve.
        fmt: Structural format for every diagnostics entry.
        datefmt: Chronological format for timestamp generation.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024  # Default: 1MB
    backup_count: int = 2

    fmt: str = "adminlog %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

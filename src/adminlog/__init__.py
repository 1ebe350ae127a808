from __future__ import annotations

from .api import (
    get_log_configuration,
    get_logger,
    reset_log_configuration,
    save_log_configuration,
    set_log_configuration,
    write_log,
)
from .core.context import LoggerContext, init_logging
from .core.logger import Logger
from .domain.config import LogConfiguration
from .domain.constants import LogLevel, ScopeMode

__version__ = "1.0.0"

__all__ = [
    "LogConfiguration",
    "LogLevel",
    "Logger",
    "LoggerContext",
    "ScopeMode",
    "get_log_configuration",
    "get_logger",
    "init_logging",
    "reset_log_configuration",
    "save_log_configuration",
    "set_log_configuration",
    "write_log",
]

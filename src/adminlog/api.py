from __future__ import annotations

"""
Module-Level Logging API.

Thin functions over the process-wide context, mirroring the cmdlets the
sysadmin scripts were written against (Write-Log, Get/Set/Save/Reset
configuration). Scripts that need more control build their own
LoggerContext and Logger instead.
"""

import threading
from typing import Any, Optional

from adminlog.core.context import get_context
from adminlog.core.logger import LevelLike, Logger
from adminlog.domain.config import LogConfiguration

_logger: Optional[Logger] = None
_logger_lock = threading.Lock()


def get_logger() -> Logger:
    """Return the façade bound to the process-wide context."""
    global _logger
    with _logger_lock:
        context = get_context()
        if _logger is None or _logger.context is not context:
            _logger = Logger(context)
        return _logger


def write_log(
        message: Any,
        level: LevelLike = None,
        *,
        log_path: Optional[str] = None,
        context: Any = None,
        console: Optional[bool] = None,
        file: Optional[bool] = None,
) -> None:
    """Emit one record through the process-wide logger. Never raises."""
    get_logger().log(
        message,
        level,
        log_path=log_path,
        context=context,
        console=console,
        file=file,
    )


def get_log_configuration() -> LogConfiguration:
    return get_context().store.resolve()


def set_log_configuration(*, save: bool = False, **overrides: Any) -> LogConfiguration:
    """
    Change a subset of configuration fields for the rest of the process.

    Args:
        save: Also persist the result to the current scope file.
        **overrides: LogConfiguration field values; None means unchanged.

    Returns:
        LogConfiguration: The new effective configuration.

    Raises:
        ValueError: If an override names an unknown field.
    """
    store = get_context().store
    cfg = store.apply(**overrides)
    if save:
        store.persist(cfg)
    return cfg


def save_log_configuration() -> bool:
    """Persist the effective configuration; False if the save failed."""
    return get_context().store.persist()


def reset_log_configuration(*, save: bool = False) -> LogConfiguration:
    """Restore built-in defaults, optionally persisting them."""
    store = get_context().store
    cfg = store.reset()
    if save:
        store.persist(cfg)
    return cfg

from __future__ import annotations

"""
Diagnostics Core Orchestrator.

Maintains the idempotent lifecycle of the diagnostics channel and exposes
`report`, the guarded emitter used at the boundary of every internal
operation. Until `configure_diagnostics` runs, records propagate to the host
application's logging setup (or Python's last-resort stderr handler).
"""

import logging
from typing import List

from adminlog.infra.logging.config import (
    _LEVEL_MAP,
    DIAGNOSTICS_LOGGER_NAME,
    DiagnosticsConfig,
)
from adminlog.infra.logging.handlers import (
    _create_rotating_file_handler,
    _create_stream_handler,
    _is_our_handler,
)

# Internal state flag for idempotency
_CONFIGURED_FLAG_ATTR: str = "_adminlog_configured"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_diagnostics(cfg: DiagnosticsConfig, *, force: bool = False) -> logging.Logger:
    """
    Execute idempotent configuration of the 'adminlog' diagnostics logger.

    Once configured, the package logger stops propagating to the root so
    diagnostics are not duplicated by the host's handlers.

    Args:
        cfg: Structural configuration for the diagnostics channel.
        force: If True, bypass idempotency checks and re-initialize handlers.

    Returns:
        logging.Logger: The package logger.
    """
    pkg_logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)

    try:
        already_configured = bool(getattr(pkg_logger, _CONFIGURED_FLAG_ATTR, False))
        if already_configured and not force:
            return pkg_logger

        level_int = _parse_level(cfg.level)
        pkg_logger.setLevel(level_int)
        _remove_our_handlers(pkg_logger)

        formatter = logging.Formatter(cfg.fmt, datefmt=cfg.datefmt)
        handlers_list: List[logging.Handler] = []

        if cfg.console:
            handlers_list.append(_create_stream_handler(level_int, formatter))

        if cfg.log_file:
            fh = _create_rotating_file_handler(
                cfg.log_file,
                level_int,
                formatter,
                cfg.max_bytes,
                cfg.backup_count,
            )
            if fh:
                handlers_list.append(fh)

        for h in handlers_list:
            pkg_logger.addHandler(h)

        pkg_logger.propagate = not handlers_list
        setattr(pkg_logger, _CONFIGURED_FLAG_ATTR, True)
        return pkg_logger

    # Fallback to emergency console diagnostics if the setup itself fails
    except Exception:
        try:
            _remove_our_handlers(pkg_logger)
            sh = _create_stream_handler(
                logging.WARNING,
                logging.Formatter("adminlog FALLBACK | %(levelname)s | %(message)s"),
            )
            pkg_logger.addHandler(sh)
            pkg_logger.propagate = False
            pkg_logger.warning("Diagnostics setup failed. Switched to emergency console.")
        except Exception:
            pass
        return pkg_logger


def reset_diagnostics() -> None:
    """Detach our handlers and restore propagation to the host's logging."""
    pkg_logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    _remove_our_handlers(pkg_logger)
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)
    if hasattr(pkg_logger, _CONFIGURED_FLAG_ATTR):
        delattr(pkg_logger, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger instance under the diagnostics tree.

    Args:
        name: Hierarchical name for the logger (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)


def report(logger: logging.Logger, level: int, message: str) -> None:
    """
    Emit one diagnostic without ever raising.

    Used where a failure has already been downgraded: if even the
    diagnostics channel is unusable the record is dropped.
    """
    try:
        logger.log(level, message)
    except Exception:
        pass


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(target: logging.Logger) -> None:
    """Identify and detach all internally-managed handlers."""
    for h in list(target.handlers):
        if _is_our_handler(h):
            target.removeHandler(h)
            try:
                h.close()
            except Exception:
                pass

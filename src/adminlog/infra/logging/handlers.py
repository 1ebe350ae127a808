from __future__ import annotations

"""
Diagnostics Handler Factories.

Handlers built here are tagged so `configure_diagnostics` can later remove
exactly what it installed and leave the host script's own handlers alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from adminlog.infra.fs import safe_mkdir

_HANDLER_TAG_ATTR: str = "_adminlog_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _finish(handler: logging.Handler, level_int: int, formatter: logging.Formatter) -> logging.Handler:
    """Apply level and format, then tag the handler as ours."""
    handler.setLevel(level_int)
    handler.setFormatter(formatter)
    _tag_handler(handler)
    return handler


def _create_stream_handler(level_int: int, formatter: logging.Formatter) -> logging.Handler:
    """Diagnostics go to stderr so they never mix with records on stdout."""
    return _finish(logging.StreamHandler(sys.stderr), level_int, formatter)


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[logging.Handler]:
    """
    Build the optional persistent diagnostics file.

    Args:
        log_file: Target path for the diagnostics file.
        level_int: Numeric logging level.
        formatter: Shared diagnostics formatter.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of rolled-over files to keep.

    Returns:
        Optional[logging.Handler]: The handler, or None when the file cannot
                                   be opened (a notice goes to stderr).
    """
    ok, err = safe_mkdir(os.path.dirname(os.path.abspath(log_file)))
    if not ok:
        sys.stderr.write(f"WARNING: adminlog diagnostics file disabled ({log_file}): {err}\n")
        return None
    try:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: adminlog diagnostics file disabled ({log_file}): {e}\n")
        return None
    return _finish(handler, level_int, formatter)

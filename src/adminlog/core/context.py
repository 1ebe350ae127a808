from __future__ import annotations

"""
Logger Context.

Holds the per-process identity of the logging script and the configuration
store. The identity is supplied by the host at initialization; when it is
not, the name of the running program is used once and never recomputed.
"""

import os
import sys
import threading
from typing import Optional

from adminlog.core.config_store import ConfigStore
from adminlog.domain.config import LogConfiguration
from adminlog.domain.constants import ScopeMode

_default_context: Optional["LoggerContext"] = None
_context_lock = threading.Lock()


def default_caller_name() -> str:
    """Name of the running program, e.g. 'Update-Users' for Update-Users.py."""
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else ""
    stem = os.path.splitext(os.path.basename(argv0))[0]
    return stem or "python"


class LoggerContext:
    """
    Process-wide state shared by every Logger of one script.

    Attributes:
        caller_name: Identity written into each line and used for
                     caller-specific configuration files.
        store: The ConfigStore owning the effective configuration.
    """

    def __init__(
            self,
            caller_name: Optional[str] = None,
            scope_mode: ScopeMode = ScopeMode.GLOBAL,
            config_dir: Optional[str] = None,
    ) -> None:
        self.caller_name = (caller_name or "").strip() or default_caller_name()
        self.store = ConfigStore(self.caller_name, scope_mode, config_dir)

    @property
    def config(self) -> LogConfiguration:
        return self.store.resolve()

    def __repr__(self) -> str:
        return f"LoggerContext(caller_name={self.caller_name!r}, scope_mode={self.store.scope_mode.value!r})"


def init_logging(
        caller_name: Optional[str] = None,
        scope_mode: ScopeMode = ScopeMode.GLOBAL,
        config_dir: Optional[str] = None,
        *,
        force: bool = False,
) -> LoggerContext:
    """
    Create the process-wide context.

    Idempotent: a second call returns the existing context unless `force`
    is set.
    """
    global _default_context
    with _context_lock:
        if _default_context is None or force:
            _default_context = LoggerContext(caller_name, scope_mode, config_dir)
        return _default_context


def get_context() -> LoggerContext:
    """Return the process-wide context, creating it with defaults on first use."""
    global _default_context
    with _context_lock:
        if _default_context is None:
            _default_context = LoggerContext()
        return _default_context


def clear_context() -> None:
    """Forget the process-wide context (used by test harnesses)."""
    global _default_context
    with _context_lock:
        _default_context = None

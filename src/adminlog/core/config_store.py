from __future__ import annotations

"""
Configuration Store.

Produces the single effective configuration for the current process from
its precedence layers (built-in defaults, the persisted scope file,
in-process overrides) and persists it on request. Persisted state is read
once per process and cached; every mutation of the cache goes through a
lock.

Concurrent processes saving the same scope race on a whole-file replace:
the last writer wins and the file always holds one complete document.
"""

import json
import logging
import os
import threading
from dataclasses import replace
from typing import Any, Dict, Optional

from adminlog.domain.config import LogConfiguration, apply_overrides, validate_config
from adminlog.domain.constants import (
    CALLER_CONFIG_SUBDIR,
    CURRENT_CONFIG_VERSION,
    GLOBAL_CONFIG_FILENAME,
    ScopeMode,
)
from adminlog.domain.errors import ConfigLoadError, ConfigSaveError
from adminlog.domain.migrations import run_migrations
from adminlog.infra.fs import atomic_write_text, caller_slug, get_default_config_dir
from adminlog.infra.logging import report

logger = logging.getLogger(__name__)


def scope_path(scope_mode: ScopeMode, caller_name: str, config_dir: Optional[str] = None) -> str:
    """
    Map a scope to the file that persists it.

    Global scope maps to one fixed file; caller-specific scope maps to a file
    keyed by the caller's slug, so two callers never share a file and one
    caller always lands on the same one.

    Args:
        scope_mode: Global or caller-specific.
        caller_name: Identity of the script using the logger.
        config_dir: Root of the config files (defaults to the user data dir).

    Returns:
        str: Absolute path of the scope file.
    """
    base = os.path.abspath(config_dir or get_default_config_dir())
    if scope_mode == ScopeMode.CALLER_SPECIFIC:
        return os.path.join(base, CALLER_CONFIG_SUBDIR, f"{caller_slug(caller_name)}.json")
    return os.path.join(base, GLOBAL_CONFIG_FILENAME)


class ConfigStore:
    """Lazily loaded, lock-guarded holder of the effective configuration."""

    def __init__(
            self,
            caller_name: str,
            scope_mode: ScopeMode = ScopeMode.GLOBAL,
            config_dir: Optional[str] = None,
    ) -> None:
        self.caller_name = caller_name
        self.scope_mode = scope_mode
        self.config_dir = config_dir
        self._config: Optional[LogConfiguration] = None
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    @property
    def path(self) -> str:
        """File backing the currently selected scope."""
        return scope_path(self.scope_mode, self.caller_name, self.config_dir)

    def scope_path(self, scope_mode: ScopeMode, caller_name: Optional[str] = None) -> str:
        return scope_path(scope_mode, caller_name or self.caller_name, self.config_dir)

    def resolve(self) -> LogConfiguration:
        """
        Return the effective configuration, loading it on first use.

        A missing file yields defaults silently; an unreadable or malformed
        one yields defaults plus a warning diagnostic. Never raises.
        """
        with self._lock:
            if self._config is None:
                self._config = self._load()
            return self._config

    def apply(self, **overrides: Any) -> LogConfiguration:
        """
        Merge the supplied fields over the effective configuration.

        Fields not named (or given as None) keep their current value. The
        result stays effective for the remainder of the process; selecting a
        different scope_mode switches the file used by later saves.

        Raises:
            ValueError: If an override names an unknown field.
        """
        with self._lock:
            current = self.resolve()
            updated, warnings = apply_overrides(current, overrides)
            for w in warnings:
                report(logger, logging.WARNING, f"Configuration constraint: {w}")
            self._config = updated
            self.scope_mode = updated.scope_mode
            return updated

    def persist(self, cfg: Optional[LogConfiguration] = None) -> bool:
        """
        Save a configuration to its scope file, replacing it wholesale.

        Args:
            cfg: Configuration to save; the effective one if omitted.

        Returns:
            bool: True if the file was written, False if saving failed (the
                  failure is reported as a diagnostic).
        """
        cfg = cfg if cfg is not None else self.resolve()
        target = scope_path(cfg.scope_mode, self.caller_name, self.config_dir)
        try:
            self._write(target, cfg)
        except ConfigSaveError as e:
            report(logger, logging.WARNING, f"Configuration not saved: {e}")
            return False
        logger.debug(f"Configuration saved to {target}")
        return True

    def reload(self) -> LogConfiguration:
        """Drop the cached value and read the scope file again."""
        with self._lock:
            self._config = None
            return self.resolve()

    def reset(self) -> LogConfiguration:
        """Make the built-in defaults effective, keeping the selected scope."""
        with self._lock:
            self._config = LogConfiguration(scope_mode=self.scope_mode)
            return self._config

    # -------------------------------------------------------------------------
    # Persistence helpers
    # -------------------------------------------------------------------------

    def _load(self) -> LogConfiguration:
        defaults = LogConfiguration(scope_mode=self.scope_mode)
        path = self.path

        if not os.path.exists(path):
            logger.debug(f"Config file not found at {path}. Using defaults.")
            return defaults

        try:
            data = self._read(path)
        except ConfigLoadError as e:
            report(logger, logging.WARNING, f"{e} Using defaults.")
            return defaults

        cfg, warnings = validate_config(run_migrations(data), defaults)
        for w in warnings:
            report(logger, logging.WARNING, f"Config file {path}: {w}")

        # A scope file always describes the scope it was read from
        return replace(cfg, scope_mode=self.scope_mode)

    @staticmethod
    def _read(path: str) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise ConfigLoadError(f"Unreadable config file '{path}': {e}.", path) from e

        if not isinstance(data, dict):
            raise ConfigLoadError(f"Corrupted config file '{path}': expected a JSON object.", path)
        return data

    @staticmethod
    def _write(path: str, cfg: LogConfiguration) -> None:
        payload = {"version": CURRENT_CONFIG_VERSION}
        payload.update(cfg.to_dict())
        try:
            atomic_write_text(path, json.dumps(payload, ensure_ascii=False, indent=4))
        except OSError as e:
            raise ConfigSaveError(f"Cannot write '{path}': {e}", path) from e

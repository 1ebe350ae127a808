from __future__ import annotations

import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Keys written by earlier script generations, mapped to canonical field names
_LEGACY_KEYS: Dict[str, str] = {
    "DefaultLogPath": "default_directory",
    "LogDirectory": "default_directory",
    "LogPath": "default_directory",
    "defaultDirectory": "default_directory",
    "LogLevel": "default_level",
    "DefaultLevel": "default_level",
    "defaultLevel": "default_level",
    "EnableConsole": "console_enabled",
    "ConsoleOutput": "console_enabled",
    "consoleEnabled": "console_enabled",
    "EnableFile": "file_enabled",
    "FileOutput": "file_enabled",
    "fileEnabled": "file_enabled",
    "DateFormat": "timestamp_format",
    "timestampFormat": "timestamp_format",
    "FilePrefix": "filename_prefix",
    "filenamePrefix": "filename_prefix",
    "filenameDateFormat": "filename_date_format",
    "maxFileSizeBytes": "max_file_size_bytes",
    "RetentionDays": "retention_days",
    "LogRetentionDays": "retention_days",
    "retentionDays": "retention_days",
    "Scope": "scope_mode",
    "scopeMode": "scope_mode",
}

_LEGACY_MB_KEYS = ("MaxFileSizeMB", "MaxLogSizeMB")


def run_migrations(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a raw persisted document to the canonical key set.

    Canonical keys always win over their legacy aliases. Sizes stored in
    megabytes are converted to bytes.

    Args:
        data: The raw dictionary loaded from a scope file.

    Returns:
        Dict[str, Any]: A new dictionary keyed by canonical field names.
    """
    out: Dict[str, Any] = {}
    for key, value in data.items():
        canonical = _LEGACY_KEYS.get(key)
        if canonical is None:
            continue
        if canonical not in data and canonical not in out:
            logger.debug(f"Migrations: legacy key '{key}' -> '{canonical}'")
            out[canonical] = value

    if "max_file_size_bytes" not in data and "max_file_size_bytes" not in out:
        for key in _LEGACY_MB_KEYS:
            if key in data:
                out["max_file_size_bytes"] = _mb_to_bytes(data[key])
                logger.debug(f"Migrations: legacy key '{key}' -> 'max_file_size_bytes'")
                break

    for key, value in data.items():
        if key not in _LEGACY_KEYS and key not in _LEGACY_MB_KEYS:
            out[key] = value

    return out


def _mb_to_bytes(value: Any) -> Any:
    """Convert a megabyte count to bytes, leaving non-numbers for the validator."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    return int(value * 1024 * 1024)

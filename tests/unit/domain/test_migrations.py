from __future__ import annotations

"""
Unit tests for legacy configuration key migration.
"""

from adminlog.domain.config import validate_config
from adminlog.domain.constants import LogLevel, ScopeMode
from adminlog.domain.migrations import run_migrations


def test_legacy_powershell_keys_are_renamed():
    legacy = {
        "DefaultLogPath": "/var/log/scripts",
        "LogLevel": "Warning",
        "EnableConsole": False,
        "RetentionDays": 14,
        "Scope": "CallerSpecific",
    }
    migrated = run_migrations(legacy)

    assert migrated == {
        "default_directory": "/var/log/scripts",
        "default_level": "Warning",
        "console_enabled": False,
        "retention_days": 14,
        "scope_mode": "CallerSpecific",
    }


def test_camel_case_keys_are_renamed():
    migrated = run_migrations({"maxFileSizeBytes": 4096, "filenamePrefix": "ps_"})
    assert migrated == {"max_file_size_bytes": 4096, "filename_prefix": "ps_"}


def test_megabyte_sizes_are_converted():
    migrated = run_migrations({"MaxFileSizeMB": 5})
    assert migrated["max_file_size_bytes"] == 5 * 1024 * 1024


def test_canonical_key_wins_over_alias():
    migrated = run_migrations({"retention_days": 3, "RetentionDays": 90, "MaxLogSizeMB": 1,
                               "max_file_size_bytes": 10})
    assert migrated["retention_days"] == 3
    assert migrated["max_file_size_bytes"] == 10


def test_migrated_document_validates():
    cfg, warnings = validate_config(run_migrations({"LogLevel": "Error", "Scope": "Global"}))

    assert cfg.default_level is LogLevel.ERROR
    assert cfg.scope_mode is ScopeMode.GLOBAL
    assert warnings == []

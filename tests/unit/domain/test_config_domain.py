from __future__ import annotations

"""
Unit tests for the Configuration Domain.

Verifies:
1. Default configuration values and serialization.
2. Type coercion and clamping of invalid values.
3. Field-by-field precedence of successive overrides.
"""

import os

import pytest

from adminlog.domain.config import (
    FIELD_NAMES,
    LogConfiguration,
    apply_overrides,
    validate_config,
)
from adminlog.domain.constants import LogLevel, ScopeMode


def test_defaults_live_under_user_data_dir(isolated_home):
    """The default log directory is derived from the (patched) data dir."""
    cfg = LogConfiguration()

    assert cfg.default_directory == os.path.join(str(isolated_home), "logs")
    assert cfg.default_level is LogLevel.INFO
    assert cfg.console_enabled is True
    assert cfg.file_enabled is True
    assert cfg.max_file_size_bytes > 0
    assert cfg.retention_days >= 0
    assert cfg.scope_mode is ScopeMode.GLOBAL


def test_to_dict_is_json_ready():
    """Enums are serialized as their plain values."""
    data = LogConfiguration().to_dict()

    assert set(data) == set(FIELD_NAMES)
    assert data["default_level"] == "INFO"
    assert data["scope_mode"] == "Global"


def test_validate_missing_keys_take_base_values():
    base = LogConfiguration(retention_days=7)
    cfg, warnings = validate_config({"console_enabled": False}, base)

    assert cfg.console_enabled is False
    assert cfg.retention_days == 7
    assert warnings == []


def test_validate_non_dict_returns_base():
    base = LogConfiguration()
    cfg, warnings = validate_config(["not", "a", "dict"], base)

    assert cfg == base
    assert len(warnings) == 1


@pytest.mark.parametrize("field, raw, expected", [
    ("max_file_size_bytes", -5, 1),
    ("max_file_size_bytes", 0, 1),
    ("retention_days", -3, 0),
])
def test_validate_clamps_out_of_range_numbers(field, raw, expected):
    """Negative or zero values are clamped to the nearest valid value."""
    cfg, warnings = validate_config({field: raw})

    assert getattr(cfg, field) == expected
    assert any("clamped" in w for w in warnings)


def test_validate_coerces_loose_types():
    cfg, warnings = validate_config({
        "default_level": "warn",
        "console_enabled": "no",
        "file_enabled": 1,
        "max_file_size_bytes": "2048",
        "scope_mode": "CallerSpecific",
    })

    assert cfg.default_level is LogLevel.WARNING
    assert cfg.console_enabled is False
    assert cfg.file_enabled is True
    assert cfg.max_file_size_bytes == 2048
    assert cfg.scope_mode is ScopeMode.CALLER_SPECIFIC
    assert warnings == []


def test_validate_rejects_garbage_with_fallback():
    base = LogConfiguration()
    cfg, warnings = validate_config({
        "default_level": "LOUD",
        "retention_days": "many",
        "console_enabled": "maybe",
        "max_file_size_bytes": True,
    }, base)

    assert cfg.default_level is base.default_level
    assert cfg.retention_days == base.retention_days
    assert cfg.console_enabled is base.console_enabled
    assert cfg.max_file_size_bytes == base.max_file_size_bytes
    assert len(warnings) == 4


def test_validate_ignores_unknown_keys_and_version():
    cfg, warnings = validate_config({"version": "1.0.0", "colour": "blue"})

    assert cfg == LogConfiguration(default_directory=cfg.default_directory)
    assert warnings == ["Unknown field 'colour' ignored."]


def test_empty_prefix_is_allowed():
    cfg, _ = validate_config({"filename_prefix": ""})
    assert cfg.filename_prefix == ""


def test_directory_is_normalized(tmp_path):
    raw = str(tmp_path / "a" / ".." / "logs")
    cfg, _ = validate_config({"default_directory": raw})
    assert cfg.default_directory == str(tmp_path / "logs")


def test_apply_overrides_unknown_field_raises():
    with pytest.raises(ValueError, match="colour"):
        apply_overrides(LogConfiguration(), {"colour": "blue"})


def test_apply_overrides_none_means_unchanged():
    base = LogConfiguration(retention_days=9)
    cfg, _ = apply_overrides(base, {"retention_days": None, "file_enabled": False})

    assert cfg.retention_days == 9
    assert cfg.file_enabled is False


def test_overrides_precedence_last_write_per_field_wins():
    """Successive disjoint overrides compose field by field over defaults."""
    defaults = LogConfiguration()
    steps = [
        {"default_level": LogLevel.WARNING},
        {"max_file_size_bytes": 1024},
        {"retention_days": 3, "console_enabled": False},
        {"default_level": LogLevel.ERROR},
    ]

    cfg = defaults
    for step in steps:
        cfg, _ = apply_overrides(cfg, step)

    assert cfg.default_level is LogLevel.ERROR
    assert cfg.max_file_size_bytes == 1024
    assert cfg.retention_days == 3
    assert cfg.console_enabled is False
    assert cfg.file_enabled == defaults.file_enabled
    assert cfg.timestamp_format == defaults.timestamp_format
    assert cfg.default_directory == defaults.default_directory


def test_format_strings_are_kept_verbatim():
    cfg, warnings = apply_overrides(LogConfiguration(), {
        "timestamp_format": " %H:%M:%S ",
        "filename_date_format": "%Y-%m-%d ",
        "filename_prefix": " ps_",
    })

    assert warnings == []
    assert cfg.timestamp_format == " %H:%M:%S "
    assert cfg.filename_date_format == "%Y-%m-%d "
    assert cfg.filename_prefix == " ps_"


def test_blank_directory_keeps_fallback(tmp_path):
    base = LogConfiguration(default_directory=str(tmp_path))
    cfg, _ = apply_overrides(base, {"default_directory": "   "})

    assert cfg.default_directory == str(tmp_path)

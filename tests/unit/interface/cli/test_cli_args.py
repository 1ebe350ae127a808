from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Subcommand routing attributes.
2. Mapping of 'config set' flags to configuration overrides.
3. Tri-state boolean flags (unset / --x / --no-x).
"""

import pytest

from adminlog.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_write_arguments():
    args = parse_args(["--caller", "Bulk", "write", "hello", "-l", "WARNING", "--context", "row 3", "--no-console"])

    assert args.command == "write"
    assert args.caller_name == "Bulk"
    assert args.message == "hello"
    assert args.level == "warning"
    assert args.context == "row 3"
    assert args.console is False
    assert args.file is None


def test_config_set_maps_only_given_flags():
    args = parse_args(["config", "set", "--level", "error", "--max-size", "2048", "--no-file"])

    assert args_to_overrides(args) == {
        "default_level": "error",
        "max_file_size_bytes": 2048,
        "file_enabled": False,
    }


def test_config_set_full_mapping():
    args = parse_args([
        "config", "set",
        "--directory", "/var/log/x",
        "--console",
        "--timestamp-format", "%H:%M",
        "--prefix", "ps_",
        "--date-format", "%Y-%m-%d",
        "--retention-days", "0",
        "--scope-mode", "caller",
        "--save",
    ])
    overrides = args_to_overrides(args)

    assert overrides["default_directory"] == "/var/log/x"
    assert overrides["console_enabled"] is True
    assert overrides["timestamp_format"] == "%H:%M"
    assert overrides["filename_prefix"] == "ps_"
    assert overrides["filename_date_format"] == "%Y-%m-%d"
    assert overrides["retention_days"] == 0
    assert overrides["scope_mode"] == "caller"
    assert args.save is True


def test_config_set_without_flags_is_empty():
    assert args_to_overrides(parse_args(["config", "set"])) == {}


def test_invalid_level_is_rejected():
    with pytest.raises(SystemExit):
        parse_args(["write", "x", "--level", "loud"])


def test_command_is_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_diagnostics_file_option():
    assert parse_args(["tail"]).diagnostics_file is None
    assert parse_args(["--diagnostics-file", "/tmp/d.log", "tail"]).diagnostics_file == "/tmp/d.log"

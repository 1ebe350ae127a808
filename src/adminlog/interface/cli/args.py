from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and the logic translating raw
argparse namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict

from adminlog.domain.constants import LogLevel

LEVEL_CHOICES = [lvl.value.lower() for lvl in LogLevel]
SCOPE_CHOICES = ["global", "caller"]

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the adminlog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="adminlog",
        description="Local file and console logging for sysadmin scripts.",
    )

    # --- Context selection ---
    p.add_argument(
        "--caller",
        dest="caller_name",
        default=None,
        help="Name recorded as the logging script (default: 'adminlog').",
    )
    p.add_argument(
        "--scope",
        choices=SCOPE_CHOICES,
        default="global",
        help="Configuration file to use: shared global or caller-specific.",
    )
    p.add_argument(
        "--config-dir",
        dest="config_dir",
        default=None,
        help="Directory holding persisted configuration files.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate diagnostics verbosity to DEBUG.",
    )
    p.add_argument(
        "--diagnostics-file",
        dest="diagnostics_file",
        default=None,
        help="Also keep internal diagnostics in this rotating file.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- write ---
    w = sub.add_parser("write", help="Emit one log record.")
    w.add_argument("message", help="Text of the record.")
    w.add_argument("-l", "--level", choices=LEVEL_CHOICES, type=str.lower, default=None)
    w.add_argument("--context", default=None, help="Extra detail appended to the line.")
    w.add_argument("--log-path", dest="log_path", default=None, help="Directory for this record.")
    w.add_argument(
        "--console",
        dest="console",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force console output on or off.",
    )
    w.add_argument(
        "--file",
        dest="file",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force file output on or off.",
    )

    # --- config ---
    c = sub.add_parser("config", help="Inspect or change the configuration.")
    csub = c.add_subparsers(dest="config_command", metavar="ACTION")
    csub.required = True

    show = csub.add_parser("show", help="Print the effective configuration.")
    show.add_argument("--json", dest="json_output", action="store_true")

    csub.add_parser("path", help="Print the file backing the selected scope.")

    s = csub.add_parser("set", help="Change configuration fields.")
    s.add_argument("--directory", dest="default_directory", default=None)
    s.add_argument("--level", dest="default_level", choices=LEVEL_CHOICES, type=str.lower, default=None)
    s.add_argument(
        "--console",
        dest="console_enabled",
        action=argparse.BooleanOptionalAction,
        default=None,
    )
    s.add_argument(
        "--file",
        dest="file_enabled",
        action=argparse.BooleanOptionalAction,
        default=None,
    )
    s.add_argument("--timestamp-format", dest="timestamp_format", default=None)
    s.add_argument("--prefix", dest="filename_prefix", default=None)
    s.add_argument("--date-format", dest="filename_date_format", default=None)
    s.add_argument("--max-size", dest="max_file_size_bytes", type=int, default=None)
    s.add_argument("--retention-days", dest="retention_days", type=int, default=None)
    s.add_argument("--scope-mode", dest="scope_mode", choices=SCOPE_CHOICES, default=None)
    s.add_argument("--save", action="store_true", help="Persist the result.")

    r = csub.add_parser("reset", help="Restore built-in defaults.")
    r.add_argument("--save", action="store_true", help="Persist the defaults.")

    # --- tail ---
    t = sub.add_parser("tail", help="Print the end of today's log file.")
    t.add_argument("-n", "--lines", dest="n_lines", type=int, default=20)
    t.add_argument("--log-path", dest="log_path", default=None)

    # --- pick ---
    k = sub.add_parser("pick", help="Open a native path picker and print the choice.")
    k.add_argument("mode", choices=["open", "save", "folder"])
    k.add_argument("--title", default="Select a path")
    k.add_argument("--filter", dest="file_filter", default=None)
    k.add_argument("--initial-dir", dest="initial_directory", default=None)

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate a 'config set' namespace into configuration overrides.

    Options that were not given are omitted so they leave the current value
    untouched.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    keys = [
        "default_directory", "default_level", "console_enabled", "file_enabled",
        "timestamp_format", "filename_prefix", "filename_date_format",
        "max_file_size_bytes", "retention_days", "scope_mode",
    ]
    overrides: Dict[str, Any] = {}
    for k in keys:
        value = getattr(args, k, None)
        if value is not None:
            overrides[k] = value
    return overrides

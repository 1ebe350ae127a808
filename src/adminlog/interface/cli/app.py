from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Lets shell scripts and operators use the logging core without writing
Python: emit records, inspect and change the persisted configuration, read
the tail of today's file, and open the native path picker.
"""

import json
import sys
from typing import List, Optional

from adminlog.core.context import LoggerContext
from adminlog.core.logger import Logger
from adminlog.domain.config import LogConfiguration
from adminlog.domain.constants import ScopeMode
from adminlog.infra.logging import DiagnosticsConfig, configure_diagnostics, get_logger
from adminlog.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Diagnostics bootstrap
    configure_diagnostics(
        DiagnosticsConfig(
            level="DEBUG" if args.debug else "WARNING",
            log_file=args.diagnostics_file,
        ),
        force=True,
    )

    # 3. Context resolution
    context = LoggerContext(
        caller_name=args.caller_name or "adminlog",
        scope_mode=ScopeMode.parse(args.scope) or ScopeMode.GLOBAL,
        config_dir=args.config_dir,
    )
    log = Logger(context)
    logger.debug(f"CLI command '{args.command}' for {context!r}")

    # 4. Command routing
    if args.command == "write":
        return _cmd_write(log, args)
    if args.command == "config":
        return _cmd_config(context, args)
    if args.command == "tail":
        print(log.get_recent_logs(args.n_lines, log_path=args.log_path), end="")
        return 0
    if args.command == "pick":
        return _cmd_pick(args)

    parser.print_usage(sys.stderr)
    return 2

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_write(log: Logger, args) -> int:
    log.log(
        args.message,
        args.level,
        log_path=args.log_path,
        context=args.context,
        console=args.console,
        file=args.file,
    )
    return 0


def _cmd_config(context: LoggerContext, args) -> int:
    store = context.store
    action = args.config_command

    if action == "show":
        _print_config(store.resolve(), as_json=args.json_output)
        return 0

    if action == "path":
        print(store.path)
        return 0

    if action == "set":
        overrides = cli_args.args_to_overrides(args)
        cfg = store.apply(**overrides)
        if args.save and not store.persist(cfg):
            print(f"ERROR: configuration not saved to {store.path}", file=sys.stderr)
            return 1
        _print_config(cfg, as_json=False)
        return 0

    if action == "reset":
        cfg = store.reset()
        if args.save and not store.persist(cfg):
            print(f"ERROR: configuration not saved to {store.path}", file=sys.stderr)
            return 1
        _print_config(cfg, as_json=False)
        return 0

    return 2


def _cmd_pick(args) -> int:
    # Imported lazily: the picker needs a display, the other commands do not
    from adminlog.interface.gui.dialogs import PathMode, select_path

    path = select_path(
        PathMode(args.mode),
        args.title,
        file_filter=args.file_filter,
        initial_directory=args.initial_directory,
    )
    if path is None:
        return 1
    print(path)
    return 0

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_config(cfg: LogConfiguration, *, as_json: bool) -> None:
    data = cfg.to_dict()
    if as_json:
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return
    width = max(len(k) for k in data)
    for key, value in data.items():
        print(f"{key.ljust(width)} : {value}")

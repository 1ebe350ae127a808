from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI and traps anything that escapes it, so a fatal
error is reported on stderr with its stack trace and a non-zero exit code.
"""

import logging
import sys
import traceback
from typing import Any


def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Report an unhandled exception on stderr.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    logging.getLogger("adminlog.supervisor").critical(f"FATAL EXCEPTION DETECTED: {value}")

    print("\n" + "=" * 80, file=sys.stderr)
    print("CRITICAL ERROR (ADMINLOG CLI)", file=sys.stderr)
    print("=" * 80, file=sys.stderr)
    print(stack_trace, file=sys.stderr)


def main() -> int:
    """
    Run the CLI with the global supervisor in place.

    Returns:
        int: Standard process exit code.
    """
    sys.excepthook = global_exception_handler
    try:
        from adminlog.interface.cli.app import main as cli_main
        return cli_main()
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        global_exception_handler(type(e), e, e.__traceback__)
        return 1


if __name__ == "__main__":
    sys.exit(main())

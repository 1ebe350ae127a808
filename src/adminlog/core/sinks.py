from __future__ import annotations

"""
Output Sinks.

The two channels a rendered line can go to. Each raises SinkWriteError on
failure and leaves the decision to continue to the façade.
"""

import os
import sys
from typing import Dict, Optional, TextIO

from colorlog.escape_codes import parse_colors

from adminlog.domain.constants import LEVEL_COLORS, LogLevel
from adminlog.domain.errors import SinkWriteError


class ConsoleSink:
    """
    Writes lines to stdout, colored by level when attached to a terminal.

    The stream is looked up at write time unless one is given, so output
    redirection done by the host after construction is honoured.
    """

    def __init__(self, stream: Optional[TextIO] = None, colorize: Optional[bool] = None) -> None:
        self._stream = stream
        self._colorize = colorize
        self._codes: Dict[LogLevel, str] = {lvl: parse_colors(c) for lvl, c in LEVEL_COLORS.items()}
        self._reset = parse_colors("reset")

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, line: str, level: LogLevel) -> None:
        stream = self.stream
        try:
            if self._should_colorize(stream):
                text = f"{self._codes.get(level, '')}{line}{self._reset}\n"
            else:
                text = f"{line}\n"
            stream.write(text)
            stream.flush()
        except (OSError, ValueError, AttributeError) as e:
            raise SinkWriteError(f"Console write failed: {e}") from e

    def _should_colorize(self, stream: TextIO) -> bool:
        if self._colorize is not None:
            return self._colorize
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())


class FileSink:
    """Appends lines to a log file, one write call per line."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def write(self, line: str, file_path: str) -> None:
        try:
            # Append mode maps to O_APPEND: concurrent writers never overwrite each other
            with open(file_path, "a", encoding=self.encoding) as f:
                f.write(f"{line}\n")
        except OSError as e:
            raise SinkWriteError(f"File write failed for '{file_path}': {e}", file_path) from e

    @staticmethod
    def ensure_directory(directory: str) -> None:
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise SinkWriteError(f"Cannot create log directory '{directory}': {e}", directory) from e

from __future__ import annotations

"""
Logger Façade.

The only entry point scripts call to emit a record. Each call resolves the
effective configuration, derives the active daily file, applies rotation
and retention, then writes to whichever sinks are enabled.

A call never raises: sink failures are reported on the diagnostics channel
and the remaining sink still runs.
"""

import logging
import os
from datetime import datetime
from typing import Any, Callable, Optional, Union

from adminlog.core import rotation
from adminlog.core.context import LoggerContext, get_context
from adminlog.core.sinks import ConsoleSink, FileSink
from adminlog.domain.config import LogConfiguration
from adminlog.domain.constants import LOG_FILE_EXTENSION, LogLevel
from adminlog.domain.errors import SinkWriteError
from adminlog.domain.records import LogRecord, render_line
from adminlog.infra.logging import report

logger = logging.getLogger(__name__)

LevelLike = Union[LogLevel, str, None]


def filename_for(cfg: LogConfiguration, now: datetime) -> str:
    """Daily log filename: prefix + day stamp + '.log'."""
    return f"{cfg.filename_prefix}{now.strftime(cfg.filename_date_format)}{LOG_FILE_EXTENSION}"


class Logger:
    """
    Façade composing the configuration store, rotation policy and sinks.

    Args:
        context: Shared process state; the process-wide one if omitted.
        console_sink: Console channel (stdout by default).
        file_sink: File channel.
        clock: Source of the current time.
    """

    def __init__(
            self,
            context: Optional[LoggerContext] = None,
            console_sink: Optional[ConsoleSink] = None,
            file_sink: Optional[FileSink] = None,
            clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.context = context if context is not None else get_context()
        self.console_sink = console_sink or ConsoleSink()
        self.file_sink = file_sink or FileSink()
        self._clock = clock

    @property
    def caller_name(self) -> str:
        return self.context.caller_name

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def log(
            self,
            message: Any,
            level: LevelLike = None,
            *,
            log_path: Optional[str] = None,
            context: Any = None,
            console: Optional[bool] = None,
            file: Optional[bool] = None,
    ) -> None:
        """
        Emit one record.

        Args:
            message: Text of the record.
            level: Severity; the configured default level if omitted.
            log_path: Directory overriding the configured one for this call.
            context: Optional extra detail appended to the line.
            console: Force the console sink on or off for this call.
            file: Force the file sink on or off for this call.
        """
        try:
            self._emit(message, level, log_path, context, console, file)
        except Exception as e:
            report(logger, logging.WARNING, f"Log call dropped: {e}")

    def debug(self, message: Any, **kwargs: Any) -> None:
        self.log(message, LogLevel.DEBUG, **kwargs)

    def info(self, message: Any, **kwargs: Any) -> None:
        self.log(message, LogLevel.INFO, **kwargs)

    def success(self, message: Any, **kwargs: Any) -> None:
        self.log(message, LogLevel.SUCCESS, **kwargs)

    def warning(self, message: Any, **kwargs: Any) -> None:
        self.log(message, LogLevel.WARNING, **kwargs)

    def error(self, message: Any, **kwargs: Any) -> None:
        self.log(message, LogLevel.ERROR, **kwargs)

    def critical(self, message: Any, **kwargs: Any) -> None:
        self.log(message, LogLevel.CRITICAL, **kwargs)

    # -------------------------------------------------------------------------
    # File inspection
    # -------------------------------------------------------------------------

    def current_log_file(self, log_path: Optional[str] = None) -> str:
        """Path of the file today's records are appended to."""
        cfg = self.context.store.resolve()
        directory = log_path or cfg.default_directory
        return os.path.join(directory, filename_for(cfg, self._clock()))

    def get_recent_logs(self, n_lines: int = 100, log_path: Optional[str] = None) -> str:
        """
        Extract the last lines of today's log file.

        Args:
            n_lines: Maximum number of lines to return.
            log_path: Directory overriding the configured one.

        Returns:
            str: The tail of the file, or a short notice if it is unavailable.
        """
        path = self.current_log_file(log_path)
        if not os.path.exists(path):
            return "Log file not found."

        # Use errors='replace' to avoid crashes on partially corrupted log files
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.readlines()
            return "".join(lines[-n_lines:]) if n_lines > 0 else ""
        except OSError as e:
            return f"Error retrieving logs: {e}"

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _emit(
            self,
            message: Any,
            level: LevelLike,
            log_path: Optional[str],
            context: Any,
            console: Optional[bool],
            file: Optional[bool],
    ) -> None:
        cfg = self.context.store.resolve()
        now = self._clock()
        effective_level = self._resolve_level(level, cfg)

        record = LogRecord(
            timestamp=now,
            level=effective_level,
            caller_name=self.caller_name,
            message=str(message),
            context=None if context is None else str(context),
        )
        line = render_line(record, cfg.timestamp_format)

        file_on = cfg.file_enabled if file is None else file
        console_on = cfg.console_enabled if console is None else console

        if file_on:
            directory = log_path or cfg.default_directory
            try:
                self._write_file(line, directory, cfg, now)
            except SinkWriteError as e:
                report(logger, logging.WARNING, str(e))

        if console_on:
            try:
                self.console_sink.write(line, effective_level)
            except SinkWriteError as e:
                report(logger, logging.WARNING, str(e))

    def _write_file(self, line: str, directory: str, cfg: LogConfiguration, now: datetime) -> None:
        self.file_sink.ensure_directory(directory)
        file_path = os.path.join(directory, filename_for(cfg, now))

        rotation.rotate_if_needed(file_path, cfg.max_file_size_bytes, now=now)
        rotation.purge_expired(
            directory,
            cfg.retention_days,
            pattern=f"{cfg.filename_prefix}*{LOG_FILE_EXTENSION}",
            now=now,
        )
        self.file_sink.write(line, file_path)

    @staticmethod
    def _resolve_level(level: LevelLike, cfg: LogConfiguration) -> LogLevel:
        if level is None:
            return cfg.default_level
        parsed = LogLevel.parse(level)
        if parsed is None:
            report(logger, logging.WARNING, f"Unknown level {level!r}; using {cfg.default_level.value}.")
            return cfg.default_level
        return parsed

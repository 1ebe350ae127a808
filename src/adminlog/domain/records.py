from __future__ import annotations

"""
Log Record Model.

A LogRecord lives only for the duration of one call; what gets persisted is
its rendered line:

    [2024-05-01 14:03:22] [WARNING] [Update-Users] disk low | Context: C:

A literal ']' in the caller is written as ']]' and a literal '|' in the message
or context as '||', so the field boundaries stay unambiguous.

`parse_line` is the inverse of `render_line` and is used to read log files
back (tail, audits).
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from adminlog.domain.constants import DEFAULT_TIMESTAMP_FORMAT, LogLevel

CONTEXT_SEPARATOR = " | Context: "

_LINE_PATTERN = re.compile(
    r"^\[(?P<timestamp>[^\]]*)\] "
    r"\[(?P<level>[A-Z]+)\] "
    r"\[(?P<caller>(?:[^\]]|\]\])*)\] "
    r"(?P<body>.*)$",
    re.DOTALL,
)


@dataclass(frozen=True)
class LogRecord:
    timestamp: datetime
    level: LogLevel
    caller_name: str
    message: str
    context: Optional[str] = None


def render_line(record: LogRecord, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """
    Render a record to its single-line text form.

    Line breaks inside the message or context are flattened so one record
    always occupies exactly one line of the file.
    """
    stamp = record.timestamp.strftime(timestamp_format)
    caller = record.caller_name.replace("]", "]]")
    line = f"[{stamp}] [{record.level.value}] [{caller}] {_escape_text(record.message)}"
    if record.context is not None and str(record.context) != "":
        line += f"{CONTEXT_SEPARATOR}{_escape_text(record.context)}"
    return line


def parse_line(line: str, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> Optional[LogRecord]:
    """
    Parse a rendered line back into a LogRecord.

    Args:
        line: One line from a log file, with or without its terminator.
        timestamp_format: The pattern the line was rendered with.

    Returns:
        Optional[LogRecord]: The record, or None if the line is not in the
                             expected format.
    """
    match = _LINE_PATTERN.match(line.rstrip("\r\n"))
    if not match:
        return None

    level = LogLevel.parse(match.group("level"))
    if level is None:
        return None
    try:
        timestamp = datetime.strptime(match.group("timestamp"), timestamp_format)
    except ValueError:
        return None

    # Escaped text never holds a lone '|', so the first hit is the real separator
    message, sep, context = match.group("body").partition(CONTEXT_SEPARATOR)

    return LogRecord(
        timestamp=timestamp,
        level=level,
        caller_name=match.group("caller").replace("]]", "]"),
        message=message.replace("||", "|"),
        context=context.replace("||", "|") if sep else None,
    )


def _escape_text(value: Any) -> str:
    return " ".join(str(value).splitlines()).replace("|", "||")

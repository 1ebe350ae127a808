from __future__ import annotations

"""
Configuration Domain Model.

Defines the strongly-typed configuration governing the logging façade and
the validation layer that turns untrusted input (persisted JSON, CLI
arguments, in-process overrides) into a valid instance. Validation never
raises on bad values: it falls back or clamps and reports a warning.
"""

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from adminlog.domain.constants import (
    DEFAULT_FILENAME_DATE_FORMAT,
    DEFAULT_FILENAME_PREFIX,
    DEFAULT_MAX_FILE_SIZE_BYTES,
    DEFAULT_RETENTION_DAYS,
    DEFAULT_TIMESTAMP_FORMAT,
    LogLevel,
    ScopeMode,
)
from adminlog.infra.fs import get_default_log_dir, normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# CONFIGURATION MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LogConfiguration:
    """
    Immutable snapshot of the effective logging configuration.

    Attributes:
        default_directory: Where log files go when a call gives no path.
        default_level: Level used when a call omits one.
        console_enabled: Whether records are echoed to stdout.
        file_enabled: Whether records are appended to the daily file.
        timestamp_format: strftime pattern for the line timestamp.
        filename_prefix: Leading part of every log filename.
        filename_date_format: strftime pattern for the day stamp in filenames.
        max_file_size_bytes: Size above which the active file is archived.
        retention_days: Age after which log files are purged (0 = never).
        scope_mode: Which persisted file backs this configuration.
    """
    default_directory: str = field(default_factory=get_default_log_dir)
    default_level: LogLevel = LogLevel.INFO
    console_enabled: bool = True
    file_enabled: bool = True
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    filename_prefix: str = DEFAULT_FILENAME_PREFIX
    filename_date_format: str = DEFAULT_FILENAME_DATE_FORMAT
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
    retention_days: int = DEFAULT_RETENTION_DAYS
    scope_mode: ScopeMode = ScopeMode.GLOBAL

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary keyed by field name."""
        data = asdict(self)
        data["default_level"] = self.default_level.value
        data["scope_mode"] = self.scope_mode.value
        return data


FIELD_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(LogConfiguration))


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        data: Any,
        base: Optional[LogConfiguration] = None,
) -> Tuple[LogConfiguration, List[str]]:
    """
    Build a valid configuration from raw values layered over a base.

    Only keys present in `data` are taken; everything else keeps the value of
    `base` (built-in defaults if omitted). Unknown keys are ignored.

    Args:
        data: Raw mapping, usually parsed JSON.
        base: Configuration providing values for absent or invalid keys.

    Returns:
        Tuple[LogConfiguration, List[str]]: The validated configuration and
                                            a list of warnings.
    """
    warnings: List[str] = []
    base = base if base is not None else LogConfiguration()

    if not isinstance(data, dict):
        warnings.append(
            f"Invalid config type: expected object, received {type(data).__name__}. Using defaults."
        )
        return base, warnings

    values: Dict[str, Any] = {}
    for key, raw in data.items():
        if key not in FIELD_NAMES:
            if key != "version":
                warnings.append(f"Unknown field '{key}' ignored.")
            continue
        if raw is None:
            continue
        values[key] = _coerce(key, raw, getattr(base, key), warnings)

    return replace(base, **values), warnings


def apply_overrides(
        base: LogConfiguration,
        overrides: Mapping[str, Any],
) -> Tuple[LogConfiguration, List[str]]:
    """
    Merge caller-supplied fields over a configuration.

    Fields whose override value is None are treated as not supplied.

    Raises:
        ValueError: If an override names a field that does not exist.
    """
    unknown = sorted(k for k in overrides if k not in FIELD_NAMES)
    if unknown:
        raise ValueError(f"Unknown configuration field(s): {', '.join(unknown)}")
    supplied = {k: v for k, v in overrides.items() if v is not None}
    return validate_config(supplied, base)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _coerce(key: str, value: Any, fallback: Any, warnings: List[str]) -> Any:
    """Dispatch a raw value to the coercer matching its field."""
    if key == "default_directory":
        text = _as_str(value, fallback, key, warnings)
        return normalize_path(text, fallback)
    if key == "default_level":
        return _as_enum(LogLevel, value, fallback, key, warnings)
    if key == "scope_mode":
        return _as_enum(ScopeMode, value, fallback, key, warnings)
    if key in ("console_enabled", "file_enabled"):
        return _as_bool(value, fallback, key, warnings)
    if key == "max_file_size_bytes":
        return _as_int(value, fallback, key, warnings, minimum=1)
    if key == "retention_days":
        return _as_int(value, fallback, key, warnings, minimum=0)
    if key == "filename_prefix":
        # An empty prefix is legitimate: files are then named by date only
        if isinstance(value, str):
            return value
        return _as_str(value, fallback, key, warnings)
    return _as_str(value, fallback, key, warnings)


def _as_str(value: Any, fallback: str, key: str, warnings: List[str]) -> str:
    """Accept strings verbatim; an empty string keeps the fallback."""
    if isinstance(value, str):
        return value if value else fallback
    warnings.append(
        f"Invalid field '{key}': expected str, received {type(value).__name__}. Using fallback."
    )
    return fallback


def _as_bool(value: Any, fallback: bool, key: str, warnings: List[str]) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in ("true", "1", "yes", "y", "on"):
            return True
        if s in ("false", "0", "no", "n", "off"):
            return False
    warnings.append(
        f"Invalid field '{key}': expected bool, received {value!r}. Using fallback."
    )
    return fallback


def _as_int(value: Any, fallback: int, key: str, warnings: List[str], *, minimum: int) -> int:
    """Coerce to int and clamp to the lowest valid value."""
    number: Optional[int] = None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            number = None

    if number is None:
        warnings.append(
            f"Invalid field '{key}': expected integer, received {value!r}. Using fallback."
        )
        return fallback

    if number < minimum:
        warnings.append(f"Field '{key}' value {number} is below {minimum}; clamped to {minimum}.")
        return minimum
    return number


def _as_enum(enum_cls: Any, value: Any, fallback: Any, key: str, warnings: List[str]) -> Any:
    """Parse an enumeration member from its name or alias."""
    parsed = enum_cls.parse(value)
    if parsed is None:
        warnings.append(f"Invalid field '{key}': unrecognized value {value!r}. Using fallback.")
        return fallback
    return parsed

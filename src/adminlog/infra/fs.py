from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform resolution of the application data directory,
filesystem-safe naming for caller identities, and whole-file atomic writes
used by the configuration store.
"""

import hashlib
import os
import re
import tempfile
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "AdminLog"
UNIX_APP_DIR_NAME = ".adminlog"
HOME_ENV_VAR = "ADMINLOG_HOME"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Locate the per-user folder holding AdminLog's logs and scope files.

    Lookup order:
    - $ADMINLOG_HOME, when set (portable installs, tests)
    - Windows: %LOCALAPPDATA%/AdminLog
    - Linux/Mac: ~/.adminlog

    Resolution only: the folder is created by whichever save or log write
    first needs it.

    Returns:
        str: Absolute path to the data directory.
    """
    path: str = os.environ.get(HOME_ENV_VAR, "").strip()

    if not path and os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def get_default_log_dir() -> str:
    """Return the directory log files go to when nothing overrides it."""
    return os.path.join(get_user_data_dir(), "logs")


def get_default_config_dir() -> str:
    """Return the directory holding the persisted scope files."""
    return os.path.join(get_user_data_dir(), "config")


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Turn a user-typed directory into an absolute path.

    Expands ~ and environment variables; a blank value means the fallback.

    Args:
        path: Directory as typed in a config file or on the command line.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def caller_slug(caller_name: str) -> str:
    """
    Build a filesystem-safe, collision-free key for a caller identity.

    The readable part keeps only safe characters; the hash suffix keeps two
    names that sanitize to the same text apart.

    Args:
        caller_name: Raw script or process name.

    Returns:
        str: Slug such as 'Update-Users-1a2b3c4d'.
    """
    raw = caller_name or ""
    readable = _UNSAFE_CHARS.sub("-", raw).strip("-.") or "caller"
    digest = hashlib.sha1(raw.encode("utf-8")).hexdigest()[:8]
    return f"{readable[:64]}-{digest}"

# -----------------------------------------------------------------------------
# FILESYSTEM WRITE API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Create a directory and its parents, reporting failure instead of raising.

    Args:
        path: Directory to create.

    Returns:
        Tuple[bool, Optional[str]]: (created or already present, error text).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def atomic_write_text(path: str, content: str) -> None:
    """
    Replace the content of a file in a single filesystem operation.

    Writes to a sibling temporary file and swaps it in with os.replace, so a
    concurrent reader sees either the old or the new document, never a mix.

    Args:
        path: Destination file.
        content: Full text to store.

    Raises:
        OSError: If the directory is not writable or the swap fails.
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise

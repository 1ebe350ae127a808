from __future__ import annotations

"""
Log File Rotation and Retention.

Keeps the active log file bounded in size and purges files past their
retention age. Both checks run at write time, never on a timer, so an
oversized file may linger until the next write arrives.
"""

import fnmatch
import logging
import os
from datetime import datetime, timedelta
from typing import List, Optional

from adminlog.domain.constants import ROTATION_SUFFIX_FORMAT
from adminlog.domain.errors import RotationError
from adminlog.infra.logging import report

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def rotate_if_needed(
        file_path: str,
        max_size_bytes: int,
        now: Optional[datetime] = None,
) -> Optional[str]:
    """
    Archive the active file if it has grown past the size threshold.

    The file is renamed to '<stem>_<YYYYMMDD_HHMMSS><ext>', leaving the
    original name free for the next write.

    Args:
        file_path: Active log file.
        max_size_bytes: Largest size the file may keep.
        now: Reference time for the archive suffix.

    Returns:
        Optional[str]: Path of the archive, or None if nothing was rotated.
    """
    try:
        size = os.path.getsize(file_path)
    except OSError:
        return None

    if size <= max_size_bytes:
        return None

    archive = _archive_name(file_path, now or datetime.now())
    try:
        _rename(file_path, archive)
    except RotationError as e:
        report(logger, logging.WARNING, str(e))
        return None

    logger.debug(f"Rotated {file_path} ({size} bytes) to {archive}")
    return archive


def purge_expired(
        directory: str,
        retention_days: int,
        pattern: str = "*.log",
        now: Optional[datetime] = None,
) -> List[str]:
    """
    Delete log files last modified before the retention window.

    A retention of 0 disables purging. Files exactly on the boundary are
    kept. A file that cannot be deleted is reported and skipped.

    Args:
        directory: Folder to scan (not recursive).
        retention_days: Maximum age in days.
        pattern: Glob selecting which files count as logs.
        now: Reference time for the age computation.

    Returns:
        List[str]: Paths that were deleted.
    """
    if retention_days <= 0:
        return []

    cutoff = (now or datetime.now()) - timedelta(days=retention_days)
    cutoff_ts = cutoff.timestamp()
    deleted: List[str] = []

    try:
        entries = os.listdir(directory)
    except OSError:
        return deleted

    for name in sorted(entries):
        if not fnmatch.fnmatch(name, pattern):
            continue
        path = os.path.join(directory, name)
        try:
            if not os.path.isfile(path) or os.path.getmtime(path) >= cutoff_ts:
                continue
            _delete(path)
        except (OSError, RotationError) as e:
            report(logger, logging.WARNING, f"Retention skipped '{path}': {e}")
            continue
        deleted.append(path)

    if deleted:
        logger.debug(f"Purged {len(deleted)} expired log file(s) from {directory}")
    return deleted


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _archive_name(file_path: str, now: datetime) -> str:
    stem, ext = os.path.splitext(file_path)
    candidate = f"{stem}_{now.strftime(ROTATION_SUFFIX_FORMAT)}{ext}"
    counter = 1
    while os.path.exists(candidate):
        candidate = f"{stem}_{now.strftime(ROTATION_SUFFIX_FORMAT)}-{counter}{ext}"
        counter += 1
    return candidate


def _rename(src: str, dst: str) -> None:
    try:
        os.rename(src, dst)
    except OSError as e:
        raise RotationError(f"Rotation failed for '{src}': {e}", src) from e


def _delete(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        raise RotationError(f"Delete failed: {e}", path) from e

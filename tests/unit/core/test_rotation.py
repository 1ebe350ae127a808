from __future__ import annotations

"""
Unit tests for size-based rotation and age-based retention.
"""

import os
from datetime import datetime, timedelta
from unittest.mock import patch

from adminlog.core.rotation import purge_expired, rotate_if_needed

NOW = datetime(2024, 5, 1, 14, 3, 22)


def _make_file(path, size: int) -> None:
    path.write_bytes(b"x" * size)


def _set_age(path, days: float) -> None:
    ts = (NOW - timedelta(days=days)).timestamp()
    os.utime(path, (ts, ts))


# -----------------------------------------------------------------------------
# Rotation
# -----------------------------------------------------------------------------

def test_rotation_triggers_above_threshold(tmp_path):
    active = tmp_path / "adminlog_20240501.log"
    _make_file(active, 101)

    archive = rotate_if_needed(str(active), 100, now=NOW)

    assert archive == str(tmp_path / "adminlog_20240501_20240501_140322.log")
    assert not active.exists()
    assert os.path.getsize(archive) == 101


def test_rotation_skips_below_threshold(tmp_path):
    active = tmp_path / "adminlog_20240501.log"
    _make_file(active, 99)

    assert rotate_if_needed(str(active), 100, now=NOW) is None
    assert active.stat().st_size == 99
    assert os.listdir(tmp_path) == ["adminlog_20240501.log"]


def test_rotation_skips_exact_threshold(tmp_path):
    active = tmp_path / "a.log"
    _make_file(active, 100)

    assert rotate_if_needed(str(active), 100, now=NOW) is None


def test_rotation_of_missing_file_is_noop(tmp_path):
    assert rotate_if_needed(str(tmp_path / "absent.log"), 1, now=NOW) is None


def test_rotation_avoids_overwriting_existing_archive(tmp_path):
    active = tmp_path / "a.log"
    taken = tmp_path / "a_20240501_140322.log"
    taken.write_text("older archive", encoding="utf-8")
    _make_file(active, 10)

    archive = rotate_if_needed(str(active), 5, now=NOW)

    assert archive == str(tmp_path / "a_20240501_140322-1.log")
    assert taken.read_text(encoding="utf-8") == "older archive"


def test_rotation_rename_failure_is_reported_not_raised(tmp_path, caplog):
    active = tmp_path / "a.log"
    _make_file(active, 10)

    with patch("adminlog.core.rotation.os.rename", side_effect=PermissionError("locked")):
        assert rotate_if_needed(str(active), 5, now=NOW) is None

    assert active.exists()
    assert any("Rotation failed" in r.getMessage() for r in caplog.records)


# -----------------------------------------------------------------------------
# Retention
# -----------------------------------------------------------------------------

def test_purge_deletes_only_files_older_than_window(tmp_path):
    old = tmp_path / "adminlog_20240401.log"
    edge = tmp_path / "adminlog_20240424.log"
    fresh = tmp_path / "adminlog_20240430.log"
    for f in (old, edge, fresh):
        _make_file(f, 1)
    _set_age(old, 30)
    _set_age(edge, 7)
    _set_age(fresh, 1)

    deleted = purge_expired(str(tmp_path), 7, now=NOW)

    assert deleted == [str(old)]
    assert not old.exists()
    assert edge.exists()
    assert fresh.exists()


def test_purge_disabled_with_zero_retention(tmp_path):
    old = tmp_path / "ancient.log"
    _make_file(old, 1)
    _set_age(old, 3650)

    assert purge_expired(str(tmp_path), 0, now=NOW) == []
    assert old.exists()


def test_purge_respects_pattern(tmp_path):
    ours = tmp_path / "adminlog_20240101.log"
    foreign = tmp_path / "other_20240101.log"
    notes = tmp_path / "adminlog_notes.txt"
    for f in (ours, foreign, notes):
        _make_file(f, 1)
        _set_age(f, 100)

    deleted = purge_expired(str(tmp_path), 30, pattern="adminlog_*.log", now=NOW)

    assert deleted == [str(ours)]
    assert foreign.exists()
    assert notes.exists()


def test_purge_continues_after_delete_failure(tmp_path, caplog):
    first = tmp_path / "a.log"
    second = tmp_path / "b.log"
    for f in (first, second):
        _make_file(f, 1)
        _set_age(f, 40)

    real_remove = os.remove

    def flaky_remove(path):
        if path.endswith("a.log"):
            raise PermissionError("locked")
        real_remove(path)

    with patch("adminlog.core.rotation.os.remove", side_effect=flaky_remove):
        deleted = purge_expired(str(tmp_path), 30, now=NOW)

    assert deleted == [str(second)]
    assert first.exists()
    assert any("Retention skipped" in r.getMessage() for r in caplog.records)


def test_purge_missing_directory_is_noop(tmp_path):
    assert purge_expired(str(tmp_path / "nope"), 5, now=NOW) == []

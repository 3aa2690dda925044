"""
Unit tests for backup file storage.
"""
import os
import time

import pytest

from app.services.backup_storage import BackupStorage


def test_save_never_overwrites(tmp_path):
    storage = BackupStorage(tmp_path / "downloads")

    first = storage.save("mood_journal_backup_2025-01-06.json", b"one")
    second = storage.save("mood_journal_backup_2025-01-06.json", b"two")

    assert first.name == "mood_journal_backup_2025-01-06.json"
    assert second.name == "mood_journal_backup_2025-01-06 (1).json"
    assert BackupStorage.load(first) == b"one"
    assert BackupStorage.load(second) == b"two"


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        BackupStorage.load(tmp_path / "nope.zip")


def test_list_and_cleanup(tmp_path):
    storage = BackupStorage(tmp_path)
    old = storage.save("mood_journal_backup_2024-01-01.zip", b"old")
    recent = storage.save("mood_journal_backup_2025-01-06.json", b"new")
    (tmp_path / "notes.txt").write_text("not a backup")

    forty_days_ago = time.time() - 40 * 24 * 3600
    os.utime(old, (forty_days_ago, forty_days_ago))

    assert storage.list_backups() == [recent, old]
    assert storage.cleanup_old_backups(retention_days=30) == 1
    assert storage.list_backups() == [recent]
    assert (tmp_path / "notes.txt").exists()


def test_cleanup_disabled(tmp_path):
    storage = BackupStorage(tmp_path)
    storage.save("mood_journal_backup_2024-01-01.zip", b"old")
    assert storage.cleanup_old_backups(retention_days=0) == 0


def test_list_missing_directory(tmp_path):
    assert BackupStorage(tmp_path / "missing").list_backups() == []

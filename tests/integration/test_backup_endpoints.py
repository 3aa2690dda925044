"""
Integration tests for backup export and the two-step import flow.
"""
import io
import json
import zipfile

import pytest

from app.core.config import settings
from tests.lib import JPEG_BYTES, data_url, make_zip

ENTRIES = "/api/v1/entries"
BACKUP = "/api/v1/backup"


@pytest.fixture
def seeded(client):
    client.post(ENTRIES + "/", json={
        "date": "Mon Jan 06 2025",
        "mood": "good",
        "images": [data_url(JPEG_BYTES, "image/jpeg")],
        "timestamp": "2025-01-06T10:00:00.000Z",
    })
    client.post(ENTRIES + "/", json={
        "date": "Tue Jan 07 2025",
        "mood": "sad",
        "timestamp": "2025-01-07T10:00:00.000Z",
    })
    return client


def _entries(client):
    return {e["date"]: e for e in client.get(ENTRIES + "/").json()}


def test_export_json(seeded):
    response = seeded.get(BACKUP + "/export", params={"format": "json"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert "mood_journal_backup_" in response.headers["content-disposition"]
    assert response.json()["totalEntries"] == 2


def test_export_zip(seeded):
    response = seeded.get(BACKUP + "/export", params={"format": "zip"})

    assert response.status_code == 200
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert "images/Mon_Jan_06_2025_0.jpg" in archive.namelist()


def test_export_empty_journal(client):
    response = client.get(BACKUP + "/export")
    assert response.status_code == 400


def test_zip_restore_with_overwrite(seeded):
    backup = seeded.get(BACKUP + "/export", params={"format": "zip"}).content
    before = _entries(seeded)
    seeded.delete(f"{ENTRIES}/Tue Jan 07 2025")
    seeded.post(ENTRIES + "/", json={"date": "Wed Jan 08 2025", "mood": "angry"})

    preview = seeded.post(
        BACKUP + "/import",
        files={"file": ("mood_journal_backup.zip", backup, "application/zip")},
    )
    assert preview.status_code == 200
    body = preview.json()
    assert body["source_format"] == "zip"
    assert body["local_count"] == 2
    assert body["imported_count"] == 2
    assert body["new_count"] == 1
    assert body["conflict_count"] == 1

    # Nothing changes until the policy is chosen
    assert set(_entries(seeded)) == {"Mon Jan 06 2025", "Wed Jan 08 2025"}

    committed = seeded.post(f"{BACKUP}/import/{body['token']}/commit", json={"policy": "overwrite"})
    assert committed.status_code == 200
    assert committed.json()["total_after"] == 2
    assert _entries(seeded) == before


def test_merge_restore(seeded):
    backup = json.dumps({
        "version": "2.0",
        "dataType": "mood_entries",
        "totalEntries": 2,
        "data": [
            {"date": "Tue Jan 07 2025", "mood": "great", "images": [], "timestamp": "2025-01-07T12:00:00.000Z"},
            {"date": "Fri Jan 10 2025", "mood": "calm", "images": [], "timestamp": "2025-01-10T12:00:00.000Z"},
        ],
    }).encode("utf-8")

    token = seeded.post(
        BACKUP + "/import",
        files={"file": ("backup.json", backup, "application/json")},
    ).json()["token"]
    summary = seeded.post(f"{BACKUP}/import/{token}/commit", json={"policy": "merge"}).json()

    assert summary["entries_written"] == 1
    assert summary["entries_skipped"] == 1
    moods = {date: e["mood"] for date, e in _entries(seeded).items()}
    assert moods == {"Mon Jan 06 2025": "good", "Tue Jan 07 2025": "sad", "Fri Jan 10 2025": "calm"}


def test_commit_requires_policy(seeded):
    backup = seeded.get(BACKUP + "/export").content
    token = seeded.post(BACKUP + "/import", files={"file": ("backup.json", backup)}).json()["token"]

    assert seeded.post(f"{BACKUP}/import/{token}/commit", json={}).status_code == 422
    assert seeded.post(f"{BACKUP}/import/{token}/commit", json={"policy": "replace"}).status_code == 422


def test_commit_unknown_token(client):
    response = client.post(f"{BACKUP}/import/deadbeef/commit", json={"policy": "merge"})
    assert response.status_code == 404


def test_cancel_import(seeded):
    backup = seeded.get(BACKUP + "/export").content
    token = seeded.post(BACKUP + "/import", files={"file": ("backup.json", backup)}).json()["token"]

    assert seeded.delete(f"{BACKUP}/import/{token}").status_code == 204
    response = seeded.post(f"{BACKUP}/import/{token}/commit", json={"policy": "merge"})
    assert response.status_code == 404


def test_invalid_backup_rejected(client):
    response = client.post(
        BACKUP + "/import",
        files={"file": ("backup.json", b'{"data": "nope"}', "application/json")},
    )
    assert response.status_code == 400
    assert "Invalid backup format" in response.json()["detail"]


def test_zip_without_manifest_leaves_journal(seeded):
    before = _entries(seeded)
    raw = make_zip({"images/ghost.png": b"\x89PNG"})

    response = seeded.post(BACKUP + "/import", files={"file": ("backup.zip", raw, "application/zip")})

    assert response.status_code == 400
    assert "mood_data.json" in response.json()["detail"]
    assert _entries(seeded) == before


def test_object_data_rejected_and_journal_untouched(seeded):
    before = _entries(seeded)
    raw = json.dumps({"version": "2.0", "dataType": "mood_entries", "data": {}}).encode("utf-8")

    response = seeded.post(BACKUP + "/import", files={"file": ("backup.json", raw, "application/json")})

    assert response.status_code == 400
    assert "array" in response.json()["detail"]
    assert _entries(seeded) == before


def test_oversized_upload_rejected(seeded, monkeypatch):
    monkeypatch.setattr(settings, "import_export_max_file_size_mb", 1)
    before = _entries(seeded)
    raw = b" " * (2 * 1024 * 1024)

    response = seeded.post(BACKUP + "/import", files={"file": ("backup.json", raw, "application/json")})

    assert response.status_code == 400
    assert "too large" in response.json()["detail"]
    assert _entries(seeded) == before

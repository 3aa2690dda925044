"""
CLI tests for export, import and backup housekeeping.
"""
import json

import pytest
from sqlmodel import Session
from typer.testing import CliRunner

from app.cli.cli import app as cli_app
from app.core import database
from app.services.journal_store import SqlJournalStore
from tests.lib import PNG_BYTES, data_url, make_entry

runner = CliRunner()


@pytest.fixture
def cli_engine(monkeypatch):
    engine = database.build_engine("sqlite://")
    monkeypatch.setattr(database, "engine", engine)
    database.init_db(engine)
    return engine


def _put(engine, *entries):
    with Session(engine) as session:
        store = SqlJournalStore(session)
        for entry in entries:
            store.put(entry)


def _moods(engine):
    with Session(engine) as session:
        return {entry.date: entry.mood for entry in SqlJournalStore(session).list()}


def _backup_file(tmp_path, entries):
    path = tmp_path / "mood_journal_backup_2025-02-01.json"
    path.write_text(json.dumps({
        "version": "2.0",
        "dataType": "mood_entries",
        "totalEntries": len(entries),
        "data": entries,
    }))
    return path


IMPORTED = [
    {"date": "Tue Jan 07 2025", "mood": "great", "images": [], "timestamp": "2025-01-07T09:00:00.000Z"},
    {"date": "Wed Jan 08 2025", "mood": "calm", "images": [], "timestamp": "2025-01-08T09:00:00.000Z"},
]


def test_version():
    result = runner.invoke(cli_app, ["version"])
    assert result.exit_code == 0
    assert "Mood Journal CLI version" in result.stdout


def test_export_writes_zip(cli_engine, tmp_path):
    _put(cli_engine, make_entry("Mon Jan 06 2025", images=[data_url(PNG_BYTES)]))

    result = runner.invoke(cli_app, ["export", "--format", "zip", "--output-dir", str(tmp_path)])

    assert result.exit_code == 0, result.stdout
    files = list(tmp_path.glob("*_backup_*.zip"))
    assert len(files) == 1


def test_export_empty_journal_fails(cli_engine, tmp_path):
    result = runner.invoke(cli_app, ["export", "--output-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert list(tmp_path.iterdir()) == []


def test_import_with_policy_option(cli_engine, tmp_path):
    _put(cli_engine, make_entry("Mon Jan 06 2025"), make_entry("Tue Jan 07 2025", mood="sad"))
    backup = _backup_file(tmp_path, IMPORTED)

    result = runner.invoke(cli_app, ["import", str(backup), "--policy", "merge"])

    assert result.exit_code == 0, result.stdout
    assert _moods(cli_engine) == {
        "Mon Jan 06 2025": "good",
        "Tue Jan 07 2025": "sad",
        "Wed Jan 08 2025": "calm",
    }


def test_import_prompts_for_policy(cli_engine, tmp_path):
    _put(cli_engine, make_entry("Mon Jan 06 2025"))
    backup = _backup_file(tmp_path, IMPORTED)

    result = runner.invoke(cli_app, ["import", str(backup)], input="overwrite\n")

    assert result.exit_code == 0, result.stdout
    assert _moods(cli_engine) == {"Tue Jan 07 2025": "great", "Wed Jan 08 2025": "calm"}


def test_import_cancel_leaves_journal(cli_engine, tmp_path):
    _put(cli_engine, make_entry("Mon Jan 06 2025"))
    backup = _backup_file(tmp_path, IMPORTED)

    result = runner.invoke(cli_app, ["import", str(backup)], input="cancel\n")

    assert result.exit_code == 0
    assert "cancelled" in result.stdout
    assert _moods(cli_engine) == {"Mon Jan 06 2025": "good"}


def test_import_invalid_file(cli_engine, tmp_path):
    backup = tmp_path / "broken.json"
    backup.write_text('{"data": [')

    result = runner.invoke(cli_app, ["import", str(backup), "--policy", "overwrite"])

    assert result.exit_code == 2


def test_import_missing_file(cli_engine, tmp_path):
    result = runner.invoke(cli_app, ["import", str(tmp_path / "missing.json"), "-p", "merge"])
    assert result.exit_code == 2


def test_backups_list_and_cleanup(tmp_path):
    (tmp_path / "mood_journal_backup_2025-01-06.json").write_text("{}")

    listed = runner.invoke(cli_app, ["backups", "list", "--dir", str(tmp_path)])
    assert listed.exit_code == 0
    assert "mood_journal_backup" in listed.stdout

    cleaned = runner.invoke(cli_app, ["backups", "cleanup", "--dir", str(tmp_path), "--days", "30"])
    assert cleaned.exit_code == 0
    assert "Removed 0" in cleaned.stdout

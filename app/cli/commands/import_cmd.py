"""
Backup import command.
"""
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from app.cli.commands.utils import cli_session, prompt_import_policy
from app.cli.logging import setup_cli_logging
from app.core.exceptions import BackupFormatError, StorageWriteError
from app.models.enums import ImportPolicy
from app.services.backup_storage import BackupStorage
from app.services.import_service import ImportService
from app.services.journal_store import SqlJournalStore
from app.services.reconciliation_service import ReconciliationService

console = Console()


def import_backup(
    file_path: Annotated[Path, typer.Argument(help="Backup file (.json or .zip)")],
    policy: Annotated[
        Optional[ImportPolicy],
        typer.Option("--policy", "-p", help="overwrite or merge; prompts when omitted"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
):
    """Restore a backup into the journal."""
    logger = setup_cli_logging("import", verbose=verbose)

    try:
        raw = BackupStorage.load(file_path)
        decoded = ImportService().decode_backup(raw, filename=file_path.name)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)
    except BackupFormatError as exc:
        console.print(f"[red]Invalid backup file: {exc}[/red]")
        raise typer.Exit(code=2)

    with cli_session() as session:
        reconciliation = ReconciliationService(SqlJournalStore(session))
        preview = reconciliation.prepare_import(decoded)

        table = Table(title="Import Preview")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Backup format", decoded.source_format)
        table.add_row("Entries on this device", str(preview.local_count))
        table.add_row("Entries in backup", str(preview.imported_count))
        table.add_row("New days", str(preview.new_count))
        table.add_row("Days already present", str(preview.conflict_count))
        if decoded.images_dropped:
            table.add_row("Missing images (skipped)", str(decoded.images_dropped))
        console.print(table)

        if policy is None:
            policy = prompt_import_policy(preview)
            if policy is None:
                console.print("[yellow]Import cancelled[/yellow]")
                raise typer.Exit(code=0)

        try:
            summary = reconciliation.commit_import(policy)
        except StorageWriteError as exc:
            console.print(f"[red]Import failed while writing; the journal may be incomplete: {exc}[/red]")
            raise typer.Exit(code=1)

    logger.info(f"Imported {file_path} with policy {policy.value}")
    result = Table(title="Import Results")
    result.add_column("Metric", style="cyan")
    result.add_column("Value", style="white")
    result.add_row("Policy", summary.policy.value)
    result.add_row("Entries written", str(summary.entries_written))
    result.add_row("Entries skipped", str(summary.entries_skipped))
    result.add_row("Entries now", str(summary.total_after))
    console.print(result)

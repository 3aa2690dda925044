"""
Backup export command.
"""
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from app.cli.commands.utils import cli_session
from app.cli.logging import setup_cli_logging
from app.core.exceptions import MoodJournalError
from app.models.enums import BackupFormat
from app.services.backup_storage import BackupStorage
from app.services.export_service import ExportService
from app.services.journal_store import SqlJournalStore

console = Console()


def export_backup(
    backup_format: Annotated[
        BackupFormat, typer.Option("--format", "-f", help="json (self-contained) or zip (images as files)")
    ] = BackupFormat.JSON,
    output_dir: Annotated[
        Optional[Path], typer.Option("--output-dir", "-o", help="Directory to write the backup to")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
):
    """Export the whole journal to a backup file."""
    logger = setup_cli_logging("export", verbose=verbose)

    with cli_session() as session:
        try:
            result = ExportService(SqlJournalStore(session)).create_export(backup_format)
        except MoodJournalError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(code=1)

    path = BackupStorage(output_dir).save(result.filename, result.content)
    logger.info(f"Exported {result.entry_count} entries to {path}")
    console.print(
        f"[green]Backed up {result.entry_count} entries "
        f"({result.image_count} images) to[/green] {path}"
    )

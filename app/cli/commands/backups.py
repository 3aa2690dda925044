"""
Backup file housekeeping commands.
"""
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from app.cli.logging import setup_cli_logging
from app.services.backup_storage import BackupStorage

app = typer.Typer(help="Manage backup files")
console = Console()


@app.command("list")
def list_backups(
    directory: Annotated[Optional[Path], typer.Option("--dir", "-d", help="Backup directory")] = None,
):
    """List backup files, newest first."""
    storage = BackupStorage(directory)
    files = storage.list_backups()
    if not files:
        console.print(f"No backups in {storage.directory}")
        return

    table = Table(title=f"Backups in {storage.directory}")
    table.add_column("File", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    for path in files:
        stat = path.stat()
        table.add_row(path.name, f"{stat.st_size:,}", datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M"))
    console.print(table)


@app.command("cleanup")
def cleanup_backups(
    directory: Annotated[Optional[Path], typer.Option("--dir", "-d", help="Backup directory")] = None,
    days: Annotated[Optional[int], typer.Option("--days", help="Retention in days")] = None,
):
    """Delete backups older than the retention period."""
    setup_cli_logging("backups")
    removed = BackupStorage(directory).cleanup_old_backups(days)
    console.print(f"Removed {removed} old backup(s)")

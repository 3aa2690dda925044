"""
Main CLI application using Typer.

Entry point: python -m app.cli
CLI Name: moodjournal-admin
"""
import typer

from app import __version__ as app_version
from app.cli.commands import backups, export_cmd, import_cmd

app = typer.Typer(
    name="moodjournal-admin",
    help="Mood Journal Admin CLI - backup and restore tools",
)

@app.command()
def version():
    """Show CLI version information."""
    typer.echo(f"Mood Journal CLI version {app_version}")

# Register commands

app.command(name="export")(export_cmd.export_backup)
app.command(name="import")(import_cmd.import_backup)
app.add_typer(backups.app, name="backups")

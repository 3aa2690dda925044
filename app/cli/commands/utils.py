"""
Helpers shared by CLI commands.
"""
from contextlib import contextmanager
from typing import Iterator, Optional

import click
import typer
from sqlmodel import Session

from app.core import database
from app.models.enums import ImportPolicy
from app.schemas.dto import ImportPreview

CANCEL_CHOICE = "cancel"


def prompt_import_policy(preview: ImportPreview) -> Optional[ImportPolicy]:
    """
    Ask the user how to reconcile; there is deliberately no default answer.

    Returns None if the user cancels.
    """
    typer.echo(
        f"\nThis device has {preview.local_count} entries; the backup has {preview.imported_count}.\n"
        f"  overwrite = replace every local entry with the backup\n"
        f"  merge     = only add the {preview.new_count} days missing locally "
        f"({preview.conflict_count} existing days are kept as they are)\n"
    )
    choice = typer.prompt(
        "Choose",
        type=click.Choice([ImportPolicy.OVERWRITE.value, ImportPolicy.MERGE.value, CANCEL_CHOICE]),
        show_choices=True,
    )
    if choice == CANCEL_CHOICE:
        return None
    return ImportPolicy(choice)


@contextmanager
def cli_session() -> Iterator[Session]:
    """Session on the configured database, creating tables on first use."""
    database.init_db(database.engine)
    with Session(database.engine) as session:
        yield session

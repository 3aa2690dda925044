"""
Domain exceptions.

API handlers translate these into HTTP responses; the CLI prints them.
"""


class MoodJournalError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(MoodJournalError):
    """Input failed a business rule (unknown mood, too many images, ...)."""


class EntryNotFoundError(MoodJournalError):
    """No mood entry exists for the requested date."""


class DraftNotFoundError(MoodJournalError):
    """No draft exists for the requested date."""


class BackupFormatError(MoodJournalError):
    """Backup document is structurally invalid. Aborts the whole import."""


class BackupDecodeError(BackupFormatError):
    """Backup bytes could not be decoded (corrupt ZIP, bad JSON or base64)."""


class StorageWriteError(MoodJournalError):
    """The journal store failed to persist a change.

    The store may be in a mixed state after this during a multi-step
    restore, so it is always surfaced to the user.
    """


class ImportSessionNotFoundError(MoodJournalError):
    """A pending import token is unknown or has expired."""

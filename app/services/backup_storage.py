"""
Local file storage for backups (the "Downloads" folder of the device).

The codec only deals in bytes; this class is the file-save/file-pick side.
"""
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, Union

from app.core.config import settings
from app.core.logging_config import log_info, log_warning
from app.core.time_utils import utc_now

BACKUP_GLOB_PATTERNS = ("*_backup_*.json", "*_backup_*.zip")


class BackupStorage:
    """Writes and reads backup files in a single directory."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory) if directory else settings.backup_path

    def _available_path(self, filename: str) -> Path:
        """Never overwrite: ``name.zip`` -> ``name (1).zip`` -> ..."""
        candidate = self.directory / Path(filename).name
        counter = 1
        while candidate.exists():
            candidate = self.directory / f"{Path(filename).stem} ({counter}){Path(filename).suffix}"
            counter += 1
        return candidate

    def save(self, filename: str, content: bytes) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._available_path(filename)
        path.write_bytes(content)
        log_info(f"Wrote backup {path} ({len(content)} bytes)", path=str(path), file_size=len(content))
        return path

    @staticmethod
    def load(path: Union[str, Path]) -> bytes:
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Backup file not found: {file_path}")
        return file_path.read_bytes()

    def list_backups(self) -> List[Path]:
        """Backup files in the directory, newest first."""
        if not self.directory.exists():
            return []
        files = {path for pattern in BACKUP_GLOB_PATTERNS for path in self.directory.glob(pattern)}
        return sorted(files, key=lambda path: path.stat().st_mtime, reverse=True)

    def cleanup_old_backups(self, retention_days: Optional[int] = None) -> int:
        """
        Remove backups older than the retention period.

        Returns:
            Number of files deleted.
        """
        retention_days = settings.backup_cleanup_days if retention_days is None else retention_days
        if retention_days <= 0:
            return 0

        cutoff_ts = (utc_now() - timedelta(days=retention_days)).timestamp()
        removed = 0
        for file_path in self.list_backups():
            try:
                if file_path.stat().st_mtime < cutoff_ts:
                    file_path.unlink(missing_ok=True)
                    removed += 1
            except OSError as exc:  # best-effort cleanup
                log_warning(f"Failed to delete backup {file_path}: {exc}", file_path=str(file_path))

        if removed:
            log_info(f"Cleaned up {removed} expired backups", removed=removed)
        return removed

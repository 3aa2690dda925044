"""
In-process registry of decoded backups waiting for the user's policy choice.

The HTTP flow spans two requests (upload, then commit), so the decoded
backup is parked here under a random token until it is committed or expires.
"""
import threading
import time
import uuid
from typing import Callable, Dict, Optional, Tuple

from app.core.config import settings
from app.core.exceptions import ImportSessionNotFoundError
from app.core.logging_config import log_info
from app.schemas.dto import DecodedBackup


class PendingImportRegistry:
    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._items: Dict[str, Tuple[DecodedBackup, float]] = {}
        self._lock = threading.Lock()

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [token for token, (_, created) in self._items.items() if now - created > self.ttl_seconds]
        for token in expired:
            del self._items[token]
        if expired:
            log_info(f"Discarded {len(expired)} expired pending imports", expired=len(expired))

    def add(self, decoded: DecodedBackup) -> str:
        token = uuid.uuid4().hex
        with self._lock:
            self._purge_expired()
            self._items[token] = (decoded, self._clock())
        return token

    def pop(self, token: str) -> DecodedBackup:
        with self._lock:
            self._purge_expired()
            item = self._items.pop(token, None)
        if item is None:
            raise ImportSessionNotFoundError("Pending import not found or expired")
        return item[0]

    def discard(self, token: str) -> bool:
        with self._lock:
            return self._items.pop(token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._items)


_registry: Optional[PendingImportRegistry] = None


def get_pending_imports() -> PendingImportRegistry:
    """Process-wide registry used by the API (overridable as a dependency)."""
    global _registry
    if _registry is None:
        _registry = PendingImportRegistry(settings.pending_import_ttl_seconds)
    return _registry

"""
JSON parsing for backup documents.

Large documents (inline base64 images make JSON backups bulky) are parsed
incrementally with ijson; small ones use the standard json module.
"""
import io
import json
from typing import Any

import ijson
from ijson.common import IncompleteJSONError, JSONError

from app.core.exceptions import BackupDecodeError

_UTF8_BOM = b"\xef\xbb\xbf"


def parse_backup_document(raw: bytes, stream_threshold_mb: int) -> Any:
    """
    Parse a backup document from raw bytes.

    Args:
        raw: UTF-8 encoded JSON
        stream_threshold_mb: Size at which ijson is used instead of json.loads

    Returns:
        The parsed document (root is not validated here)

    Raises:
        BackupDecodeError: If the bytes are not valid UTF-8 JSON
    """
    if raw.startswith(_UTF8_BOM):
        raw = raw[len(_UTF8_BOM):]

    if len(raw) < stream_threshold_mb * 1024 * 1024:
        try:
            return json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise BackupDecodeError(f"Backup is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise BackupDecodeError(f"Invalid JSON: {e}") from e

    return _stream_parse_root(raw)


def _stream_parse_root(raw: bytes) -> Any:
    """Build the root object key by key; non-object roots yield an empty dict."""
    try:
        return {
            key: value
            for key, value in ijson.kvitems(io.BytesIO(raw), "", use_float=True)
        }
    except IncompleteJSONError as e:
        raise BackupDecodeError(f"Incomplete JSON (truncated file): {e}") from e
    except JSONError as e:
        raise BackupDecodeError(f"Invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise BackupDecodeError(f"Backup is not valid UTF-8: {e}") from e

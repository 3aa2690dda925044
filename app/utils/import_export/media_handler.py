"""
Image reference handling for backups.

An image reference is one of:
- an inline data URL (``data:image/png;base64,...``),
- an archive-relative path (``images/<name>``), only inside ZIP manifests,
- anything else with a URL scheme (``https:``, ``file:``, ``blob:``), passed through untouched.
"""
import base64
import binascii
import re
from pathlib import PurePosixPath
from typing import Optional, Tuple
from urllib.parse import unquote_to_bytes

from app.core.exceptions import BackupDecodeError
from app.utils.import_export.constants import ExportConfig

# Single source of truth for extension <-> MIME type, used in both directions.
MIME_BY_EXTENSION = {
    "jpg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
    "svg": "image/svg+xml",
    "heic": "image/heic",
    "avif": "image/avif",
    "tiff": "image/tiff",
}
EXTENSION_BY_MIME = {mime: ext for ext, mime in MIME_BY_EXTENSION.items()}
EXTENSION_ALIASES = {"jpeg": "jpg", "jpe": "jpg", "tif": "tiff"}

DEFAULT_MIME_TYPE = "image/png"

_UNSAFE_CHARS_RE = re.compile(r"[^0-9A-Za-z_-]")
_URL_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]+:")


class MediaHandler:
    """Stateless helpers for converting image references."""

    @staticmethod
    def normalize_extension(ext: str) -> str:
        ext = ext.strip().lstrip(".").lower()
        return EXTENSION_ALIASES.get(ext, ext)

    @classmethod
    def extension_for_mime(cls, mime_type: Optional[str]) -> str:
        """``image/jpeg`` -> ``jpg``; unknown types fall back to their subtype."""
        mime = (mime_type or DEFAULT_MIME_TYPE).strip().lower()
        if mime in EXTENSION_BY_MIME:
            return EXTENSION_BY_MIME[mime]
        subtype = mime.split("/", 1)[-1].split("+", 1)[0]
        return cls.normalize_extension(subtype) or "bin"

    @classmethod
    def mime_for_extension(cls, ext: str) -> str:
        """``jpg`` -> ``image/jpeg``; unknown extensions map to ``image/<ext>``."""
        normalized = cls.normalize_extension(ext)
        return MIME_BY_EXTENSION.get(normalized, f"image/{normalized}")

    @classmethod
    def mime_for_path(cls, path: str) -> str:
        return cls.mime_for_extension(PurePosixPath(path).suffix)

    @staticmethod
    def sanitize_filename(value: str) -> str:
        """Replace every character outside ``[0-9A-Za-z_-]`` with ``_``."""
        return _UNSAFE_CHARS_RE.sub("_", value)

    @classmethod
    def archive_image_path(cls, entry_date: str, index: int, mime_type: Optional[str]) -> str:
        """Path of an extracted image inside a ZIP backup.

        ``("Mon Jan 06 2025", 2, "image/jpeg")`` -> ``images/Mon_Jan_06_2025_2.jpg``
        """
        name = f"{cls.sanitize_filename(entry_date)}_{index}.{cls.extension_for_mime(mime_type)}"
        return f"{ExportConfig.IMAGES_DIR}/{name}"

    @staticmethod
    def is_inline(ref: str) -> bool:
        return ref[:5].lower() == "data:"

    @staticmethod
    def is_external_url(ref: str) -> bool:
        """Any ``scheme:`` reference (``https:``, ``file:``, ``blob:``, ``content:``).

        Single-letter schemes are Windows drive letters, not URLs.
        """
        return bool(_URL_SCHEME_RE.match(ref))

    @classmethod
    def is_archive_reference(cls, ref: str) -> bool:
        return bool(ref.strip()) and not cls.is_inline(ref) and not cls.is_external_url(ref)

    @staticmethod
    def parse_data_url(ref: str) -> Optional[Tuple[str, bytes]]:
        """
        Decode an inline data URL into ``(mime_type, binary)``.

        Returns None if ``ref`` is not a data URL.

        Raises:
            BackupDecodeError: If the payload is malformed
        """
        if ref[:5].lower() != "data:":
            return None
        header, sep, payload = ref[5:].partition(",")
        if not sep:
            raise BackupDecodeError("Malformed data URL: missing payload separator")

        params = [p.strip() for p in header.split(";")]
        mime_type = params[0].lower() or DEFAULT_MIME_TYPE
        if "base64" in (p.lower() for p in params[1:]):
            cleaned = re.sub(r"\s+", "", payload)
            try:
                return mime_type, base64.b64decode(cleaned, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise BackupDecodeError(f"Malformed base64 image payload: {exc}") from exc
        return mime_type, unquote_to_bytes(payload)

    @staticmethod
    def build_data_url(mime_type: str, content: bytes) -> str:
        encoded = base64.b64encode(content).decode("ascii")
        return f"data:{mime_type};base64,{encoded}"

"""
Test helpers shared by the unit and integration suites.
"""
from .factories import (
    JPEG_BYTES,
    PNG_BYTES,
    data_url,
    make_entry,
    make_zip,
    setup_session,
)

__all__ = [
    "JPEG_BYTES",
    "PNG_BYTES",
    "data_url",
    "make_entry",
    "make_zip",
    "setup_session",
]

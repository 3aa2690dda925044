"""
Structural validation of backup documents.
"""
from dataclasses import dataclass, field
from typing import Any, List

from app.utils.import_export.constants import ExportConfig


@dataclass
class ValidationResult:
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.valid = False
        self.errors.append(message)


def _major(version: str) -> int:
    return int(str(version).split(".", 1)[0])


def validate_import_data(document: Any) -> ValidationResult:
    """
    Validate a parsed backup document before any entry is touched.

    Errors make the whole import fail; warnings are informational.
    """
    result = ValidationResult()

    if not isinstance(document, dict):
        result.add_error("Backup root must be a JSON object")
        return result

    data = document.get("data")
    if data is None:
        result.add_error("Backup is missing the 'data' field")
        return result
    if not isinstance(data, list):
        result.add_error(f"'data' must be an array, got {type(data).__name__}")
        return result

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            result.add_error(f"data[{index}] must be an object")
            continue
        for key in ("date", "mood", "timestamp"):
            value = item.get(key)
            if not isinstance(value, str) or not value.strip():
                result.add_error(f"data[{index}].{key} must be a non-empty string")
        images = item.get("images")
        if images is not None and (
            not isinstance(images, list) or not all(isinstance(ref, str) for ref in images)
        ):
            result.add_error(f"data[{index}].images must be an array of strings")

    version = document.get("version", ExportConfig.LEGACY_VERSION)
    try:
        if _major(version) > _major(ExportConfig.EXPORT_VERSION):
            result.add_error(
                f"Backup version {version} is newer than supported {ExportConfig.EXPORT_VERSION}"
            )
    except (TypeError, ValueError):
        result.warnings.append(f"Unrecognized backup version {version!r}")

    data_type = document.get("dataType")
    if data_type is not None and data_type != ExportConfig.DATA_TYPE:
        result.add_error(f"Unsupported dataType {data_type!r}")

    total = document.get("totalEntries")
    if total is not None and total != len(data):
        result.warnings.append(
            f"totalEntries ({total}) does not match the number of entries ({len(data)})"
        )

    return result


def validate_export_data(document: Any) -> ValidationResult:
    """Sanity-check a manifest before it is written."""
    result = validate_import_data(document)
    if result.valid and document.get("totalEntries") != len(document["data"]):
        result.add_error("totalEntries does not match data length")
    return result

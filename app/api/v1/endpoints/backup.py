"""
Backup export/import endpoints.

Import is two requests: upload returns the counts and a token, and the
commit carries the user's explicit overwrite/merge choice.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile

from app.api.dependencies import get_journal_store
from app.core.logging_config import log_info
from app.models.enums import BackupFormat
from app.schemas.backup import ImportCommitRequest, ImportPreviewResponse
from app.schemas.dto import ImportResultSummary
from app.services.export_service import ExportService
from app.services.import_service import ImportService
from app.services.journal_store import JournalStore
from app.services.pending_imports import PendingImportRegistry, get_pending_imports
from app.services.reconciliation_service import ReconciliationService

router = APIRouter(prefix="/backup", tags=["backup"])


@router.get(
    "/export",
    responses={400: {"description": "No entries to back up"}},
)
def export_backup(
    store: Annotated[JournalStore, Depends(get_journal_store)],
    backup_format: BackupFormat = Query(BackupFormat.JSON, alias="format"),
):
    """Download the whole journal as a JSON or ZIP backup."""
    result = ExportService(store).create_export(backup_format)
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.post(
    "/import",
    response_model=ImportPreviewResponse,
    responses={400: {"description": "Invalid backup file"}},
)
async def upload_backup(
    store: Annotated[JournalStore, Depends(get_journal_store)],
    registry: Annotated[PendingImportRegistry, Depends(get_pending_imports)],
    file: UploadFile = File(...),
):
    """Decode a backup and return the counts the user chooses a policy from."""
    import_service = ImportService()
    # One byte past the limit is enough for decode_backup to reject the upload
    raw = await file.read(import_service.max_file_size_mb * 1024 * 1024 + 1)
    decoded = import_service.decode_backup(raw, file.filename, file.content_type)

    preview = ReconciliationService(store).prepare_import(decoded)
    token = registry.add(decoded)
    log_info(
        "Backup uploaded, awaiting policy choice",
        filename=file.filename,
        local_count=preview.local_count,
        imported_count=preview.imported_count,
    )
    return ImportPreviewResponse(
        **preview.model_dump(),
        token=token,
        source_format=decoded.source_format,
        images_dropped=decoded.images_dropped,
        expires_in=registry.ttl_seconds,
    )


@router.post(
    "/import/{token}/commit",
    response_model=ImportResultSummary,
    responses={404: {"description": "Pending import not found or expired"}},
)
def commit_import(
    token: str,
    payload: ImportCommitRequest,
    store: Annotated[JournalStore, Depends(get_journal_store)],
    registry: Annotated[PendingImportRegistry, Depends(get_pending_imports)],
):
    """Apply the chosen policy to a pending import."""
    decoded = registry.pop(token)
    reconciliation = ReconciliationService(store)
    reconciliation.prepare_import(decoded)
    return reconciliation.commit_import(payload.policy)


@router.delete("/import/{token}", status_code=204)
def cancel_import(
    token: str,
    registry: Annotated[PendingImportRegistry, Depends(get_pending_imports)],
):
    registry.discard(token)

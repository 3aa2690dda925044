"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app import __version__
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.database import init_db
from app.core.exceptions import (
    BackupFormatError,
    DraftNotFoundError,
    EntryNotFoundError,
    ImportSessionNotFoundError,
    MoodJournalError,
    StorageWriteError,
    ValidationError,
)
from app.core.logging_config import log_error, log_warning, setup_logging

# Most specific first; lookup walks this list in order
_ERROR_STATUS = (
    (EntryNotFoundError, status.HTTP_404_NOT_FOUND),
    (DraftNotFoundError, status.HTTP_404_NOT_FOUND),
    (ImportSessionNotFoundError, status.HTTP_404_NOT_FOUND),
    (BackupFormatError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (StorageWriteError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    yield


async def mood_journal_error_handler(request: Request, exc: MoodJournalError) -> JSONResponse:
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for exc_type, code in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            status_code = code
            break

    if status_code >= 500:
        log_error(exc, path=request.url.path)
    else:
        log_warning(f"{type(exc).__name__}: {exc}", path=request.url.path)
    return JSONResponse(status_code=status_code, content={"detail": exc.message or str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )
    app.add_exception_handler(MoodJournalError, mood_journal_error_handler)
    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_app()

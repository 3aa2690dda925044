"""
API v1 router.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import backup, drafts, entries, health

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(entries.router)
api_router.include_router(drafts.router)
api_router.include_router(backup.router)
api_router.include_router(health.router)

"""
Fixtures for API tests: one in-memory database per test.
"""
import pytest
from fastapi.testclient import TestClient

from app.core.database import get_session
from app.main import app
from app.services.pending_imports import PendingImportRegistry, get_pending_imports


@pytest.fixture
def client(session):
    def _get_session():
        yield session

    registry = PendingImportRegistry(ttl_seconds=60)
    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_pending_imports] = lambda: registry
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()

"""
Unit tests for the pending import registry.
"""
import pytest

from app.core.exceptions import ImportSessionNotFoundError
from app.schemas.dto import BackupManifestDTO, DecodedBackup
from app.services.pending_imports import PendingImportRegistry


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def _decoded():
    return DecodedBackup(manifest=BackupManifestDTO(), source_format="json")


def test_add_and_pop():
    registry = PendingImportRegistry(ttl_seconds=60)
    decoded = _decoded()
    token = registry.add(decoded)

    assert len(registry) == 1
    assert registry.pop(token) is decoded
    with pytest.raises(ImportSessionNotFoundError):
        registry.pop(token)


def test_expired_imports_are_discarded():
    clock = FakeClock()
    registry = PendingImportRegistry(ttl_seconds=60, clock=clock)
    token = registry.add(_decoded())

    clock.now += 61
    with pytest.raises(ImportSessionNotFoundError):
        registry.pop(token)
    assert len(registry) == 0


def test_discard():
    registry = PendingImportRegistry(ttl_seconds=60)
    token = registry.add(_decoded())
    assert registry.discard(token) is True
    assert registry.discard(token) is False

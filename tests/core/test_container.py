"""Tests for the service container lifecycle."""
import pytest

from app.core import container as container_module
from app.core.config import settings
from app.core.container import ServiceContainer


@pytest.fixture
def disposals(monkeypatch):
    calls = []

    async def record_dispose():
        calls.append("dispose")

    monkeypatch.setattr(container_module, "dispose_engine", record_dispose)
    return calls


class TestServiceContainer:
    """Startup and shutdown."""

    async def test_initialize_builds_matcher_from_settings(self):
        container = ServiceContainer()
        await container.initialize()

        assert container.face_matcher is not None
        assert container.face_matcher.min_confidence == settings.MIN_MATCH_CONFIDENCE

    async def test_cleanup_drops_matcher_and_disposes_engine(self, disposals):
        container = ServiceContainer()
        await container.initialize()

        await container.cleanup()

        assert container.face_matcher is None
        assert disposals == ["dispose"]

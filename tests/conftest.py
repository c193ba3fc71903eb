"""Shared fixtures for the partner photo matching tests."""
import pytest

from app.services.face_matching import FaceMatcher


@pytest.fixture
def matcher() -> FaceMatcher:
    """Matcher with the production confidence floor."""
    return FaceMatcher(min_confidence=90.0)

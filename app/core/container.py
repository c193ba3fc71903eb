"""Service container for dependency injection."""
from typing import Optional

from app.core.config import settings
from app.core.logging import get_logger
from app.infrastructure.database.session import dispose_engine
from app.services.face_matching import FaceMatcher

logger = get_logger(__name__)


class ServiceContainer:
    """Container for application services.

    Holds the services that live for the whole process. Request-scoped
    collaborators (database sessions, photo stores) are built by the FastAPI
    dependency providers instead.

    Example:
        ```python
        container = ServiceContainer()
        await container.initialize()

        matcher = container.face_matcher
        ```
    """

    def __init__(self) -> None:
        """Initialize empty container."""
        self.face_matcher: Optional[FaceMatcher] = None

    async def initialize(self) -> None:
        """Initialize all services in the correct order."""
        self.face_matcher = FaceMatcher(
            min_confidence=settings.MIN_MATCH_CONFIDENCE,
            confidence_decimals=settings.CONFIDENCE_DECIMALS,
        )
        logger.info(
            "Face matcher ready",
            min_confidence=self.face_matcher.min_confidence,
        )

    async def cleanup(self) -> None:
        """Cleanup all services in reverse order of initialization."""
        self.face_matcher = None
        await dispose_engine()


# Global container instance
container = ServiceContainer()

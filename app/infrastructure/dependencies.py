"""FastAPI dependency providers."""
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, HTTPException

from app.core.container import ServiceContainer, container
from app.core.exceptions import ServiceNotInitializedError
from app.domain.interfaces.storage.photo_store import PhotoStore
from app.infrastructure.database.dependencies import get_photo_store
from app.services.face_matching import FaceMatcher
from app.services.photo_analysis import PhotoAnalysisService


async def get_container() -> ServiceContainer:
    """Dependency provider for the global ServiceContainer instance."""
    if container.face_matcher is None:
        # Attempt to initialize if not already done (e.g., during testing)
        try:
            await container.initialize()
        except Exception as e:
            raise ServiceNotInitializedError(f"Service container could not be initialized: {e}")
    return container


async def get_face_matcher(
    container: ServiceContainer = Depends(get_container)
) -> AsyncGenerator[FaceMatcher, None]:
    """Provide the shared face matcher.

    Yields:
        FaceMatcher: Initialized face matcher

    Raises:
        ServiceNotInitializedError: If the matcher is not initialized
    """
    if container.face_matcher is None:
        raise ServiceNotInitializedError("Face matcher not initialized")
    yield container.face_matcher


async def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id")
) -> str:
    """Identify the caller from the header set by the authentication gateway.

    Raises:
        HTTPException: 401 if the header is missing
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id


async def get_photo_analysis_service(
    matcher: FaceMatcher = Depends(get_face_matcher),
    photo_store: PhotoStore = Depends(get_photo_store),
) -> AsyncGenerator[PhotoAnalysisService, None]:
    """Provide the photo analysis service.

    Args:
        matcher: Shared face matcher
        photo_store: Photo store bound to the request's database session

    Yields:
        PhotoAnalysisService: Request-scoped analysis service
    """
    yield PhotoAnalysisService(matcher=matcher, photo_store=photo_store)

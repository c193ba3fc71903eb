"""Database dependencies for FastAPI."""
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.interfaces.storage.photo_store import PhotoStore
from app.infrastructure.database.photo_store import SqlAlchemyPhotoStore
from app.infrastructure.database.session import get_db_session


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession: Database session
    """
    async with get_db_session() as session:
        yield session


async def get_photo_store(
    session: AsyncSession = Depends(get_session)
) -> PhotoStore:
    """Get a photo store bound to the request's session.

    Args:
        session: Database session

    Returns:
        PhotoStore: Database-backed photo store
    """
    return SqlAlchemyPhotoStore(session)

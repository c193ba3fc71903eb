"""Database repositories for partners and partner photos."""
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.models import Partner, PartnerPhoto


class PartnerRepository:
    """Repository for partner operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            session: Database session
        """
        self._session = session

    async def get_for_user(self, partner_id: UUID, user_id: UUID) -> Optional[Partner]:
        """Get a partner by ID, scoped to its owner.

        Args:
            partner_id: Partner identifier
            user_id: Owning user identifier

        Returns:
            Optional[Partner]: Found partner, or None
        """
        stmt = select(Partner).where(
            Partner.id == partner_id,
            Partner.user_id == user_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: UUID,
        exclude_id: Optional[UUID] = None
    ) -> List[Partner]:
        """List all partners of a user.

        Args:
            user_id: Owning user identifier
            exclude_id: Partner to leave out (optional)

        Returns:
            List[Partner]: Found partners
        """
        stmt = select(Partner).where(Partner.user_id == user_id)
        if exclude_id is not None:
            stmt = stmt.where(Partner.id != exclude_id)
        stmt = stmt.order_by(Partner.created_at)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())


class PartnerPhotoRepository:
    """Repository for partner photo operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            session: Database session
        """
        self._session = session

    async def list_with_descriptors(self, partner_ids: Sequence[UUID]) -> List[PartnerPhoto]:
        """Get photos of the given partners that have a face descriptor.

        Args:
            partner_ids: Partner identifiers

        Returns:
            List[PartnerPhoto]: Found photo records
        """
        if not partner_ids:
            return []
        stmt = (
            select(PartnerPhoto)
            .where(
                PartnerPhoto.partner_id.in_(partner_ids),
                PartnerPhoto.face_descriptor.is_not(None)
            )
            .order_by(PartnerPhoto.uploaded_at)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

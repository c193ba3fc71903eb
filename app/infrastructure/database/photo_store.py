"""PhotoStore implementation backed by the SQLAlchemy repositories."""
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.domain.entities.photo import Partner, PhotoRecord
from app.domain.interfaces.storage.photo_store import PhotoStore
from app.infrastructure.database import models
from app.infrastructure.database.repositories import PartnerPhotoRepository, PartnerRepository

logger = get_logger(__name__)


def _parse_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _to_partner(row: models.Partner) -> Partner:
    return Partner(
        id=str(row.id),
        user_id=str(row.user_id),
        first_name=row.first_name,
        last_name=row.last_name,
        profile_picture_storage_path=row.profile_picture_storage_path,
        black_flag=bool(row.black_flag),
    )


def _to_photo_record(row: models.PartnerPhoto) -> PhotoRecord:
    return PhotoRecord(
        id=str(row.id),
        partner_id=str(row.partner_id),
        face_descriptor=row.face_descriptor,
        storage_path=row.storage_path,
    )


class SqlAlchemyPhotoStore(PhotoStore):
    """Loads partners and photos from the relational database."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the store.

        Args:
            session: Database session
        """
        self.partners = PartnerRepository(session)
        self.photos = PartnerPhotoRepository(session)

    async def get_partner(self, user_id: str, partner_id: str) -> Optional[Partner]:
        user_uuid = _parse_uuid(user_id)
        partner_uuid = _parse_uuid(partner_id)
        if user_uuid is None or partner_uuid is None:
            logger.debug("Malformed identifier", user_id=user_id, partner_id=partner_id)
            return None
        row = await self.partners.get_for_user(partner_uuid, user_uuid)
        return _to_partner(row) if row else None

    async def list_partners(
        self,
        user_id: str,
        exclude_partner_id: Optional[str] = None,
    ) -> List[Partner]:
        user_uuid = _parse_uuid(user_id)
        if user_uuid is None:
            logger.debug("Malformed user identifier", user_id=user_id)
            return []
        exclude_uuid = _parse_uuid(exclude_partner_id) if exclude_partner_id else None
        rows = await self.partners.list_for_user(user_uuid, exclude_id=exclude_uuid)
        return [_to_partner(row) for row in rows]

    async def list_photos_with_descriptors(
        self,
        partner_ids: Sequence[str],
    ) -> List[PhotoRecord]:
        partner_uuids = [uuid for uuid in map(_parse_uuid, partner_ids) if uuid is not None]
        rows = await self.photos.list_with_descriptors(partner_uuids)
        records = [_to_photo_record(row) for row in rows]
        # Stored values that do not decode to a vector count as missing
        return [record for record in records if record.face_descriptor is not None]

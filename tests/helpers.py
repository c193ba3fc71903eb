"""Builders and in-memory doubles shared by the test modules."""
from typing import Iterable, List, Optional, Sequence

from app.domain.entities.photo import Partner, PhotoRecord
from app.domain.interfaces.storage.photo_store import PhotoStore
from app.domain.value_objects.matching import EnrichedFaceMatch, FaceMatch

USER_ID = "2f1c4b8e-7a57-4a0b-9d7e-1c3f5e9a0b11"
OTHER_USER_ID = "9a8b7c6d-5e4f-4a3b-8c2d-1e0f9a8b7c6d"

QUERY = [0.5, 0.5, 0.5, 0.5]
# Euclidean distance 0.0625 from QUERY, similarity 0.9375
NEAR = [0.5, 0.5, 0.5, 0.5625]
# Euclidean distance 1.0 from QUERY, similarity 0.0
FAR = [0.0, 0.0, 0.0, 0.0]


class InMemoryPhotoStore(PhotoStore):
    """PhotoStore over plain lists."""

    def __init__(
        self,
        partners: Iterable[Partner] = (),
        photos: Iterable[PhotoRecord] = (),
    ) -> None:
        self.partners = list(partners)
        self.photos = list(photos)
        self.calls: List[str] = []

    async def get_partner(self, user_id: str, partner_id: str) -> Optional[Partner]:
        self.calls.append("get_partner")
        for partner in self.partners:
            if partner.id == partner_id and partner.user_id == user_id:
                return partner
        return None

    async def list_partners(
        self,
        user_id: str,
        exclude_partner_id: Optional[str] = None,
    ) -> List[Partner]:
        self.calls.append("list_partners")
        return [
            partner for partner in self.partners
            if partner.user_id == user_id and partner.id != exclude_partner_id
        ]

    async def list_photos_with_descriptors(
        self,
        partner_ids: Sequence[str],
    ) -> List[PhotoRecord]:
        self.calls.append("list_photos_with_descriptors")
        return [
            photo for photo in self.photos
            if photo.partner_id in partner_ids and photo.face_descriptor is not None
        ]


def make_partner(partner_id: str, user_id: str = USER_ID, **fields) -> Partner:
    return Partner(id=partner_id, user_id=user_id, **fields)


def make_photo(photo_id: str, partner_id: str, descriptor=None) -> PhotoRecord:
    return PhotoRecord(id=photo_id, partner_id=partner_id, face_descriptor=descriptor)


def make_match(photo_id: str, partner_id: str, confidence: float) -> FaceMatch:
    return FaceMatch(
        photo_id=photo_id,
        partner_id=partner_id,
        similarity=confidence / 100,
        confidence=confidence,
    )


def make_enriched_match(
    photo_id: str,
    partner_id: str,
    confidence: float,
    partner_name: Optional[str] = None,
) -> EnrichedFaceMatch:
    return EnrichedFaceMatch(
        photo_id=photo_id,
        partner_id=partner_id,
        similarity=confidence / 100,
        confidence=confidence,
        partner_name=partner_name,
    )

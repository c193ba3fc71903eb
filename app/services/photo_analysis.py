"""Photo analysis service tying the face matcher and upload policy to stored photos."""
from typing import Any, Dict, List, Mapping, Sequence

from app.core.exceptions import PartnerNotFoundError
from app.core.logging import get_logger
from app.domain.entities.photo import Partner, PhotoRecord
from app.domain.interfaces.storage.photo_store import PhotoStore
from app.domain.value_objects.matching import (
    EnrichedFaceMatch,
    FaceMatch,
    MatchResult,
    NoPartnerUploadAnalysis,
    PhotoUploadAnalysis,
)
from app.services.face_matching import FaceMatcher, validate_query_descriptor
from app.services.upload_decision import analyze_for_partner, analyze_without_partner

logger = get_logger(__name__)


def enrich_matches(
    matches: Sequence[FaceMatch],
    partners: Mapping[str, Partner],
) -> List[EnrichedFaceMatch]:
    """Attach the owning partner's display fields to each match.

    Args:
        matches: Matches produced by the face matcher
        partners: Partners keyed by identifier

    Returns:
        List of enriched matches in the same order
    """
    enriched = []
    for match in matches:
        partner = partners.get(match.partner_id)
        enriched.append(
            EnrichedFaceMatch(
                **match.model_dump(),
                partner_name=partner.display_name if partner else None,
                partner_profile_picture=partner.profile_picture_storage_path if partner else None,
                black_flag=partner.black_flag if partner else False,
            )
        )
    return enriched


def _has_descriptors(photos: Sequence[PhotoRecord]) -> bool:
    return any(photo.face_descriptor is not None for photo in photos)


def _summary(matches: Sequence[FaceMatch]) -> Dict[str, Any]:
    summary: Dict[str, Any] = {"match_count": len(matches)}
    if matches:
        summary["similarity_scores"] = [match.similarity for match in matches]
    return summary


class PhotoAnalysisService:
    """Service for deciding what to do with a newly uploaded photo.

    This service:
    1. Loads the candidate photos from the photo store
    2. Uses the FaceMatcher to find similar faces in each candidate pool
    3. Attaches partner display fields to matches against other partners
    4. Applies the upload decision policy

    Example:
        ```python
        service = PhotoAnalysisService(FaceMatcher(), photo_store)
        analysis = await service.analyze_partner_upload(
            user_id="user-1",
            partner_id="partner-1",
            face_descriptor=descriptor,
        )
        ```
    """

    def __init__(self, matcher: FaceMatcher, photo_store: PhotoStore) -> None:
        """Initialize the photo analysis service.

        Args:
            matcher: Face matcher used for both candidate pools
            photo_store: Read-only access to partners and their photos
        """
        self.matcher = matcher
        self.photo_store = photo_store

    async def analyze_partner_upload(
        self,
        user_id: str,
        partner_id: str,
        face_descriptor: Sequence[float],
    ) -> PhotoUploadAnalysis:
        """Analyze a photo being uploaded to a specific partner.

        Args:
            user_id: Identifier of the requesting user
            partner_id: Partner the photo is being added to
            face_descriptor: Descriptor of the face found in the upload

        Returns:
            PhotoUploadAnalysis with the decision and both match pools

        Raises:
            InvalidDescriptorError: If the descriptor is unusable
            PartnerNotFoundError: If the partner is not owned by the user
        """
        validate_query_descriptor(face_descriptor)

        partner = await self.photo_store.get_partner(user_id, partner_id)
        if partner is None:
            raise PartnerNotFoundError(
                f"Partner not found: {partner_id}",
                details={"partner_id": partner_id},
            )

        partner_photos = await self.photo_store.list_photos_with_descriptors([partner_id])
        other_partners = await self.photo_store.list_partners(
            user_id, exclude_partner_id=partner_id
        )
        other_partner_photos = await self.photo_store.list_photos_with_descriptors(
            [other.id for other in other_partners]
        )

        partner_result = self.matcher.match_candidates(face_descriptor, partner_photos)
        other_result = self.matcher.match_candidates(face_descriptor, other_partner_photos)
        other_partner_matches = enrich_matches(
            other_result.matches, {other.id: other for other in other_partners}
        )

        analysis = analyze_for_partner(
            partner_matches=partner_result.matches,
            other_partner_matches=other_partner_matches,
            partner_has_other_photos=_has_descriptors(partner_photos),
            other_partners_have_photos=_has_descriptors(other_partner_photos),
        )

        logger.info(
            "Photo upload analysis complete",
            partner_id=partner_id,
            outcome=analysis.outcome,
            decision_type=analysis.decision.type,
            partner_match_status=analysis.partner_match_status.value,
            other_partners_match_status=analysis.other_partners_match_status.value,
            skipped_candidates=partner_result.skipped + other_result.skipped,
            **_summary(analysis.all_matches),
        )
        return analysis

    async def analyze_upload(
        self,
        user_id: str,
        face_descriptor: Sequence[float],
    ) -> NoPartnerUploadAnalysis:
        """Analyze a photo uploaded before any partner was chosen.

        Args:
            user_id: Identifier of the requesting user
            face_descriptor: Descriptor of the face found in the upload

        Returns:
            NoPartnerUploadAnalysis proposing a new partner or listing matches

        Raises:
            InvalidDescriptorError: If the descriptor is unusable
        """
        validate_query_descriptor(face_descriptor)

        partners = await self.photo_store.list_partners(user_id)
        photos = await self.photo_store.list_photos_with_descriptors(
            [partner.id for partner in partners]
        )

        result: MatchResult = self.matcher.match_candidates(face_descriptor, photos)
        matches = enrich_matches(result.matches, {partner.id: partner for partner in partners})
        analysis = analyze_without_partner(matches)

        logger.info(
            "Photo upload analysis complete",
            outcome=analysis.outcome,
            decision_type=analysis.decision.type,
            skipped_candidates=result.skipped,
            **_summary(analysis.matches),
        )
        return analysis

"""Upload decision policy for photos with detected faces.

One rule table, evaluated in order, first match wins:

1. The photo matches other partners' photos -> ``warn_other_partners``
2. The partner has other photos and none of them match -> ``warn_same_person``
3. Otherwise -> ``proceed``

Resemblance to a different partner outranks everything else: a photo that
looks like someone else is more likely misfiled than a new angle of the same
person.

The partner flow and the no-partner flow share this table. The no-partner
flow has no target partner, so rule 2 never applies and ``proceed`` becomes
``create_new``.
"""
from typing import List, Sequence

from app.domain.value_objects.matching import (
    CreateNewDecision,
    EnrichedFaceMatch,
    FaceMatch,
    NoPartnerUploadAnalysis,
    OtherPartnersMatchStatus,
    PartnerMatchStatus,
    PhotoUploadAnalysis,
    ProceedDecision,
    UploadDecision,
    WarnOtherPartnersDecision,
    WarnSamePersonDecision,
)


def _as_enriched(matches: Sequence[FaceMatch]) -> List[EnrichedFaceMatch]:
    """Promote plain matches to enriched ones with no partner details."""
    return [
        match if isinstance(match, EnrichedFaceMatch) else EnrichedFaceMatch(**match.model_dump())
        for match in matches
    ]


def partner_match_status(
    partner_matches: Sequence[FaceMatch],
    partner_has_other_photos: bool,
) -> PartnerMatchStatus:
    if not partner_has_other_photos:
        return PartnerMatchStatus.NO_PHOTOS
    if partner_matches:
        return PartnerMatchStatus.MATCH
    return PartnerMatchStatus.NO_MATCH


def other_partners_match_status(
    other_partner_matches: Sequence[FaceMatch],
    other_partners_have_photos: bool,
) -> OtherPartnersMatchStatus:
    if other_partner_matches:
        return OtherPartnersMatchStatus.MATCH
    if not other_partners_have_photos:
        return OtherPartnersMatchStatus.NO_PHOTOS
    return OtherPartnersMatchStatus.NO_MATCH


def decide(
    partner_matches: Sequence[FaceMatch],
    other_partner_matches: Sequence[FaceMatch],
    partner_has_other_photos: bool,
    other_partners_have_photos: bool = False,
) -> UploadDecision:
    """Pick the outcome for a photo upload.

    Args:
        partner_matches: Matches against the target partner's own photos
        other_partner_matches: Matches against every other partner's photos;
            plain FaceMatch values are promoted without partner details
        partner_has_other_photos: Whether the target partner has any photo
            with a descriptor, matched or not
        other_partners_have_photos: Whether any other partner has a photo with
            a descriptor; reported for diagnostics, never changes the outcome

    Returns:
        Exactly one of ProceedDecision, WarnSamePersonDecision or
        WarnOtherPartnersDecision
    """
    if other_partner_matches:
        return WarnOtherPartnersDecision(matches=_as_enriched(other_partner_matches))

    if partner_has_other_photos and not partner_matches:
        return WarnSamePersonDecision()

    if not partner_has_other_photos:
        return ProceedDecision(reason="no_matches")
    return ProceedDecision(reason="matches_partner_or_no_photos")


def analyze_for_partner(
    partner_matches: Sequence[FaceMatch],
    other_partner_matches: Sequence[FaceMatch],
    partner_has_other_photos: bool,
    other_partners_have_photos: bool = False,
) -> PhotoUploadAnalysis:
    """Decide on an upload to a chosen partner and keep the evidence with it."""
    decision = decide(
        partner_matches,
        other_partner_matches,
        partner_has_other_photos,
        other_partners_have_photos,
    )
    return PhotoUploadAnalysis(
        decision=decision,
        partner_matches=list(partner_matches),
        other_partner_matches=_as_enriched(other_partner_matches),
        partner_has_other_photos=partner_has_other_photos,
        other_partners_have_photos=other_partners_have_photos,
        partner_match_status=partner_match_status(partner_matches, partner_has_other_photos),
        other_partners_match_status=other_partners_match_status(
            other_partner_matches, other_partners_have_photos
        ),
    )


def analyze_without_partner(
    all_partner_matches: Sequence[FaceMatch],
) -> NoPartnerUploadAnalysis:
    """Decide on an upload that has not been attached to a partner yet.

    Every existing partner counts as an "other" partner here.
    """
    decision = decide(
        partner_matches=[],
        other_partner_matches=all_partner_matches,
        partner_has_other_photos=False,
    )
    if isinstance(decision, WarnOtherPartnersDecision):
        return NoPartnerUploadAnalysis(decision=decision, matches=decision.matches)
    return NoPartnerUploadAnalysis(decision=CreateNewDecision(), matches=[])

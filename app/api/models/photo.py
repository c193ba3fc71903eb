"""API specific photo analysis models."""
from typing import List, Union

from pydantic import BaseModel, Field

from app.domain.value_objects.matching import (
    CreateNewDecision,
    EnrichedFaceMatch,
    FaceMatch,
    NoPartnerUploadAnalysis,
    OtherPartnersMatchStatus,
    PartnerMatchStatus,
    PhotoUploadAnalysis,
    UploadDecision,
    WarnOtherPartnersDecision,
)


class PhotoAnalysisRequest(BaseModel):
    """Request model for both /analyze endpoints."""
    face_descriptor: List[float] = Field(
        ...,
        description="Face descriptor extracted from the uploaded photo",
        min_length=1
    )


class PartnerPhotoAnalysisResponse(BaseModel):
    """Response model for the partner-scoped /analyze endpoint."""
    decision: UploadDecision = Field(..., description="What to do with the upload")
    partner_matches: List[FaceMatch] = Field(
        ..., description="Matches among the partner's own photos"
    )
    other_partner_matches: List[EnrichedFaceMatch] = Field(
        ..., description="Matches among other partners' photos"
    )
    partner_has_other_photos: bool = Field(
        ..., description="Whether the partner already has photos with a detected face"
    )
    other_partners_have_photos: bool = Field(
        ..., description="Whether other partners have photos with a detected face"
    )
    partner_match_status: PartnerMatchStatus
    other_partners_match_status: OtherPartnersMatchStatus

    @classmethod
    def from_analysis(cls, analysis: PhotoUploadAnalysis) -> "PartnerPhotoAnalysisResponse":
        """Convert the service layer analysis to the API response model."""
        return cls(
            decision=analysis.decision,
            partner_matches=analysis.partner_matches,
            other_partner_matches=analysis.other_partner_matches,
            partner_has_other_photos=analysis.partner_has_other_photos,
            other_partners_have_photos=analysis.other_partners_have_photos,
            partner_match_status=analysis.partner_match_status,
            other_partners_match_status=analysis.other_partners_match_status,
        )


class PhotoAnalysisResponse(BaseModel):
    """Response model for the /photos/analyze endpoint."""
    decision: Union[CreateNewDecision, WarnOtherPartnersDecision] = Field(
        ..., discriminator="type", description="Create a new partner or pick a matched one"
    )
    matches: List[EnrichedFaceMatch] = Field(
        ..., description="Matches across all of the user's partners"
    )

    @classmethod
    def from_analysis(cls, analysis: NoPartnerUploadAnalysis) -> "PhotoAnalysisResponse":
        """Convert the service layer analysis to the API response model."""
        return cls(decision=analysis.decision, matches=analysis.matches)

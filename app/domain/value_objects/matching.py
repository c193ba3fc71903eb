"""Face matching and upload decision value objects."""
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class FaceMatch(BaseModel):
    """A stored photo whose face is similar enough to the query face."""
    photo_id: str = Field(..., description="Identifier of the matched photo")
    partner_id: str = Field(..., description="Identifier of the partner owning the matched photo")
    similarity: float = Field(..., description="Similarity score (0.0 to 1.0)", ge=0.0, le=1.0)
    confidence: float = Field(..., description="Similarity as a percentage (0-100)", ge=0.0, le=100.0)


class EnrichedFaceMatch(FaceMatch):
    """Face match carrying the owning partner's display fields."""
    partner_name: Optional[str] = Field(None, description="Display name of the matched partner")
    partner_profile_picture: Optional[str] = Field(
        None, description="Storage path of the matched partner's profile picture"
    )
    black_flag: bool = Field(False, description="Whether the matched partner is flagged")


class MatchResult(BaseModel):
    """Matches for one query face plus what was left out of the comparison."""
    matches: List[FaceMatch] = Field(default_factory=list, description="Matches, best first")
    compared: int = Field(0, description="Number of candidates actually compared")
    skipped_missing: int = Field(0, description="Candidates skipped for having no descriptor")
    skipped_mismatched: int = Field(
        0, description="Candidates skipped for a descriptor of a different length"
    )

    @property
    def skipped(self) -> int:
        return self.skipped_missing + self.skipped_mismatched


class PartnerMatchStatus(str, Enum):
    """How the upload relates to the target partner's own photos."""
    NO_PHOTOS = "no_photos"
    MATCH = "match"
    NO_MATCH = "no_match"


class OtherPartnersMatchStatus(str, Enum):
    """How the upload relates to every other partner's photos."""
    NO_PHOTOS = "no_photos"
    MATCH = "match"
    NO_MATCH = "no_match"


class ProceedDecision(BaseModel):
    """Nothing blocks the upload."""
    type: Literal["proceed"] = "proceed"
    reason: Literal["no_matches", "matches_partner_or_no_photos"] = "no_matches"


class WarnSamePersonDecision(BaseModel):
    """The photo does not look like the partner's existing photos."""
    type: Literal["warn_same_person"] = "warn_same_person"
    reason: Literal["doesnt_match_partner_has_photos"] = "doesnt_match_partner_has_photos"


class WarnOtherPartnersDecision(BaseModel):
    """The photo resembles photos of one or more other partners."""
    type: Literal["warn_other_partners"] = "warn_other_partners"
    reason: Literal["matches_other_partners"] = "matches_other_partners"
    matches: List[EnrichedFaceMatch] = Field(
        ..., min_length=1, description="Other-partner matches backing the warning"
    )


class CreateNewDecision(BaseModel):
    """No partner matched; offer to create a new partner from this photo."""
    type: Literal["create_new"] = "create_new"
    reason: Literal["no_matches"] = "no_matches"


UploadDecision = Annotated[
    Union[ProceedDecision, WarnSamePersonDecision, WarnOtherPartnersDecision, CreateNewDecision],
    Field(discriminator="type"),
]

AnalysisOutcome = Literal[
    "matches_found", "no_matches", "same_person_warning", "other_partners_warning"
]


class PhotoUploadAnalysis(BaseModel):
    """Decision for an upload to a known partner, with the evidence behind it."""
    decision: UploadDecision
    partner_matches: List[FaceMatch] = Field(default_factory=list)
    other_partner_matches: List[EnrichedFaceMatch] = Field(default_factory=list)
    partner_has_other_photos: bool
    other_partners_have_photos: bool = False
    partner_match_status: PartnerMatchStatus
    other_partners_match_status: OtherPartnersMatchStatus

    @property
    def outcome(self) -> AnalysisOutcome:
        if self.decision.type == "warn_same_person":
            return "same_person_warning"
        if self.decision.type == "warn_other_partners":
            return "other_partners_warning"
        if self.partner_matches or self.other_partner_matches:
            return "matches_found"
        return "no_matches"

    @property
    def all_matches(self) -> List[FaceMatch]:
        return [*self.partner_matches, *self.other_partner_matches]


class NoPartnerUploadAnalysis(BaseModel):
    """Decision for an upload that is not yet attached to a partner."""
    decision: Union[CreateNewDecision, WarnOtherPartnersDecision] = Field(
        ..., discriminator="type"
    )
    matches: List[EnrichedFaceMatch] = Field(default_factory=list)

    @property
    def outcome(self) -> AnalysisOutcome:
        return "matches_found" if self.matches else "no_matches"

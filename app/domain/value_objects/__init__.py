"""Value objects package."""
from .matching import (
    CreateNewDecision,
    EnrichedFaceMatch,
    FaceMatch,
    MatchResult,
    NoPartnerUploadAnalysis,
    OtherPartnersMatchStatus,
    PartnerMatchStatus,
    PhotoUploadAnalysis,
    ProceedDecision,
    UploadDecision,
    WarnOtherPartnersDecision,
    WarnSamePersonDecision,
)

__all__ = [
    "CreateNewDecision",
    "EnrichedFaceMatch",
    "FaceMatch",
    "MatchResult",
    "NoPartnerUploadAnalysis",
    "OtherPartnersMatchStatus",
    "PartnerMatchStatus",
    "PhotoUploadAnalysis",
    "ProceedDecision",
    "UploadDecision",
    "WarnOtherPartnersDecision",
    "WarnSamePersonDecision",
]

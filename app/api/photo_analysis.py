"""Photo analysis API endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from app.api.models.photo import (
    PartnerPhotoAnalysisResponse,
    PhotoAnalysisRequest,
    PhotoAnalysisResponse,
)
from app.core.exceptions import InvalidDescriptorError, PartnerNotFoundError
from app.core.logging import get_logger
from app.infrastructure.dependencies import (
    get_current_user_id,
    get_photo_analysis_service,
)
from app.services.photo_analysis import PhotoAnalysisService

logger = get_logger(__name__)
router = APIRouter(
    tags=["photo-analysis"],
    responses={
        401: {"description": "Unauthorized"},
        500: {"description": "Internal server error"}
    }
)


@router.post(
    "/partners/{partner_id}/photos/analyze",
    response_model=PartnerPhotoAnalysisResponse,
    summary="Analyze a photo upload for a partner",
    description=(
        "Compares the uploaded face against the partner's photos and every other "
        "partner's photos, and decides whether to proceed or warn the user."
    ),
    responses={
        200: {
            "description": "Photo analyzed",
            "content": {
                "application/json": {
                    "example": {
                        "decision": {
                            "type": "warn_other_partners",
                            "reason": "matches_other_partners",
                            "matches": [
                                {
                                    "photo_id": "0b6f7e0c-3c1a-4d1e-9a7e-2f0d1f3b9c11",
                                    "partner_id": "5d2c8a4e-8f1b-4a57-b1c2-6a9e0e7d4f20",
                                    "similarity": 0.94,
                                    "confidence": 94.0,
                                    "partner_name": "Alex Smith",
                                    "partner_profile_picture": "partners/5d2c/profile.jpg",
                                    "black_flag": False,
                                }
                            ],
                        },
                        "partner_matches": [],
                        "other_partner_matches": ["..."],
                        "partner_has_other_photos": False,
                        "other_partners_have_photos": True,
                        "partner_match_status": "no_photos",
                        "other_partners_match_status": "match",
                    }
                }
            },
        },
        404: {
            "description": "Partner not found",
            "content": {
                "application/json": {
                    "example": {"detail": "Partner not found"}
                }
            },
        },
    },
)
async def analyze_partner_photo(
    partner_id: str,
    request: PhotoAnalysisRequest,
    user_id: str = Depends(get_current_user_id),
    service: PhotoAnalysisService = Depends(get_photo_analysis_service)
) -> PartnerPhotoAnalysisResponse:
    """Analyze a photo being uploaded to a specific partner.

    Args:
        partner_id: Partner the photo is being added to
        request: Request carrying the uploaded face descriptor
        user_id: Identifier of the requesting user
        service: Photo analysis service provided by dependency injection

    Returns:
        PartnerPhotoAnalysisResponse with the decision and the matches behind it

    Raises:
        HTTPException: If the partner is not found or processing fails
    """
    logger.info(
        "Photo analyze request received",
        partner_id=partner_id,
        descriptor_length=len(request.face_descriptor)
    )
    try:
        analysis = await service.analyze_partner_upload(
            user_id=user_id,
            partner_id=partner_id,
            face_descriptor=request.face_descriptor,
        )
        return PartnerPhotoAnalysisResponse.from_analysis(analysis)

    except PartnerNotFoundError as e:
        logger.warning("Partner not found", partner_id=partner_id, error=str(e))
        raise HTTPException(status_code=404, detail="Partner not found")
    except InvalidDescriptorError as e:
        logger.error("Invalid face descriptor reached the matcher", error=str(e), details=e.details)
        raise HTTPException(status_code=500, detail="Internal server error")
    except SQLAlchemyError as e:
        logger.error("Failed to fetch partner photos", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch partner photos")
    except Exception as e:
        logger.error("Unexpected error during photo analysis",
                     error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/photos/analyze",
    response_model=PhotoAnalysisResponse,
    summary="Analyze a photo upload without a partner",
    description=(
        "Compares the uploaded face against all of the user's partners and either "
        "proposes creating a new partner or lists the partners it resembles."
    ),
    responses={
        200: {
            "description": "Photo analyzed",
            "content": {
                "application/json": {
                    "example": {
                        "decision": {"type": "create_new", "reason": "no_matches"},
                        "matches": [],
                    }
                }
            },
        },
    },
)
async def analyze_photo(
    request: PhotoAnalysisRequest,
    user_id: str = Depends(get_current_user_id),
    service: PhotoAnalysisService = Depends(get_photo_analysis_service)
) -> PhotoAnalysisResponse:
    """Analyze a photo uploaded before a partner was chosen.

    Args:
        request: Request carrying the uploaded face descriptor
        user_id: Identifier of the requesting user
        service: Photo analysis service provided by dependency injection

    Returns:
        PhotoAnalysisResponse with the decision and any matched partners

    Raises:
        HTTPException: If processing fails
    """
    try:
        analysis = await service.analyze_upload(
            user_id=user_id,
            face_descriptor=request.face_descriptor,
        )
        return PhotoAnalysisResponse.from_analysis(analysis)

    except InvalidDescriptorError as e:
        logger.error("Invalid face descriptor reached the matcher", error=str(e), details=e.details)
        raise HTTPException(status_code=500, detail="Internal server error")
    except SQLAlchemyError as e:
        logger.error("Failed to fetch photos", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch photos")
    except Exception as e:
        logger.error("Unexpected error during photo analysis",
                     error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

"""Core partner and photo domain entities."""
import json
from typing import Any, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.logging import get_logger

logger = get_logger(__name__)


def coerce_descriptor(value: Any) -> Optional[np.ndarray]:
    """Convert a stored face descriptor into a flat float array.

    Descriptors live in a JSON column and may come back either as a list or as
    a JSON-encoded string. Anything that does not decode to a one-dimensional
    numeric array is treated as missing.

    Args:
        value: Raw descriptor value as loaded from storage

    Returns:
        Optional[np.ndarray]: Float64 array, or None if the value is unusable
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError as e:
            logger.warning("Failed to parse face descriptor", error=str(e))
            return None
    try:
        descriptor = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        logger.warning(
            "Invalid face descriptor type",
            descriptor_type=type(value).__name__,
            error=str(e),
        )
        return None
    if descriptor.ndim != 1:
        logger.warning("Face descriptor is not a flat vector", shape=descriptor.shape)
        return None
    return descriptor


class Partner(BaseModel):
    """A partner record owned by a user."""
    id: str = Field(..., description="Partner identifier")
    user_id: str = Field(..., description="Identifier of the owning user")
    first_name: Optional[str] = Field(None, description="Partner first name")
    last_name: Optional[str] = Field(None, description="Partner last name")
    profile_picture_storage_path: Optional[str] = Field(
        None, description="Storage path of the partner profile picture"
    )
    black_flag: bool = Field(False, description="Whether the user flagged this partner")

    @property
    def display_name(self) -> Optional[str]:
        """Full name for presentation, or None when no name is set."""
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or None


class PhotoRecord(BaseModel):
    """A stored photo belonging to exactly one partner."""
    id: str = Field(..., description="Photo identifier")
    partner_id: str = Field(..., description="Identifier of the owning partner")
    face_descriptor: Optional[np.ndarray] = Field(
        None, description="Face embedding extracted at upload time"
    )
    storage_path: Optional[str] = Field(None, description="Storage path of the photo file")

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("face_descriptor", mode="before")
    @classmethod
    def validate_face_descriptor(cls, v: Any) -> Optional[np.ndarray]:
        """Validate and convert the stored descriptor to a numpy array."""
        return coerce_descriptor(v)

"""Face matching service for comparing a query face against stored partner photos.

Similarity is derived from the Euclidean distance between two face
descriptors and clamped to the 0-1 range::

    similarity = max(0, 1 - min(distance, 1))

Identical descriptors score 1.0 and any distance of 1.0 or more scores 0.0,
so "somewhat different" and "very different" faces are indistinguishable past
that point. That is fine for a threshold-gated accept/reject decision.

Example:
    ```python
    matcher = FaceMatcher(min_confidence=90.0)
    matches = matcher.find_matches(descriptor, partner_photos)
    ```
"""
from typing import Iterable, List, Optional, Sequence

import numpy as np

from app.core.config import settings
from app.core.exceptions import DescriptorLengthMismatchError, InvalidDescriptorError
from app.core.logging import get_logger
from app.domain.entities.photo import PhotoRecord
from app.domain.value_objects.matching import FaceMatch, MatchResult

logger = get_logger(__name__)


def validate_query_descriptor(descriptor: Optional[Sequence[float]]) -> np.ndarray:
    """Convert the query descriptor to a float array, failing fast on bad input.

    Raises:
        InvalidDescriptorError: If the descriptor is missing, empty, not a flat
            vector, or contains non-numeric or non-finite values
    """
    if descriptor is None:
        raise InvalidDescriptorError("Face descriptor is required")
    try:
        query = np.asarray(descriptor, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidDescriptorError(f"Face descriptor must be numeric: {e}")
    if query.ndim != 1:
        raise InvalidDescriptorError(
            "Face descriptor must be a flat vector",
            details={"shape": query.shape},
        )
    if query.size == 0:
        raise InvalidDescriptorError("Face descriptor must not be empty")
    if not np.all(np.isfinite(query)):
        raise InvalidDescriptorError("Face descriptor contains non-finite values")
    return query


class FaceMatcher:
    """Ranks stored photos by how closely their face resembles a query face.

    Only candidates whose confidence reaches ``min_confidence`` are returned.
    The matcher holds no state beyond its threshold and is safe to share
    between concurrent requests.
    """

    def __init__(
        self,
        min_confidence: Optional[float] = None,
        confidence_decimals: Optional[int] = None,
    ) -> None:
        """Initialize the matcher.

        Args:
            min_confidence: Minimum confidence percentage (0-100) for a match,
                defaults to ``settings.MIN_MATCH_CONFIDENCE``
            confidence_decimals: Rounding applied to the reported confidence,
                defaults to ``settings.CONFIDENCE_DECIMALS``
        """
        if min_confidence is None:
            min_confidence = settings.MIN_MATCH_CONFIDENCE
        if not 0.0 <= min_confidence <= 100.0:
            raise ValueError(f"min_confidence must be between 0 and 100, got {min_confidence}")
        self.min_confidence = min_confidence
        self.confidence_decimals = (
            settings.CONFIDENCE_DECIMALS if confidence_decimals is None else confidence_decimals
        )

    @property
    def min_similarity(self) -> float:
        return self.min_confidence / 100.0

    @staticmethod
    def calculate_similarity(query: np.ndarray, candidate: np.ndarray) -> float:
        """Similarity between two descriptors in the 0-1 range.

        Raises:
            DescriptorLengthMismatchError: If the descriptors differ in length
        """
        if query.shape != candidate.shape:
            raise DescriptorLengthMismatchError(expected=query.size, actual=candidate.size)
        distance = float(np.linalg.norm(query - candidate))
        return max(0.0, 1.0 - min(distance, 1.0))

    def is_match(self, similarity: float) -> bool:
        return similarity >= self.min_similarity

    def match_candidates(
        self,
        query_descriptor: Sequence[float],
        candidates: Iterable[PhotoRecord],
    ) -> MatchResult:
        """Compare a query face against candidate photos.

        Candidates without a descriptor, or with one of a different length,
        are skipped and counted rather than failing the whole batch.

        Args:
            query_descriptor: Face descriptor of the uploaded photo
            candidates: Stored photos to compare against

        Returns:
            MatchResult with matches sorted by descending similarity

        Raises:
            InvalidDescriptorError: If the query descriptor is unusable
        """
        query = validate_query_descriptor(query_descriptor)

        matches: List[FaceMatch] = []
        compared = 0
        skipped_missing = 0
        skipped_mismatched = 0

        for photo in candidates:
            if photo.face_descriptor is None:
                skipped_missing += 1
                continue

            try:
                similarity = self.calculate_similarity(query, photo.face_descriptor)
            except DescriptorLengthMismatchError as e:
                skipped_mismatched += 1
                logger.warning(
                    "Skipping photo with incompatible face descriptor",
                    photo_id=photo.id,
                    partner_id=photo.partner_id,
                    expected_length=e.expected,
                    actual_length=e.actual,
                )
                continue

            compared += 1
            if self.is_match(similarity):
                matches.append(
                    FaceMatch(
                        photo_id=photo.id,
                        partner_id=photo.partner_id,
                        similarity=similarity,
                        confidence=round(similarity * 100, self.confidence_decimals),
                    )
                )

        # sorted() is stable, equal scores keep candidate order
        matches = sorted(matches, key=lambda match: match.similarity, reverse=True)

        logger.debug(
            "Face matching complete",
            compared=compared,
            matches_count=len(matches),
            skipped_missing=skipped_missing,
            skipped_mismatched=skipped_mismatched,
            min_confidence=self.min_confidence,
        )

        return MatchResult(
            matches=matches,
            compared=compared,
            skipped_missing=skipped_missing,
            skipped_mismatched=skipped_mismatched,
        )

    def find_matches(
        self,
        query_descriptor: Sequence[float],
        candidates: Iterable[PhotoRecord],
    ) -> List[FaceMatch]:
        """Matches at or above the confidence floor, best first."""
        return self.match_candidates(query_descriptor, candidates).matches

"""Custom exceptions for the partner photo matching service."""
from typing import Optional


class FaceMatchingError(Exception):
    """Base exception for face matching operations."""

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize face matching error.

        Args:
            message: Error description
            details: Additional error context
        """
        super().__init__(message)
        self.details = details or {}


class InvalidDescriptorError(FaceMatchingError):
    """Raised when the query face descriptor is missing, empty or malformed."""
    pass


class DescriptorLengthMismatchError(FaceMatchingError):
    """Raised when two face descriptors have different lengths.

    The matcher skips the offending candidate; this never reaches API callers.
    """

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Descriptor length mismatch: expected {expected}, got {actual}",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class PartnerNotFoundError(FaceMatchingError):
    """Raised when the target partner does not exist or belongs to another user."""
    pass


class ServiceNotInitializedError(FaceMatchingError):
    """Raised when a required service has not been initialized in the container."""
    pass

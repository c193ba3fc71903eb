"""Service interfaces package."""
from .storage.photo_store import PhotoStore

__all__ = ["PhotoStore"]

"""Photo store interface for loading partners and their face descriptors."""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ...entities.photo import Partner, PhotoRecord


class PhotoStore(ABC):
    """Read-only access to partners and their stored photos."""

    @abstractmethod
    async def get_partner(self, user_id: str, partner_id: str) -> Optional[Partner]:
        """
        Get a partner owned by the given user.

        Args:
            user_id: Identifier of the requesting user
            partner_id: Identifier of the partner

        Returns:
            The partner, or None if it does not exist or belongs to another user
        """
        pass

    @abstractmethod
    async def list_partners(
        self,
        user_id: str,
        exclude_partner_id: Optional[str] = None,
    ) -> List[Partner]:
        """
        List the partners owned by a user.

        Args:
            user_id: Identifier of the requesting user
            exclude_partner_id: Partner to leave out of the result (optional)

        Returns:
            List of partners
        """
        pass

    @abstractmethod
    async def list_photos_with_descriptors(
        self,
        partner_ids: Sequence[str],
    ) -> List[PhotoRecord]:
        """
        List photos of the given partners that have a stored face descriptor.

        Args:
            partner_ids: Partners whose photos to load; an empty sequence yields no photos

        Returns:
            List of photo records
        """
        pass

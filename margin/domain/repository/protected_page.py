"""Protected page repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from margin.domain.model.protected_page import ProtectedPage
from margin.domain.value import PageId


class ProtectedPageRepository(ABC):
    """Repository for ProtectedPage entity."""

    @abstractmethod
    async def find_by_page_id(self, page_id: PageId) -> Optional[ProtectedPage]:
        """Find a protected page by its page ID.

        Args:
            page_id: The page slug

        Returns:
            The page if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, page: ProtectedPage) -> ProtectedPage:
        """Create or replace a protected page."""
        pass

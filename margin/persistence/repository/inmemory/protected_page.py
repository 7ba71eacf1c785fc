"""In-memory protected page repository for testing."""

from typing import Optional

from margin.domain.model.protected_page import ProtectedPage
from margin.domain.repository.protected_page import ProtectedPageRepository
from margin.domain.value import PageId


class InMemoryProtectedPageRepository(ProtectedPageRepository):
    """In-memory implementation of ProtectedPageRepository for testing."""

    def __init__(self) -> None:
        self._pages: dict[PageId, ProtectedPage] = {}

    async def find_by_page_id(self, page_id: PageId) -> Optional[ProtectedPage]:
        """Find a protected page by its page ID."""
        return self._pages.get(page_id)

    async def save(self, page: ProtectedPage) -> ProtectedPage:
        """Create or replace a protected page."""
        self._pages[page.page_id] = page
        return page

"""Provision protected pages use case."""

from pydantic import BaseModel

from margin.application.usecase.base import BaseUseCase
from margin.config import ProtectedPageSeed
from margin.domain.service import PageAuthService
from margin.domain.value import PageId


class ProvisionPagesRequest(BaseModel):
    """Pages to make sure exist."""

    pages: list[ProtectedPageSeed]


class ProvisionPagesResponse(BaseModel):
    """Provisioned page IDs."""

    page_ids: list[str]


class ProvisionPagesUseCase(BaseUseCase):
    """Use case for seeding protected pages from configuration.

    Already salted pages are never modified, so running this on every
    startup is safe.
    """

    def __init__(self, page_auth_service: PageAuthService) -> None:
        """Initialize provision pages use case.

        Args:
            page_auth_service: Page auth domain service
        """
        self.page_auth_service = page_auth_service

    async def execute(self, request: ProvisionPagesRequest) -> ProvisionPagesResponse:
        """Create or upgrade every configured page.

        Args:
            request: Page seeds

        Returns:
            IDs of the pages that now exist
        """
        page_ids = []
        for seed in request.pages:
            page = await self.page_auth_service.provision_page(
                PageId(seed.page_id), seed.page_name, seed.password
            )
            page_ids.append(page.page_id)
        return ProvisionPagesResponse(page_ids=page_ids)

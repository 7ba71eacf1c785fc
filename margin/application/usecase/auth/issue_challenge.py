"""Issue password challenge use case."""

from datetime import datetime

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.domain.service import PageAuthService
from margin.domain.value import PageId


class IssueChallengeRequest(ApiModel):
    """Issue challenge request."""

    page_id: str


class IssueChallengeResponse(ApiModel):
    """Challenge handed to the client."""

    success: bool = True
    challenge: str
    salt: str
    expires_at: datetime


class IssueChallengeUseCase(BaseUseCase):
    """Use case for starting a page password verification."""

    def __init__(self, page_auth_service: PageAuthService) -> None:
        """Initialize issue challenge use case.

        Args:
            page_auth_service: Page auth domain service
        """
        self.page_auth_service = page_auth_service

    async def execute(self, request: IssueChallengeRequest) -> IssueChallengeResponse:
        """Issue a one-time challenge for a protected page.

        Raises:
            ValidationError: If the page ID is empty
            NotFoundError: If the page is not protected
        """
        issued = await self.page_auth_service.issue_challenge(PageId(request.page_id))
        return IssueChallengeResponse(
            challenge=issued.challenge,
            salt=issued.salt,
            expires_at=issued.expires_at,
        )

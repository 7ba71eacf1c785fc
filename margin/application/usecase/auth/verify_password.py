"""Verify page password use case."""

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.domain.service import PageAuthService


class VerifyPasswordRequest(ApiModel):
    """Challenge response sent by the client.

    ``hash`` is ``sha256(challenge + sha256(salt + password))`` as hex.
    """

    page_id: str | None = None
    hash: str | None = None
    challenge: str | None = None


class VerifyPasswordResponse(ApiModel):
    """Verify password response."""

    success: bool = True
    message: str = "Authentication successful"
    access_token: str


class VerifyPasswordUseCase(BaseUseCase):
    """Use case for exchanging a challenge response for an access token."""

    def __init__(self, page_auth_service: PageAuthService) -> None:
        """Initialize verify password use case.

        Args:
            page_auth_service: Page auth domain service
        """
        self.page_auth_service = page_auth_service

    async def execute(self, request: VerifyPasswordRequest) -> VerifyPasswordResponse:
        """Execute verify password flow.

        Args:
            request: Page ID, challenge and client hash

        Returns:
            Access token scoped to the page

        Raises:
            ValidationError: If a field is missing
            UnauthorizedError: If the challenge or hash is not accepted
            NotFoundError: If the page does not exist
        """
        token = await self.page_auth_service.verify(
            page_id=request.page_id,
            challenge=request.challenge,
            client_hash=request.hash,
        )
        return VerifyPasswordResponse(access_token=token)

"""Check page access use case."""

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.domain.service import PageAuthService
from margin.domain.value import PageId


class CheckPageAccessRequest(ApiModel):
    """Check page access request."""

    page_id: str
    access_token: str | None = None


class CheckPageAccessResponse(ApiModel):
    """Check page access response."""

    success: bool = True
    page_id: str
    authorized: bool


class CheckPageAccessUseCase(BaseUseCase):
    """Use case for validating an access token against a page."""

    def __init__(self, page_auth_service: PageAuthService) -> None:
        self.page_auth_service = page_auth_service

    async def execute(
        self, request: CheckPageAccessRequest
    ) -> CheckPageAccessResponse:
        """Raises UnauthorizedError when the token does not open the page."""
        payload = self.page_auth_service.verify_access(
            request.access_token, PageId(request.page_id)
        )
        return CheckPageAccessResponse(
            page_id=payload.page_id, authorized=payload.authorized
        )

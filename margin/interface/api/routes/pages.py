"""Protected page routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from margin.application.usecase.auth import (
    CheckPageAccessRequest,
    CheckPageAccessResponse,
    CheckPageAccessUseCase,
)

router = APIRouter(prefix="/api/pages", tags=["pages"], route_class=DishkaRoute)


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@router.get("/{page_id}/access", response_model=CheckPageAccessResponse)
async def check_page_access(
    page_id: str,
    check_page_access_use_case: FromDishka[CheckPageAccessUseCase],
    authorization: str | None = Header(default=None),
) -> CheckPageAccessResponse:
    """Check that a bearer token unlocks a page.

    Returns 401 when the token is missing, invalid, expired or issued for
    another page.
    """
    request = CheckPageAccessRequest(
        page_id=page_id, access_token=bearer_token(authorization)
    )
    return await check_page_access_use_case.execute(request)

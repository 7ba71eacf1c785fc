"""Page password routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from margin.application.usecase.auth import (
    IssueChallengeRequest,
    IssueChallengeResponse,
    IssueChallengeUseCase,
    VerifyPasswordRequest,
    VerifyPasswordResponse,
    VerifyPasswordUseCase,
)

router = APIRouter(prefix="/api", tags=["auth"], route_class=DishkaRoute)


@router.get("/auth-challenge/{page_id}", response_model=IssueChallengeResponse)
async def get_auth_challenge(
    page_id: str,
    issue_challenge_use_case: FromDishka[IssueChallengeUseCase],
) -> IssueChallengeResponse:
    """Issue a one-time challenge and the page salt.

    Args:
        page_id: Protected page slug
        issue_challenge_use_case: Issue challenge use case from DI

    Returns:
        Challenge, salt and expiry
    """
    return await issue_challenge_use_case.execute(
        IssueChallengeRequest(page_id=page_id)
    )


@router.post("/verify-password", response_model=VerifyPasswordResponse)
async def verify_password(
    request: VerifyPasswordRequest,
    verify_password_use_case: FromDishka[VerifyPasswordUseCase],
) -> VerifyPasswordResponse:
    """Exchange a challenge response for an access token.

    The client sends ``sha256(challenge + sha256(salt + password))``; the
    password itself never crosses the wire.
    """
    return await verify_password_use_case.execute(request)

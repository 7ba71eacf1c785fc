"""Page password use cases."""

from .check_page_access import (
    CheckPageAccessRequest,
    CheckPageAccessResponse,
    CheckPageAccessUseCase,
)
from .issue_challenge import (
    IssueChallengeRequest,
    IssueChallengeResponse,
    IssueChallengeUseCase,
)
from .verify_password import (
    VerifyPasswordRequest,
    VerifyPasswordResponse,
    VerifyPasswordUseCase,
)

__all__ = [
    "CheckPageAccessRequest",
    "CheckPageAccessResponse",
    "CheckPageAccessUseCase",
    "IssueChallengeRequest",
    "IssueChallengeResponse",
    "IssueChallengeUseCase",
    "VerifyPasswordRequest",
    "VerifyPasswordResponse",
    "VerifyPasswordUseCase",
]

"""JWT access token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ConfigDict, Field

from margin.config import AuthSettings


class AccessTokenPayload(BaseModel):
    """Page access token payload."""

    model_config = ConfigDict(populate_by_name=True)

    page_id: str = Field(alias="pageId")
    authorized: bool
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_access_token(page_id: str, settings: AuthSettings) -> str:
    """Create a signed access token scoped to one page.

    Args:
        page_id: Page the bearer may access
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(
        hours=settings.access_token_expiry_hours
    )

    payload = {
        "pageId": page_id,
        "authorized": True,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str, settings: AuthSettings) -> AccessTokenPayload:
    """Verify and decode an access token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
        return AccessTokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise JWTError("Invalid token")

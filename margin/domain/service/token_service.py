"""Page access token domain service."""

import logfire

from margin.config import AuthSettings
from margin.util.jwt import AccessTokenPayload, create_access_token, verify_access_token

from .base import Service


class PageTokenService(Service):
    """Domain service for page access tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize token service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, page_id: str) -> str:
        """Create a time-boxed access token for a page.

        Args:
            page_id: Page the bearer may access

        Returns:
            JWT token string
        """
        with logfire.span("token_service.create_token", page_id=page_id):
            token = create_access_token(page_id, self.auth_settings)
            logfire.info(
                "Access token created",
                page_id=page_id,
                expiry_hours=self.auth_settings.access_token_expiry_hours,
            )
            return token

    def verify_token(self, token: str) -> AccessTokenPayload:
        """Verify an access token and extract its payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("token_service.verify_token"):
            try:
                payload = verify_access_token(token, self.auth_settings)
                logfire.info("Access token verified", page_id=payload.page_id)
                return payload
            except Exception as e:
                logfire.warn("Access token verification failed", error=str(e))
                raise

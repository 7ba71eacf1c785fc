"""Challenge-response authenticator for password-gated pages."""

from datetime import datetime, timedelta
from typing import Callable

import logfire

from margin.config import AuthSettings
from margin.domain.error import NotFoundError, UnauthorizedError, ValidationError
from margin.domain.model.challenge import Challenge
from margin.domain.model.common import utcnow
from margin.domain.model.protected_page import ProtectedPage
from margin.domain.repository import ChallengeStore, ProtectedPageRepository
from margin.domain.value import IssuedChallenge, PageId
from margin.util.crypto import (
    challenge_response,
    generate_challenge,
    generate_salt,
    hash_password,
    hex_digests_match,
)
from margin.util.jwt import AccessTokenPayload, JWTError

from .base import Service
from .token_service import PageTokenService


class PageAuthService(Service):
    """Verifies page passwords without the password crossing the wire.

    Flow:
    1. ``issue_challenge`` returns a random challenge and the page salt.
    2. The client computes ``h = sha256(challenge + sha256(salt + password))``.
    3. ``verify`` recomputes the same value from the stored password hash,
       compares in constant time and, on success, consumes the challenge and
       issues a 24h access token.
    """

    def __init__(
        self,
        page_repository: ProtectedPageRepository,
        challenge_store: ChallengeStore,
        token_service: PageTokenService,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize page auth service.

        Args:
            page_repository: Protected page repository
            challenge_store: Ephemeral challenge store (process-wide)
            token_service: Access token service
            auth_settings: Authentication settings
            clock: Source of the current time
        """
        self.page_repository = page_repository
        self.challenge_store = challenge_store
        self.token_service = token_service
        self.auth_settings = auth_settings
        self.clock = clock

    async def issue_challenge(self, page_id: PageId) -> IssuedChallenge:
        """Issue a one-time challenge for a protected page.

        Args:
            page_id: Page to unlock

        Returns:
            Challenge value, page salt and expiry

        Raises:
            ValidationError: If page_id is empty
            NotFoundError: If the page is not protected or not provisioned
        """
        if not page_id:
            raise ValidationError("Missing pageId")

        with logfire.span("page_auth_service.issue_challenge", page_id=page_id):
            page = await self.page_repository.find_by_page_id(page_id)
            if page is None or not page.is_provisioned:
                logfire.warn("Challenge requested for unknown page", page_id=page_id)
                raise NotFoundError("Protected page", page_id)

            now = self.clock()
            swept = await self.challenge_store.sweep(now)
            if swept:
                logfire.debug("Expired challenges swept", count=swept)

            challenge = Challenge(
                page_id=page_id,
                value=generate_challenge(),
                salt=page.salt,
                expires_at=now
                + timedelta(seconds=self.auth_settings.challenge_ttl_seconds),
            )
            await self.challenge_store.put(challenge)

            logfire.info(
                "Challenge issued",
                page_id=page_id,
                expires_at=challenge.expires_at.isoformat(),
            )
            return IssuedChallenge(
                challenge=challenge.value,
                salt=challenge.salt,
                expires_at=challenge.expires_at,
            )

    async def verify(
        self,
        page_id: str | None,
        challenge: str | None,
        client_hash: str | None,
    ) -> str:
        """Verify a challenge response and issue an access token.

        Args:
            page_id: Page being unlocked
            challenge: Challenge value previously issued
            client_hash: ``sha256(challenge + sha256(salt + password))`` as hex

        Returns:
            Signed access token scoped to the page

        Raises:
            ValidationError: If any field is missing
            UnauthorizedError: If the challenge is unknown, expired, already
                used, or the hash does not match
            NotFoundError: If the page does not exist
        """
        if not page_id or not challenge or not client_hash:
            raise ValidationError("Missing required fields")
        page_id = PageId(page_id)

        with logfire.span("page_auth_service.verify", page_id=page_id):
            stored = await self.challenge_store.get(page_id, challenge)
            if stored is None:
                logfire.warn("Unknown challenge presented", page_id=page_id)
                raise UnauthorizedError("Invalid or expired challenge")

            if stored.is_expired(self.clock()):
                await self.challenge_store.discard(page_id, challenge)
                logfire.info("Expired challenge presented", page_id=page_id)
                raise UnauthorizedError("Challenge expired")

            page = await self.page_repository.find_by_page_id(page_id)
            if page is None:
                raise NotFoundError("Protected page", page_id)

            expected = challenge_response(challenge, page.password_hash)
            if not hex_digests_match(client_hash, expected):
                if self.auth_settings.burn_challenge_on_failure:
                    await self.challenge_store.discard(page_id, challenge)
                logfire.warn(
                    "Page password verification failed",
                    page_id=page_id,
                    challenge_burned=self.auth_settings.burn_challenge_on_failure,
                )
                raise UnauthorizedError("Invalid authentication")

            # Only one concurrent verifier can take the entry
            if await self.challenge_store.take(page_id, challenge) is None:
                logfire.warn("Challenge already consumed", page_id=page_id)
                raise UnauthorizedError("Invalid or expired challenge")

            logfire.info("Page password verified", page_id=page_id)
            return self.token_service.create_token(page_id)

    def verify_access(self, token: str | None, page_id: PageId) -> AccessTokenPayload:
        """Check that a bearer token grants access to a page.

        Args:
            token: Access token (None when the client sent none)
            page_id: Page being accessed

        Returns:
            Token payload

        Raises:
            UnauthorizedError: If the token is missing, invalid, expired or
                scoped to another page
        """
        if not token:
            raise UnauthorizedError("Access token required")
        try:
            payload = self.token_service.verify_token(token)
        except JWTError as e:
            raise UnauthorizedError(str(e))
        if not payload.authorized or payload.page_id != page_id:
            logfire.warn(
                "Access token scoped to another page",
                page_id=page_id,
                token_page_id=payload.page_id,
            )
            raise UnauthorizedError("Token does not grant access to this page")
        return payload

    async def provision_page(
        self, page_id: PageId, page_name: str, password: str
    ) -> ProtectedPage:
        """Create a protected page, or upgrade a legacy one without a salt.

        Pages that already have a salt are left untouched so a restart never
        rotates a password behind the owner's back.

        Args:
            page_id: Page slug
            page_name: Display label
            password: Plain-text password (only its salted hash is kept)

        Returns:
            The stored page
        """
        if not password:
            raise ValidationError(f"Password required to provision page {page_id}")

        with logfire.span("page_auth_service.provision_page", page_id=page_id):
            existing = await self.page_repository.find_by_page_id(page_id)
            if existing is not None and existing.is_provisioned:
                logfire.info("Protected page already provisioned", page_id=page_id)
                return existing

            salt = generate_salt()
            page = ProtectedPage(
                page_id=page_id,
                page_name=existing.page_name if existing else page_name,
                password_hash=hash_password(salt, password),
                salt=salt,
            )
            saved = await self.page_repository.save(page)
            logfire.info(
                "Protected page upgraded to salted hash"
                if existing
                else "Protected page created",
                page_id=page_id,
            )
            return saved

"""Unit tests for PageTokenService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from margin.config import AuthSettings
from margin.domain.service import PageTokenService
from margin.util.jwt import JWTError


@pytest.fixture
def settings() -> AuthSettings:
    return AuthSettings(jwt_secret="unit-test-secret")


class TestPageTokenService:
    """Tests for token creation and verification."""

    def test_token_carries_page_and_authorized_flag(self, settings):
        service = PageTokenService(settings)

        payload = service.verify_token(service.create_token("dimanche"))

        assert payload.page_id == "dimanche"
        assert payload.authorized is True

    def test_token_expires_after_configured_hours(self, settings):
        service = PageTokenService(settings)
        before = datetime.now(timezone.utc)

        payload = service.verify_token(service.create_token("dimanche"))

        expected = before + timedelta(hours=24)
        assert abs((payload.exp - expected).total_seconds()) < 5

    def test_wire_claims_use_camel_case(self, settings):
        token = PageTokenService(settings).create_token("dimanche")

        claims = jwt.decode(token, options={"verify_signature": False})

        assert claims["pageId"] == "dimanche"
        assert claims["authorized"] is True

    def test_expired_token_is_rejected(self, settings):
        token = jwt.encode(
            {
                "pageId": "dimanche",
                "authorized": True,
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="expired"):
            PageTokenService(settings).verify_token(token)

    def test_token_signed_with_other_secret_is_rejected(self, settings):
        foreign = PageTokenService(AuthSettings(jwt_secret="someone-else"))

        with pytest.raises(JWTError, match="Invalid token"):
            PageTokenService(settings).verify_token(foreign.create_token("dimanche"))

    def test_token_without_expiry_is_rejected(self, settings):
        token = jwt.encode(
            {"pageId": "dimanche", "authorized": True},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(JWTError):
            PageTokenService(settings).verify_token(token)

"""Unit tests for PageAuthService."""

import asyncio

import pytest

from margin.config import AuthSettings
from margin.domain.error import NotFoundError, UnauthorizedError, ValidationError
from margin.domain.model import ProtectedPage
from margin.domain.service import PageAuthService, PageTokenService
from margin.domain.value import PageId
from margin.persistence.challenge_store import InMemoryChallengeStore
from margin.persistence.repository.inmemory import InMemoryProtectedPageRepository
from margin.util.crypto import challenge_response, hash_password
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

PAGE_ID = PageId("dimanche")
PASSWORD = "open-sesame"


def client_hash(challenge: str, salt: str, password: str = PASSWORD) -> str:
    """What a browser computes from the challenge, the salt and the password."""
    return challenge_response(challenge, hash_password(salt, password))


class AuthFixture:
    def __init__(self, clock, **settings) -> None:
        self.settings = AuthSettings(jwt_secret="test-secret", **settings)
        self.pages = InMemoryProtectedPageRepository()
        self.store = InMemoryChallengeStore()
        self.service = PageAuthService(
            page_repository=self.pages,
            challenge_store=self.store,
            token_service=PageTokenService(self.settings),
            auth_settings=self.settings,
            clock=clock,
        )

    async def provision(self) -> ProtectedPage:
        return await self.service.provision_page(PAGE_ID, "Dimanche", PASSWORD)


@pytest.fixture
def auth(clock) -> AuthFixture:
    return AuthFixture(clock)


class TestIssueChallenge:
    """Tests for issue_challenge method."""

    @pytest.mark.asyncio
    async def test_returns_challenge_and_page_salt(self, auth):
        page = await auth.provision()

        issued = await auth.service.issue_challenge(PAGE_ID)

        assert issued.salt == page.salt
        assert len(issued.challenge) == 64
        assert await auth.store.get(PAGE_ID, issued.challenge) is not None

    @pytest.mark.asyncio
    async def test_challenges_are_unique(self, auth):
        await auth.provision()

        first = await auth.service.issue_challenge(PAGE_ID)
        second = await auth.service.issue_challenge(PAGE_ID)

        assert first.challenge != second.challenge

    @pytest.mark.asyncio
    async def test_unknown_page_raises_not_found(self, auth):
        with pytest.raises(NotFoundError):
            await auth.service.issue_challenge(PageId("nowhere"))

    @pytest.mark.asyncio
    async def test_unsalted_page_cannot_issue_challenges(self, auth):
        await auth.pages.save(
            ProtectedPage(page_id=PAGE_ID, page_name="Old", password_hash="abc")
        )

        with pytest.raises(NotFoundError):
            await auth.service.issue_challenge(PAGE_ID)

    @pytest.mark.asyncio
    async def test_issuing_sweeps_expired_challenges(self, auth, clock):
        await auth.provision()
        stale = await auth.service.issue_challenge(PAGE_ID)
        clock.advance(seconds=auth.settings.challenge_ttl_seconds + 1)

        await auth.service.issue_challenge(PAGE_ID)

        assert await auth.store.get(PAGE_ID, stale.challenge) is None


class TestVerify:
    """Tests for verify method."""

    @pytest.mark.asyncio
    async def test_correct_hash_issues_token_and_consumes_challenge(self, auth):
        await auth.provision()
        issued = await auth.service.issue_challenge(PAGE_ID)

        token = await auth.service.verify(
            PAGE_ID, issued.challenge, client_hash(issued.challenge, issued.salt)
        )

        payload = auth.service.verify_access(token, PAGE_ID)
        assert payload.authorized is True
        assert payload.page_id == PAGE_ID
        assert await auth.store.get(PAGE_ID, issued.challenge) is None

    @pytest.mark.asyncio
    async def test_challenge_cannot_be_replayed(self, auth):
        await auth.provision()
        issued = await auth.service.issue_challenge(PAGE_ID)
        answer = client_hash(issued.challenge, issued.salt)
        await auth.service.verify(PAGE_ID, issued.challenge, answer)

        with pytest.raises(UnauthorizedError, match="Invalid or expired challenge"):
            await auth.service.verify(PAGE_ID, issued.challenge, answer)

    @pytest.mark.asyncio
    async def test_wrong_password_is_rejected_but_challenge_stays_usable(self, auth):
        await auth.provision()
        issued = await auth.service.issue_challenge(PAGE_ID)

        with pytest.raises(UnauthorizedError, match="Invalid authentication"):
            await auth.service.verify(
                PAGE_ID,
                issued.challenge,
                client_hash(issued.challenge, issued.salt, "wrong"),
            )

        token = await auth.service.verify(
            PAGE_ID, issued.challenge, client_hash(issued.challenge, issued.salt)
        )
        assert token

    @pytest.mark.asyncio
    async def test_wrong_password_burns_challenge_when_configured(self, clock):
        auth = AuthFixture(clock, burn_challenge_on_failure=True)
        await auth.provision()
        issued = await auth.service.issue_challenge(PAGE_ID)

        with pytest.raises(UnauthorizedError):
            await auth.service.verify(PAGE_ID, issued.challenge, "00" * 32)

        with pytest.raises(UnauthorizedError, match="Invalid or expired challenge"):
            await auth.service.verify(
                PAGE_ID, issued.challenge, client_hash(issued.challenge, issued.salt)
            )

    @pytest.mark.asyncio
    async def test_expired_challenge_is_rejected_and_removed(self, auth, clock):
        await auth.provision()
        issued = await auth.service.issue_challenge(PAGE_ID)
        clock.advance(seconds=auth.settings.challenge_ttl_seconds + 1)

        with pytest.raises(UnauthorizedError, match="Challenge expired"):
            await auth.service.verify(
                PAGE_ID, issued.challenge, client_hash(issued.challenge, issued.salt)
            )

        assert await auth.store.get(PAGE_ID, issued.challenge) is None

    @pytest.mark.asyncio
    async def test_challenge_is_bound_to_its_page(self, auth):
        await auth.provision()
        await auth.service.provision_page(PageId("other"), "Other", PASSWORD)
        issued = await auth.service.issue_challenge(PAGE_ID)

        with pytest.raises(UnauthorizedError):
            await auth.service.verify(
                "other", issued.challenge, client_hash(issued.challenge, issued.salt)
            )

    @pytest.mark.asyncio
    async def test_malformed_hash_never_matches(self, auth):
        await auth.provision()
        issued = await auth.service.issue_challenge(PAGE_ID)

        with pytest.raises(UnauthorizedError, match="Invalid authentication"):
            await auth.service.verify(PAGE_ID, issued.challenge, "not-hex")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "page_id,challenge,hash_",
        [(None, "c", "h"), ("dimanche", None, "h"), ("dimanche", "c", "")],
    )
    async def test_missing_fields_raise_validation_error(
        self, auth, page_id, challenge, hash_
    ):
        with pytest.raises(ValidationError, match="Missing required fields"):
            await auth.service.verify(page_id, challenge, hash_)

    @pytest.mark.asyncio
    async def test_concurrent_verifies_yield_exactly_one_token(self, auth):
        """Racing clients with the same valid answer must not both succeed."""
        await auth.provision()
        issued = await auth.service.issue_challenge(PAGE_ID)
        answer = client_hash(issued.challenge, issued.salt)

        results = await asyncio.gather(
            *(auth.service.verify(PAGE_ID, issued.challenge, answer) for _ in range(10)),
            return_exceptions=True,
        )

        tokens = [r for r in results if isinstance(r, str)]
        failures = [r for r in results if isinstance(r, UnauthorizedError)]
        assert len(tokens) == 1
        assert len(failures) == 9


class TestVerifyAccess:
    """Tests for verify_access method."""

    @pytest.mark.asyncio
    async def test_missing_token_is_unauthorized(self, auth):
        with pytest.raises(UnauthorizedError, match="Access token required"):
            auth.service.verify_access(None, PAGE_ID)

    @pytest.mark.asyncio
    async def test_token_for_another_page_is_unauthorized(self, auth):
        token = auth.service.token_service.create_token("other")

        with pytest.raises(UnauthorizedError):
            auth.service.verify_access(token, PAGE_ID)

    @pytest.mark.asyncio
    async def test_tampered_token_is_unauthorized(self, auth):
        token = auth.service.token_service.create_token(PAGE_ID)

        with pytest.raises(UnauthorizedError, match="Invalid token"):
            auth.service.verify_access(token[:-2] + "xx", PAGE_ID)


class TestProvisionPage:
    """Tests for provision_page method."""

    @pytest.mark.asyncio
    async def test_creates_salted_page(self, auth):
        page = await auth.provision()

        assert page.salt
        assert page.password_hash == hash_password(page.salt, PASSWORD)
        assert PASSWORD not in page.password_hash

    @pytest.mark.asyncio
    async def test_existing_salted_page_is_left_untouched(self, auth):
        first = await auth.provision()

        second = await auth.service.provision_page(PAGE_ID, "Renamed", "new-password")

        assert second == first

    @pytest.mark.asyncio
    async def test_legacy_unsalted_page_is_upgraded(self, auth):
        await auth.pages.save(
            ProtectedPage(page_id=PAGE_ID, page_name="Legacy", password_hash="abc")
        )

        page = await auth.provision()

        assert page.is_provisioned
        assert page.page_name == "Legacy"
        assert (await auth.pages.find_by_page_id(PAGE_ID)).salt == page.salt

    @pytest.mark.asyncio
    async def test_service_resolves_from_container(self, unit_env):
        page_auth_service = await unit_env.get(PageAuthService)

        page = await page_auth_service.provision_page(PAGE_ID, "Dimanche", PASSWORD)
        issued = await page_auth_service.issue_challenge(PAGE_ID)

        assert issued.salt == page.salt

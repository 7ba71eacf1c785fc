"""Unit tests for page password use cases."""

import pytest

from margin.application.usecase.auth import (
    CheckPageAccessRequest,
    CheckPageAccessUseCase,
    IssueChallengeRequest,
    IssueChallengeUseCase,
    VerifyPasswordRequest,
    VerifyPasswordUseCase,
)
from margin.application.usecase.page import (
    ProvisionPagesRequest,
    ProvisionPagesUseCase,
)
from margin.config import ProtectedPageSeed
from margin.domain.error import UnauthorizedError
from margin.util.crypto import challenge_response, hash_password
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestPasswordFlow:
    """Provision, challenge, verify and check access through use cases."""

    @pytest.mark.asyncio
    async def test_full_flow_grants_access_to_page(self, unit_env):
        provision = await unit_env.get(ProvisionPagesUseCase)
        issue = await unit_env.get(IssueChallengeUseCase)
        verify = await unit_env.get(VerifyPasswordUseCase)
        check = await unit_env.get(CheckPageAccessUseCase)

        provisioned = await provision.execute(
            ProvisionPagesRequest(
                pages=[
                    ProtectedPageSeed(
                        page_id="dimanche", page_name="Dimanche", password="pw"
                    )
                ]
            )
        )
        issued = await issue.execute(IssueChallengeRequest(page_id="dimanche"))
        answer = challenge_response(issued.challenge, hash_password(issued.salt, "pw"))
        verified = await verify.execute(
            VerifyPasswordRequest.model_validate(
                {"pageId": "dimanche", "challenge": issued.challenge, "hash": answer}
            )
        )
        access = await check.execute(
            CheckPageAccessRequest(
                page_id="dimanche", access_token=verified.access_token
            )
        )

        assert provisioned.page_ids == ["dimanche"]
        assert verified.message == "Authentication successful"
        assert access.authorized is True

    @pytest.mark.asyncio
    async def test_access_check_without_token_is_unauthorized(self, unit_env):
        check = await unit_env.get(CheckPageAccessUseCase)

        with pytest.raises(UnauthorizedError):
            await check.execute(CheckPageAccessRequest(page_id="dimanche"))

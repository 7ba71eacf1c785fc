"""Test harness for unit and E2E tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from margin.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_post_comment(unit_env):
            service = await unit_env.get(CommentService)
            comment = await service.post_comment("essay", "Ann", "Hello")
            assert comment.top_level_comment_id is None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment

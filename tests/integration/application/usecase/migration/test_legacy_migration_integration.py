"""Integration tests for migrating legacy chat into threaded comments.

Runs the migration use case and then reads and replies through the comment
use cases, so migrated rows are checked against the live comment flow.
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from margin.application.usecase.comment import (
    GetCommentsRequest,
    GetCommentsUseCase,
    PostCommentRequest,
    PostCommentUseCase,
)
from margin.application.usecase.migration import (
    MigrateLegacyMessagesRequest,
    MigrateLegacyMessagesUseCase,
)
from margin.domain.model import LegacyMessage
from margin.domain.repository import LegacyMessageRepository
from margin.domain.value import LegacyMessageId, PageId
from tests.harness import create_env_fixture

integration_env = create_env_fixture()


class TestLegacyMigrationIntegration:
    """Migrated messages behave like any other top-level comment."""

    @pytest.mark.asyncio
    async def test_migrated_messages_can_be_read_and_replied_to(
        self, integration_env
    ):
        # Arrange
        legacy_repo = await integration_env.get(LegacyMessageRepository)
        legacy_repo.add(
            LegacyMessage(
                id=LegacyMessageId(uuid4()),
                username="Ann",
                content="From the old chat",
                page_id=PageId("essay"),
                timestamp=datetime(2023, 6, 1, tzinfo=timezone.utc),
            )
        )
        migrate = await integration_env.get(MigrateLegacyMessagesUseCase)
        get_comments = await integration_env.get(GetCommentsUseCase)
        post_comment = await integration_env.get(PostCommentUseCase)

        # Act
        report = await migrate.execute(MigrateLegacyMessagesRequest())
        (migrated,) = (
            await get_comments.execute(GetCommentsRequest(page_id="essay"))
        ).comments
        reply = await post_comment.execute(
            PostCommentRequest(
                page_id="essay", content="Welcome back", parent_comment_id=migrated.id
            )
        )
        after = await get_comments.execute(GetCommentsRequest(page_id="essay"))

        # Assert
        assert report.migrated == 1
        assert migrated.username == "Ann"
        assert reply.comment.top_level_comment_id == migrated.id
        root = next(c for c in after.comments if c.id == migrated.id)
        assert root.descendant_count == 1
        assert root.last_subthread_activity > migrated.timestamp

    @pytest.mark.asyncio
    async def test_second_run_is_a_no_op_unless_forced(self, integration_env):
        migrate = await integration_env.get(MigrateLegacyMessagesUseCase)

        first = await migrate.execute(MigrateLegacyMessagesRequest())
        second = await migrate.execute(MigrateLegacyMessagesRequest())
        forced = await migrate.execute(MigrateLegacyMessagesRequest(force=True))

        assert first.already_applied is False
        assert second.already_applied is True
        assert forced.already_applied is False

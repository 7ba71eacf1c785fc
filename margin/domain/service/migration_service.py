"""Legacy message migration domain service."""

from datetime import datetime
from typing import Callable
from uuid import uuid4

import logfire

from margin.domain.error import StorageError
from margin.domain.model.comment import Comment, normalize_content, normalize_username
from margin.domain.model.common import utcnow
from margin.domain.model.data_migration import DataMigration
from margin.domain.repository import (
    CommentRepository,
    DataMigrationRepository,
    LegacyMessageRepository,
)
from margin.domain.value import CommentId, MigrationReport

from .base import Service

LEGACY_MESSAGES_MIGRATION_ID = "0001_legacy_messages_to_comments"


class MigrationService(Service):
    """Promotes flat legacy chat messages into top-level comments.

    The migration is versioned by LEGACY_MESSAGES_MIGRATION_ID and recorded
    in the data migration ledger once it completes. Each message is matched
    against existing comments by username, content and timestamp before
    being inserted, so re-running after a partial failure never duplicates
    records.
    """

    def __init__(
        self,
        legacy_message_repository: LegacyMessageRepository,
        comment_repository: CommentRepository,
        data_migration_repository: DataMigrationRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize migration service.

        Args:
            legacy_message_repository: Source of legacy messages
            comment_repository: Destination comment repository
            data_migration_repository: Ledger of applied migrations
            clock: Source of the current time
        """
        self.legacy_message_repository = legacy_message_repository
        self.comment_repository = comment_repository
        self.data_migration_repository = data_migration_repository
        self.clock = clock

    async def migrate_legacy_messages(self, force: bool = False) -> MigrationReport:
        """Convert every legacy message that has no equivalent comment.

        Args:
            force: Re-scan even if the ledger says the migration already ran

        Returns:
            Counts of scanned, migrated and skipped messages
        """
        migration_id = LEGACY_MESSAGES_MIGRATION_ID

        with logfire.span("migration_service.migrate_legacy_messages", force=force):
            applied = await self.data_migration_repository.find(migration_id)
            if applied is not None and not force:
                logfire.info(
                    "Legacy message migration already applied",
                    migration_id=migration_id,
                    applied_at=applied.applied_at.isoformat(),
                )
                return MigrationReport(migration_id=migration_id, already_applied=True)

            messages = await self.legacy_message_repository.find_all()
            migrated = skipped_existing = skipped_invalid = 0

            for message in messages:
                username = normalize_username(message.username)
                content = normalize_content(message.content)
                if not content or not message.page_id:
                    skipped_invalid += 1
                    logfire.warn(
                        "Skipping legacy message without content or page",
                        legacy_message_id=str(message.id),
                    )
                    continue

                existing = await self.comment_repository.find_matching(
                    username=username, content=content, timestamp=message.timestamp
                )
                if existing is not None:
                    skipped_existing += 1
                    continue

                await self.comment_repository.insert(
                    Comment(
                        id=CommentId(uuid4()),
                        page_id=message.page_id,
                        username=username,
                        content=content,
                        timestamp=message.timestamp,
                        votes=0,
                        parent_comment_id=None,
                        top_level_comment_id=None,
                        descendant_count=0,
                        direct_children_count=0,
                        last_subthread_activity=message.timestamp,
                    )
                )
                migrated += 1

            report = MigrationReport(
                migration_id=migration_id,
                scanned=len(messages),
                migrated=migrated,
                skipped_existing=skipped_existing,
                skipped_invalid=skipped_invalid,
            )

            try:
                await self.data_migration_repository.record(
                    DataMigration(
                        id=migration_id,
                        applied_at=self.clock(),
                        details=report.model_dump(exclude={"already_applied"}),
                    )
                )
            except StorageError as e:
                # Every message is already migrated; a re-run only re-scans
                logfire.error(
                    "Could not record migration in ledger",
                    migration_id=migration_id,
                    error=str(e),
                )

            logfire.info(
                "Legacy message migration finished",
                migration_id=migration_id,
                scanned=report.scanned,
                migrated=report.migrated,
                skipped_existing=report.skipped_existing,
                skipped_invalid=report.skipped_invalid,
            )
            return report

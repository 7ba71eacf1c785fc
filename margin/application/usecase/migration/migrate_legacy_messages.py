"""Migrate legacy messages use case."""

from pydantic import BaseModel

from margin.application.usecase.base import BaseUseCase
from margin.domain.service import MigrationService


class MigrateLegacyMessagesRequest(BaseModel):
    """Migrate legacy messages request."""

    force: bool = False


class MigrateLegacyMessagesResponse(BaseModel):
    """Migration counts."""

    migration_id: str
    already_applied: bool
    scanned: int
    migrated: int
    skipped_existing: int
    skipped_invalid: int


class MigrateLegacyMessagesUseCase(BaseUseCase):
    """Use case for promoting legacy chat messages to comments."""

    def __init__(self, migration_service: MigrationService) -> None:
        self.migration_service = migration_service

    async def execute(
        self, request: MigrateLegacyMessagesRequest
    ) -> MigrateLegacyMessagesResponse:
        report = await self.migration_service.migrate_legacy_messages(
            force=request.force
        )
        return MigrateLegacyMessagesResponse(**report.model_dump())

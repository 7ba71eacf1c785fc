"""PostgreSQL repository implementations."""

from margin.persistence.repository.comment import PostgresCommentRepository
from margin.persistence.repository.data_migration import (
    PostgresDataMigrationRepository,
)
from margin.persistence.repository.legacy_message import (
    PostgresLegacyMessageRepository,
)
from margin.persistence.repository.protected_page import (
    PostgresProtectedPageRepository,
)

__all__ = [
    "PostgresCommentRepository",
    "PostgresDataMigrationRepository",
    "PostgresLegacyMessageRepository",
    "PostgresProtectedPageRepository",
]

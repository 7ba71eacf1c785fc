"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .data_migration import InMemoryDataMigrationRepository
from .legacy_message import InMemoryLegacyMessageRepository
from .protected_page import InMemoryProtectedPageRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryDataMigrationRepository",
    "InMemoryLegacyMessageRepository",
    "InMemoryProtectedPageRepository",
]

"""Repository interfaces for the margin domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from margin.domain.repository.challenge import ChallengeStore
from margin.domain.repository.comment import CommentRepository
from margin.domain.repository.data_migration import DataMigrationRepository
from margin.domain.repository.legacy_message import LegacyMessageRepository
from margin.domain.repository.protected_page import ProtectedPageRepository

__all__ = [
    "ChallengeStore",
    "CommentRepository",
    "DataMigrationRepository",
    "LegacyMessageRepository",
    "ProtectedPageRepository",
]

"""Domain model entities for margin."""

from margin.domain.model.challenge import Challenge
from margin.domain.model.comment import Comment
from margin.domain.model.data_migration import DataMigration
from margin.domain.model.legacy_message import LegacyMessage
from margin.domain.model.protected_page import ProtectedPage

__all__ = [
    "Challenge",
    "Comment",
    "DataMigration",
    "LegacyMessage",
    "ProtectedPage",
]

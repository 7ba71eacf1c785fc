"""Domain value objects for margin."""

from margin.domain.value.identifiers import (
    CommentId,
    LegacyMessageId,
    PageId,
    parse_comment_id,
)
from margin.domain.value.types import IssuedChallenge, MigrationReport, VoteDirection

__all__ = [
    # Identifiers
    "CommentId",
    "LegacyMessageId",
    "PageId",
    "parse_comment_id",
    # Types
    "IssuedChallenge",
    "MigrationReport",
    "VoteDirection",
]

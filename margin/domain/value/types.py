"""Domain value objects for margin.

Value objects are immutable and defined by their values, not identity.
"""

from datetime import datetime
from enum import Enum

from margin.domain.value.common import ValueObject


class VoteDirection(str, Enum):
    """Direction of a comment vote."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @property
    def delta(self) -> int:
        """Signed change applied to the vote counter."""
        return 1 if self is VoteDirection.UPVOTE else -1


class IssuedChallenge(ValueObject):
    """Challenge handed to a client for password verification.

    The salt lets the client compute ``sha256(salt + password)`` locally, and
    the challenge binds the final hash to a single verification.
    """

    challenge: str
    salt: str
    expires_at: datetime


class MigrationReport(ValueObject):
    """Outcome of a data migration run."""

    migration_id: str
    scanned: int = 0
    migrated: int = 0
    skipped_existing: int = 0
    skipped_invalid: int = 0
    already_applied: bool = False

"""Strongly typed identifiers for margin domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

from margin.domain.error import ValidationError

CommentId = NewType("CommentId", UUID)
LegacyMessageId = NewType("LegacyMessageId", UUID)

# Pages are addressed by their slug (e.g. "dimanche"), not a UUID
PageId = NewType("PageId", str)


def parse_comment_id(raw: str, field: str = "commentId") -> CommentId:
    """Parse a client supplied comment identifier.

    Args:
        raw: Identifier as sent by the client
        field: Field name used in the error message

    Returns:
        Typed comment ID

    Raises:
        ValidationError: If the value is not a valid UUID
    """
    try:
        return CommentId(UUID(str(raw)))
    except ValueError:
        raise ValidationError(f"{field} is not a valid comment id")

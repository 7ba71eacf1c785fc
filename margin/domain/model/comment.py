"""Comment entity.

Comments are threaded discussions attached to a page. Every reply keeps a
pointer to its immediate parent and to the root of its thread, and every
comment carries denormalized counters for the replies nested below it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from margin.domain.error import ValidationError
from margin.domain.model.common import DomainModel, utcnow
from margin.domain.value import CommentId, PageId

ANONYMOUS_USERNAME = "Anonymous"
DELETED_SENTINEL = "[deleted]"


def normalize_username(username: str | None, default: str = ANONYMOUS_USERNAME) -> str:
    """Trim a username, falling back to the anonymous name when blank."""
    trimmed = username.strip() if username else ""
    return trimmed or default


def normalize_content(content: str | None) -> str:
    """Trim comment content. Blank content normalizes to an empty string."""
    return content.strip() if content else ""


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_comment_id: Immediate parent (None for top-level)
    - top_level_comment_id: Root of the thread (None for top-level)
    - direct_children_count / descendant_count: Reply counters
    - last_subthread_activity: Latest create/delete anywhere in the subtree

    A comment is Active, SoftDeleted (deleted_at set, content replaced by
    the sentinel, replies still attached) or removed from storage entirely.
    """

    id: CommentId
    page_id: PageId
    username: str = ANONYMOUS_USERNAME
    content: str
    timestamp: datetime = Field(default_factory=utcnow)
    edited_at: Optional[datetime] = None
    votes: int = 0
    parent_comment_id: Optional[CommentId] = None
    top_level_comment_id: Optional[CommentId] = None
    descendant_count: int = Field(default=0, ge=0)
    direct_children_count: int = Field(default=0, ge=0)
    last_subthread_activity: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    @property
    def is_top_level(self) -> bool:
        return self.parent_comment_id is None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def has_replies(self) -> bool:
        return self.direct_children_count > 0

    @property
    def thread_root_id(self) -> CommentId:
        """ID a reply to this comment must store as its top_level_comment_id."""
        return self.top_level_comment_id or self.id

    def check_required_fields(self) -> None:
        """Ensure the comment can be persisted.

        Raises:
            ValidationError: If username, content or page_id is empty
        """
        missing = [
            name
            for name, value in (
                ("username", self.username),
                ("content", self.content),
                ("pageId", self.page_id),
            )
            if not value or not str(value).strip()
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

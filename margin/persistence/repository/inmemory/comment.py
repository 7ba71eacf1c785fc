"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Any, Optional

from margin.domain.model.comment import Comment
from margin.domain.repository.comment import CommentRepository
from margin.domain.value import CommentId, PageId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Mutations never await between read and write, so each one is atomic
    with respect to other coroutines on the same event loop.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_page(
        self,
        page_id: PageId,
        limit: Optional[int] = None,
        offset: int = 0,
        newest_first: bool = False,
    ) -> list[Comment]:
        """Find comments for a page ordered by creation time."""
        comments = [c for c in self._comments.values() if c.page_id == page_id]
        comments.sort(key=lambda c: (c.timestamp, str(c.id)), reverse=newest_first)

        if limit is None:
            return comments[offset:]
        return comments[offset : offset + limit]

    async def find_children(
        self, page_id: PageId, parent_comment_id: CommentId
    ) -> list[Comment]:
        """Find direct replies of a comment, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.page_id == page_id and c.parent_comment_id == parent_comment_id
        ]
        comments.sort(key=lambda c: c.timestamp)
        return comments

    async def find_thread(
        self, page_id: PageId, top_level_comment_id: CommentId
    ) -> list[Comment]:
        """Find every reply in a thread (root excluded), oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.page_id == page_id and c.top_level_comment_id == top_level_comment_id
        ]
        comments.sort(key=lambda c: c.timestamp)
        return comments

    async def find_active_threads(
        self, page_id: PageId, limit: int, offset: int = 0
    ) -> list[Comment]:
        """Find top-level comments ordered by most recent subthread activity."""
        comments = [
            c
            for c in self._comments.values()
            if c.page_id == page_id and c.parent_comment_id is None
        ]
        comments.sort(key=lambda c: c.last_subthread_activity, reverse=True)
        return comments[offset : offset + limit]

    async def find_matching(
        self, username: str, content: str, timestamp: datetime
    ) -> Optional[Comment]:
        """Find a comment equivalent to a legacy message."""
        return next(
            (
                c
                for c in self._comments.values()
                if c.username == username
                and c.content == content
                and c.timestamp == timestamp
            ),
            None,
        )

    async def count_by_page(self, page_id: PageId) -> int:
        """Count comments stored for a page."""
        return sum(1 for c in self._comments.values() if c.page_id == page_id)

    async def insert(self, comment: Comment) -> Comment:
        """Persist a new comment."""
        comment.check_required_fields()
        self._comments[comment.id] = comment
        return comment

    async def update_counters(
        self,
        comment_id: CommentId,
        direct_children_delta: int = 0,
        descendant_delta: int = 0,
        activity_at: Optional[datetime] = None,
    ) -> Optional[Comment]:
        """Atomically adjust reply counters and subthread activity."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        changes: dict[str, Any] = {
            "direct_children_count": max(
                comment.direct_children_count + direct_children_delta, 0
            ),
            "descendant_count": max(comment.descendant_count + descendant_delta, 0),
        }
        if activity_at is not None:
            changes["last_subthread_activity"] = max(
                comment.last_subthread_activity, activity_at
            )

        updated = comment.model_copy(update=changes)
        self._comments[comment_id] = updated
        return updated

    async def increment_votes(self, comment_id: CommentId, delta: int) -> Optional[int]:
        """Atomically add delta to the vote counter."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(update={"votes": comment.votes + delta})
        self._comments[comment_id] = updated
        return updated.votes

    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the content of a non-deleted comment."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None

        updated = comment.model_copy(update={"content": content, "edited_at": edited_at})
        self._comments[comment_id] = updated
        return updated

    async def soft_delete(
        self, comment_id: CommentId, deleted_at: datetime, sentinel: str
    ) -> Optional[Comment]:
        """Replace content and username with the sentinel, keeping structure."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(
            update={
                "content": sentinel,
                "username": sentinel,
                "deleted_at": comment.deleted_at or deleted_at,
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def hard_delete(self, comment_id: CommentId) -> bool:
        """Remove a comment that has no direct replies."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.direct_children_count > 0:
            return False

        del self._comments[comment_id]
        return True

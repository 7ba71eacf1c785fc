"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from margin.domain.model.comment import Comment
from margin.domain.value import CommentId, PageId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    Every counter mutation is a single atomic operation at the storage layer.
    Implementations must never read a counter, change it in Python and write
    it back.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_page(
        self,
        page_id: PageId,
        limit: Optional[int] = None,
        offset: int = 0,
        newest_first: bool = False,
    ) -> List[Comment]:
        """Find comments for a page ordered by creation time.

        Args:
            page_id: The page ID
            limit: Maximum number of comments to return (None for all)
            offset: Number of comments to skip
            newest_first: Order by timestamp descending instead of ascending

        Returns:
            List of comments in the requested order
        """
        pass

    @abstractmethod
    async def find_children(
        self, page_id: PageId, parent_comment_id: CommentId
    ) -> List[Comment]:
        """Find direct replies of a comment, oldest first."""
        pass

    @abstractmethod
    async def find_thread(
        self, page_id: PageId, top_level_comment_id: CommentId
    ) -> List[Comment]:
        """Find every reply in a thread (root excluded), oldest first."""
        pass

    @abstractmethod
    async def find_active_threads(
        self, page_id: PageId, limit: int, offset: int = 0
    ) -> List[Comment]:
        """Find top-level comments ordered by most recent subthread activity."""
        pass

    @abstractmethod
    async def find_matching(
        self, username: str, content: str, timestamp: datetime
    ) -> Optional[Comment]:
        """Find a comment equivalent to a legacy message.

        Args:
            username: Normalized username
            content: Normalized content
            timestamp: Original creation time

        Returns:
            The first matching comment, None otherwise
        """
        pass

    @abstractmethod
    async def count_by_page(self, page_id: PageId) -> int:
        """Count comments stored for a page."""
        pass

    @abstractmethod
    async def insert(self, comment: Comment) -> Comment:
        """Persist a new comment.

        Raises:
            ValidationError: If username, content or page_id is empty
        """
        pass

    @abstractmethod
    async def update_counters(
        self,
        comment_id: CommentId,
        direct_children_delta: int = 0,
        descendant_delta: int = 0,
        activity_at: Optional[datetime] = None,
    ) -> Optional[Comment]:
        """Atomically adjust reply counters and subthread activity.

        Counters never go below zero. ``last_subthread_activity`` only moves
        forward: it becomes the later of its current value and activity_at.

        Args:
            comment_id: Comment to update
            direct_children_delta: Change to direct_children_count
            descendant_delta: Change to descendant_count
            activity_at: Activity timestamp to record (None leaves it unchanged)

        Returns:
            The updated comment, None if it does not exist
        """
        pass

    @abstractmethod
    async def increment_votes(self, comment_id: CommentId, delta: int) -> Optional[int]:
        """Atomically add delta to the vote counter.

        Returns:
            The new vote total, None if the comment does not exist
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the content of a non-deleted comment.

        Returns:
            Updated comment, None if it doesn't exist or is deleted
        """
        pass

    @abstractmethod
    async def soft_delete(
        self, comment_id: CommentId, deleted_at: datetime, sentinel: str
    ) -> Optional[Comment]:
        """Replace content and username with the sentinel, keeping structure.

        Returns:
            Updated comment, None if it does not exist
        """
        pass

    @abstractmethod
    async def hard_delete(self, comment_id: CommentId) -> bool:
        """Remove a comment that has no direct replies.

        The reply count is checked in the same atomic operation, so a reply
        created concurrently makes this return False instead of orphaning it.

        Returns:
            True if the comment was removed
        """
        pass

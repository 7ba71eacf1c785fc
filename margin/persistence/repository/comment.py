"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from margin.domain.model import Comment
from margin.domain.repository import CommentRepository
from margin.domain.value import CommentId, PageId
from margin.persistence.error import storage_operation
from margin.persistence.mappers import comment_to_dict, row_to_comment
from margin.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Every write commits immediately. Each one is an independent atomic
    operation, and subscribers are only notified once it is durable.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @storage_operation("comments.find_by_id")
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @storage_operation("comments.find_by_page")
    async def find_by_page(
        self,
        page_id: PageId,
        limit: Optional[int] = None,
        offset: int = 0,
        newest_first: bool = False,
    ) -> List[Comment]:
        """Find comments for a page ordered by creation time."""
        stmt = select(comments_table).where(comments_table.c.page_id == page_id)

        if newest_first:
            stmt = stmt.order_by(
                comments_table.c.timestamp.desc(), comments_table.c.id.desc()
            )
        else:
            stmt = stmt.order_by(comments_table.c.timestamp, comments_table.c.id)

        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @storage_operation("comments.find_children")
    async def find_children(
        self, page_id: PageId, parent_comment_id: CommentId
    ) -> List[Comment]:
        """Find direct replies of a comment, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.page_id == page_id)
            .where(comments_table.c.parent_comment_id == parent_comment_id)
            .order_by(comments_table.c.timestamp)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @storage_operation("comments.find_thread")
    async def find_thread(
        self, page_id: PageId, top_level_comment_id: CommentId
    ) -> List[Comment]:
        """Find every reply in a thread (root excluded), oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.page_id == page_id)
            .where(comments_table.c.top_level_comment_id == top_level_comment_id)
            .order_by(comments_table.c.timestamp)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @storage_operation("comments.find_active_threads")
    async def find_active_threads(
        self, page_id: PageId, limit: int, offset: int = 0
    ) -> List[Comment]:
        """Find top-level comments ordered by most recent subthread activity."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.page_id == page_id)
            .where(comments_table.c.parent_comment_id.is_(None))
            .order_by(comments_table.c.last_subthread_activity.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @storage_operation("comments.find_matching")
    async def find_matching(
        self, username: str, content: str, timestamp: datetime
    ) -> Optional[Comment]:
        """Find a comment equivalent to a legacy message."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.username == username)
            .where(comments_table.c.content == content)
            .where(comments_table.c.timestamp == timestamp)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @storage_operation("comments.count_by_page")
    async def count_by_page(self, page_id: PageId) -> int:
        """Count comments stored for a page."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.page_id == page_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @storage_operation("comments.insert")
    async def insert(self, comment: Comment) -> Comment:
        """Persist a new comment."""
        comment.check_required_fields()

        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.commit()
        return comment

    @storage_operation("comments.update_counters")
    async def update_counters(
        self,
        comment_id: CommentId,
        direct_children_delta: int = 0,
        descendant_delta: int = 0,
        activity_at: Optional[datetime] = None,
    ) -> Optional[Comment]:
        """Atomically adjust reply counters and subthread activity."""
        values: Dict[str, Any] = {}
        if direct_children_delta:
            values["direct_children_count"] = func.greatest(
                comments_table.c.direct_children_count + direct_children_delta, 0
            )
        if descendant_delta:
            values["descendant_count"] = func.greatest(
                comments_table.c.descendant_count + descendant_delta, 0
            )
        if activity_at is not None:
            values["last_subthread_activity"] = func.greatest(
                comments_table.c.last_subthread_activity, activity_at
            )

        if not values:
            return await self.find_by_id(comment_id)

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(**values)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.commit()
        return row_to_comment(row._asdict()) if row else None

    @storage_operation("comments.increment_votes")
    async def increment_votes(self, comment_id: CommentId, delta: int) -> Optional[int]:
        """Atomically add delta to the vote counter."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(votes=comments_table.c.votes + delta)
            .returning(comments_table.c.votes)
        )
        result = await self.session.execute(stmt)
        votes = result.scalar_one_or_none()
        await self.session.commit()
        return votes

    @storage_operation("comments.update_content")
    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the content of a non-deleted comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.deleted_at.is_(None))
            .values(content=content, edited_at=edited_at)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.commit()
        return row_to_comment(row._asdict()) if row else None

    @storage_operation("comments.soft_delete")
    async def soft_delete(
        self, comment_id: CommentId, deleted_at: datetime, sentinel: str
    ) -> Optional[Comment]:
        """Replace content and username with the sentinel, keeping structure."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                content=sentinel,
                username=sentinel,
                deleted_at=func.coalesce(comments_table.c.deleted_at, deleted_at),
            )
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.commit()
        return row_to_comment(row._asdict()) if row else None

    @storage_operation("comments.hard_delete")
    async def hard_delete(self, comment_id: CommentId) -> bool:
        """Remove a comment that has no direct replies."""
        stmt = (
            delete(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.direct_children_count == 0)
            .returning(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        removed = result.scalar_one_or_none() is not None
        await self.session.commit()
        return removed

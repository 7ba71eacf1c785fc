"""Comment domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

import logfire

from margin.config import CommentSettings
from margin.domain.error import (
    ContentDeletedError,
    InvalidInputError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from margin.domain.model.comment import Comment, normalize_content, normalize_username
from margin.domain.model.common import utcnow
from margin.domain.repository import CommentRepository
from margin.domain.value import CommentId, PageId, VoteDirection

from .base import Service
from .notifier import CommentNotifier, PageEvent, PageNotification


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of deleting a comment.

    Attributes:
        comment_id: Deleted comment ID
        page_id: Page the comment belonged to
        removed: True when the comment was removed from storage,
            False when it was soft-deleted to keep its replies attached
        comment: The soft-deleted comment (None when removed)
    """

    comment_id: CommentId
    page_id: PageId
    removed: bool
    comment: Optional[Comment] = None


class CommentService(Service):
    """Domain service for threaded comments.

    Wraps raw storage operations so that parent/child linkage, reply
    counters and subthread activity stay consistent.

    Counter propagation walks the ancestor chain one atomic update at a
    time. The walk is not a transaction: if it fails part-way the new
    comment stays authoritative and the counters of the remaining ancestors
    lag until the next write in that subtree.

    A reply claims its parent's child slot before it is inserted, so a
    concurrent hard delete of the parent falls back to a soft delete and
    never leaves the reply pointing at a missing comment.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        notifier: CommentNotifier,
        settings: CommentSettings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            notifier: Page subscriber notification port
            settings: Comment settings
            clock: Source of the current time
        """
        self.comment_repository = comment_repository
        self.notifier = notifier
        self.settings = settings
        self.clock = clock

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_comments_for_page(
        self,
        page_id: PageId,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Comment]:
        """Get the most recent comments for a page in chronological order.

        The newest ``limit`` comments (after skipping ``offset``) are
        selected, then returned oldest first for display.

        Args:
            page_id: Page ID
            limit: Page size (defaults to the configured default, clamped to max)
            offset: Number of most recent comments to skip

        Returns:
            Comments ordered oldest first
        """
        limit = self._clamp_limit(limit)
        offset = max(offset, 0)

        with logfire.span(
            "comment_service.get_comments_for_page",
            page_id=page_id,
            limit=limit,
            offset=offset,
        ):
            recent = await self.comment_repository.find_by_page(
                page_id=page_id,
                limit=limit,
                offset=offset,
                newest_first=True,
            )
            recent.reverse()
            logfire.info(
                "Comments retrieved for page", page_id=page_id, count=len(recent)
            )
            return recent

    async def count_comments_for_page(self, page_id: PageId) -> int:
        """Count every comment stored for a page."""
        return await self.comment_repository.count_by_page(page_id)

    async def get_active_threads(
        self, page_id: PageId, limit: int | None = None, offset: int = 0
    ) -> list[Comment]:
        """Get top-level comments ordered by most recent subthread activity.

        Args:
            page_id: Page ID
            limit: Number of threads to return
            offset: Number of threads to skip

        Returns:
            Top-level comments, most recently active first
        """
        limit = self._clamp_limit(limit)

        with logfire.span(
            "comment_service.get_active_threads", page_id=page_id, limit=limit
        ):
            threads = await self.comment_repository.find_active_threads(
                page_id=page_id, limit=limit, offset=max(offset, 0)
            )
            logfire.info("Active threads retrieved", page_id=page_id, count=len(threads))
            return threads

    async def get_thread(self, comment_id: CommentId) -> list[Comment]:
        """Get the whole thread a comment belongs to.

        Args:
            comment_id: Any comment in the thread

        Returns:
            The root comment followed by every reply, oldest first

        Raises:
            NotFoundError: If the comment or its thread root does not exist
        """
        with logfire.span("comment_service.get_thread", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))

            root = comment
            if not comment.is_top_level:
                root = await self.comment_repository.find_by_id(comment.thread_root_id)
                if root is None:
                    raise NotFoundError("Comment", str(comment.thread_root_id))

            replies = await self.comment_repository.find_thread(root.page_id, root.id)
            return [root, *replies]

    async def post_comment(
        self,
        page_id: str | None,
        username: str | None,
        content: str | None,
        parent_comment_id: CommentId | None = None,
    ) -> Comment:
        """Create a top-level comment or a reply.

        Args:
            page_id: Page the comment belongs to
            username: Display name (blank becomes the anonymous name)
            content: Comment text (trimmed, must not be blank)
            parent_comment_id: Parent comment for replies (None for top-level)

        Returns:
            The persisted comment

        Raises:
            InvalidInputError: If content is blank or page_id is missing
            NotFoundError: If the parent comment does not exist
            ValidationError: If the parent belongs to another page
        """
        valid_username = normalize_username(username, self.settings.anonymous_username)
        valid_content = normalize_content(content)

        if not valid_content:
            raise InvalidInputError("Content is required")
        if not page_id or not page_id.strip():
            raise InvalidInputError("PageId is required")
        page_id = PageId(page_id.strip())

        with logfire.span(
            "comment_service.post_comment",
            page_id=page_id,
            parent_comment_id=str(parent_comment_id) if parent_comment_id else None,
        ):
            now = self.clock()
            top_level_comment_id = None

            parent = None
            if parent_comment_id:
                parent = await self.comment_repository.find_by_id(parent_comment_id)
                if parent is None:
                    logfire.warn(
                        "Parent comment not found",
                        parent_comment_id=str(parent_comment_id),
                        page_id=page_id,
                    )
                    raise NotFoundError("Parent comment", str(parent_comment_id))
                if parent.page_id != page_id:
                    logfire.warn(
                        "Parent comment does not belong to page",
                        parent_comment_id=str(parent_comment_id),
                        parent_page_id=parent.page_id,
                        target_page_id=page_id,
                    )
                    raise ValidationError("Parent comment does not belong to this page")
                top_level_comment_id = parent.thread_root_id

            comment = Comment(
                id=CommentId(uuid4()),
                page_id=page_id,
                username=valid_username,
                content=valid_content,
                timestamp=now,
                edited_at=None,
                votes=0,
                parent_comment_id=parent.id if parent else None,
                top_level_comment_id=top_level_comment_id,
                descendant_count=0,
                direct_children_count=0,
                last_subthread_activity=now,
                deleted_at=None,
            )

            if parent is not None:
                # Claim the parent's reply slot first so a concurrent hard
                # delete of the parent sees a non-zero child count
                claimed = await self.comment_repository.update_counters(
                    parent.id,
                    direct_children_delta=1,
                    descendant_delta=1,
                    activity_at=now,
                )
                if claimed is None:
                    logfire.warn(
                        "Parent comment removed before reply was stored",
                        parent_comment_id=str(parent.id),
                        page_id=page_id,
                    )
                    raise NotFoundError("Parent comment", str(parent.id))

            try:
                saved = await self.comment_repository.insert(comment)
            except Exception:
                if parent is not None:
                    await self.comment_repository.update_counters(
                        parent.id, direct_children_delta=-1, descendant_delta=-1
                    )
                raise
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                page_id=page_id,
                is_reply=parent is not None,
            )

            if parent is not None and parent.parent_comment_id is not None:
                await self._propagate_to_ancestors(
                    parent.parent_comment_id,
                    direction=1,
                    activity_at=now,
                    adjust_direct_children=False,
                )

            await self._notify(
                PageNotification(
                    page_id=page_id, event=PageEvent.NEW_MESSAGE, comment=saved
                )
            )
            return saved

    async def vote(self, comment_id: CommentId, direction: VoteDirection) -> Comment:
        """Apply an upvote or downvote.

        Args:
            comment_id: Comment ID
            direction: Vote direction

        Returns:
            The comment with its updated vote total

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.vote",
            comment_id=str(comment_id),
            direction=direction.value,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))

            votes = await self.comment_repository.increment_votes(
                comment_id, direction.delta
            )
            if votes is None:
                # Hard-deleted between the lookup and the increment
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment vote applied", comment_id=str(comment_id), votes=votes)
            await self._notify(
                PageNotification(
                    page_id=comment.page_id,
                    event=PageEvent.VOTE_UPDATED,
                    comment_id=comment_id,
                    votes=votes,
                )
            )
            return comment.model_copy(update={"votes": votes})

    async def edit_comment(self, comment_id: CommentId, content: str | None) -> Comment:
        """Replace the content of a comment.

        Args:
            comment_id: Comment ID
            content: New content (trimmed, must not be blank)

        Returns:
            The updated comment

        Raises:
            InvalidInputError: If content is blank
            NotFoundError: If the comment does not exist
            ContentDeletedError: If the comment has been deleted
        """
        valid_content = normalize_content(content)
        if not valid_content:
            raise InvalidInputError("Content is required")

        with logfire.span("comment_service.edit_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))
            if comment.is_deleted:
                raise ContentDeletedError("comment", str(comment_id))

            updated = await self.comment_repository.update_content(
                comment_id, valid_content, edited_at=self.clock()
            )
            if updated is None:
                raise ContentDeletedError("comment", str(comment_id))

            logfire.info(
                "Comment content updated",
                comment_id=str(comment_id),
                content_length=len(valid_content),
            )
            await self._notify(
                PageNotification(
                    page_id=updated.page_id,
                    event=PageEvent.COMMENT_UPDATED,
                    comment=updated,
                )
            )
            return updated

    async def delete_comment(self, comment_id: CommentId) -> DeleteOutcome:
        """Delete a comment while keeping existing replies attached.

        A comment with replies is soft-deleted: its content and username are
        replaced by the deleted sentinel and it keeps counting towards its
        ancestors. A leaf comment is removed and every ancestor loses one
        descendant (its parent also loses a direct child).

        Args:
            comment_id: Comment ID

        Returns:
            What happened to the comment

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))

            removed = False
            if not comment.has_replies:
                removed = await self.comment_repository.hard_delete(comment_id)
                if not removed:
                    logfire.info(
                        "Reply arrived before delete, falling back to soft delete",
                        comment_id=str(comment_id),
                    )

            if removed:
                logfire.info(
                    "Comment removed", comment_id=str(comment_id), page_id=comment.page_id
                )
                if comment.parent_comment_id is not None:
                    await self._propagate_to_ancestors(
                        comment.parent_comment_id, direction=-1, activity_at=self.clock()
                    )
                outcome = DeleteOutcome(
                    comment_id=comment_id, page_id=comment.page_id, removed=True
                )
                await self._notify(
                    PageNotification(
                        page_id=comment.page_id,
                        event=PageEvent.COMMENT_DELETED,
                        comment_id=comment_id,
                    )
                )
                return outcome

            soft_deleted = await self.comment_repository.soft_delete(
                comment_id, deleted_at=self.clock(), sentinel=self.settings.deleted_sentinel
            )
            if soft_deleted is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment soft-deleted",
                comment_id=str(comment_id),
                direct_children_count=soft_deleted.direct_children_count,
            )
            await self._notify(
                PageNotification(
                    page_id=comment.page_id,
                    event=PageEvent.COMMENT_UPDATED,
                    comment=soft_deleted,
                )
            )
            return DeleteOutcome(
                comment_id=comment_id,
                page_id=comment.page_id,
                removed=False,
                comment=soft_deleted,
            )

    async def _propagate_to_ancestors(
        self,
        parent_comment_id: CommentId,
        direction: int,
        activity_at: datetime,
        adjust_direct_children: bool = True,
    ) -> None:
        """Walk from a comment up to the thread root adjusting counters.

        The starting comment's direct_children_count changes by ``direction``
        unless ``adjust_direct_children`` is False; every comment on the way
        (the start included) has descendant_count changed by ``direction``
        and its subthread activity moved to ``activity_at``. Each step is its
        own atomic update.
        """
        depth = 0
        current_id: CommentId | None = parent_comment_id
        try:
            while current_id is not None:
                ancestor = await self.comment_repository.update_counters(
                    current_id,
                    direct_children_delta=(
                        direction if depth == 0 and adjust_direct_children else 0
                    ),
                    descendant_delta=direction,
                    activity_at=activity_at,
                )
                if ancestor is None:
                    logfire.warn(
                        "Ancestor missing during counter propagation",
                        comment_id=str(current_id),
                        depth=depth,
                    )
                    break
                current_id = ancestor.parent_comment_id
                depth += 1
        except StorageError as e:
            logfire.error(
                "Counter propagation interrupted; ancestor counters may lag",
                start_comment_id=str(parent_comment_id),
                failed_comment_id=str(current_id),
                depth=depth,
                error=str(e),
            )
            return

        logfire.debug(
            "Ancestor counters updated",
            start_comment_id=str(parent_comment_id),
            ancestors=depth,
            direction=direction,
        )

    async def _notify(self, notification: PageNotification) -> None:
        """Publish a notification without letting failures reach the caller."""
        try:
            await self.notifier.publish(notification)
        except Exception as e:
            logfire.warn(
                "Notification delivery failed",
                page_id=notification.page_id,
                event_name=notification.event.value,
                error=str(e),
            )

    def _clamp_limit(self, limit: int | None) -> int:
        if limit is None or limit < 1:
            return self.settings.default_limit
        return min(limit, self.settings.max_limit)

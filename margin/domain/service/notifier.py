"""Notification port for page subscribers.

The comment service publishes a notification after every committed write.
Delivery is fire-and-forget: a failing notifier never rolls back or fails
the write that triggered it.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from margin.domain.model.comment import Comment
from margin.domain.model.common import DomainModel
from margin.domain.value import CommentId, PageId


class PageEvent(str, Enum):
    """Events published to a page's subscribers."""

    INIT_MESSAGES = "init-messages"
    NEW_MESSAGE = "new-message"
    VOTE_UPDATED = "vote-updated"
    COMMENT_UPDATED = "comment-updated"
    COMMENT_DELETED = "comment-deleted"
    COMMENT_ERROR = "comment-error"


class PageNotification(DomainModel):
    """A single event scoped to one page."""

    page_id: PageId
    event: PageEvent
    comment: Optional[Comment] = None
    comment_id: Optional[CommentId] = None
    votes: Optional[int] = None


class CommentNotifier(ABC):
    """Publishes page notifications to subscribers."""

    @abstractmethod
    async def publish(self, notification: PageNotification) -> None:
        """Deliver a notification to every subscriber of its page."""
        pass

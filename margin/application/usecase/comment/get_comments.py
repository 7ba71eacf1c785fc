"""Get comments use case."""

from datetime import datetime

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.domain.model import Comment
from margin.domain.service import CommentService
from margin.domain.value import PageId


class CommentItem(ApiModel):
    """Comment item in response."""

    id: str
    page_id: str
    username: str
    content: str
    timestamp: datetime
    edited_at: datetime | None
    votes: int
    parent_comment_id: str | None
    top_level_comment_id: str | None
    descendant_count: int
    direct_children_count: int
    last_subthread_activity: datetime
    is_deleted: bool

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls(
            id=str(comment.id),
            page_id=comment.page_id,
            username=comment.username,
            content=comment.content,
            timestamp=comment.timestamp,
            edited_at=comment.edited_at,
            votes=comment.votes,
            parent_comment_id=(
                str(comment.parent_comment_id) if comment.parent_comment_id else None
            ),
            top_level_comment_id=(
                str(comment.top_level_comment_id)
                if comment.top_level_comment_id
                else None
            ),
            descendant_count=comment.descendant_count,
            direct_children_count=comment.direct_children_count,
            last_subthread_activity=comment.last_subthread_activity,
            is_deleted=comment.is_deleted,
        )


class GetCommentsRequest(ApiModel):
    """Get comments request."""

    page_id: str
    limit: int | None = None
    offset: int = 0


class GetCommentsResponse(ApiModel):
    """Get comments response."""

    success: bool = True
    page_id: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase(BaseUseCase):
    """Use case for reading the most recent comments on a page."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Comments are returned oldest first. ``total`` counts every comment
        stored for the page, not just the returned window.

        Args:
            request: Get comments request with page ID and paging

        Returns:
            Page of comments and the page total
        """
        page_id = PageId(request.page_id)

        comments = await self.comment_service.get_comments_for_page(
            page_id=page_id,
            limit=request.limit,
            offset=request.offset,
        )
        total = await self.comment_service.count_comments_for_page(page_id)

        return GetCommentsResponse(
            page_id=page_id,
            comments=[CommentItem.from_comment(c) for c in comments],
            total=total,
        )

"""Post comment use case."""

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.application.usecase.comment.get_comments import CommentItem
from margin.domain.service import CommentService
from margin.domain.value import parse_comment_id


class PostCommentRequest(ApiModel):
    """Post comment request.

    Every field is optional at this level so that missing values surface
    as domain validation errors with a client-facing message.
    """

    page_id: str | None = None
    username: str | None = None
    content: str | None = None
    parent_comment_id: str | None = None


class PostCommentResponse(ApiModel):
    """Post comment response."""

    success: bool = True
    comment: CommentItem


class PostCommentUseCase(BaseUseCase):
    """Use case for creating a top-level comment or a reply."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize post comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: PostCommentRequest) -> PostCommentResponse:
        """Execute post comment flow.

        Args:
            request: Post comment request

        Returns:
            The created comment

        Raises:
            InvalidInputError: If content or page ID is missing
            ValidationError: If parentCommentId is malformed or on another page
            NotFoundError: If the parent comment does not exist
        """
        parent_comment_id = (
            parse_comment_id(request.parent_comment_id, field="parentCommentId")
            if request.parent_comment_id
            else None
        )

        comment = await self.comment_service.post_comment(
            page_id=request.page_id,
            username=request.username,
            content=request.content,
            parent_comment_id=parent_comment_id,
        )
        return PostCommentResponse(comment=CommentItem.from_comment(comment))

"""Edit comment use case."""

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.application.usecase.comment.get_comments import CommentItem
from margin.domain.service import CommentService
from margin.domain.value import parse_comment_id


class EditCommentRequest(ApiModel):
    """Edit comment request."""

    comment_id: str
    content: str | None = None


class EditCommentResponse(ApiModel):
    """Edit comment response."""

    success: bool = True
    comment: CommentItem


class EditCommentUseCase(BaseUseCase):
    """Use case for replacing the content of a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize edit comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: EditCommentRequest) -> EditCommentResponse:
        """Execute edit comment flow.

        Args:
            request: Edit comment request

        Returns:
            The updated comment

        Raises:
            InvalidInputError: If the new content is blank
            NotFoundError: If the comment does not exist
            ContentDeletedError: If the comment has been deleted
        """
        comment = await self.comment_service.edit_comment(
            parse_comment_id(request.comment_id), request.content
        )
        return EditCommentResponse(comment=CommentItem.from_comment(comment))

"""Delete comment use case."""

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.application.usecase.comment.get_comments import CommentItem
from margin.domain.error import ValidationError
from margin.domain.service import CommentService
from margin.domain.value import parse_comment_id


class DeleteCommentRequest(ApiModel):
    """Delete comment request."""

    comment_id: str | None = None


class DeleteCommentResponse(ApiModel):
    """Delete comment response.

    ``removed`` is False when the comment had replies and was soft-deleted;
    ``comment`` then holds its sentinel state.
    """

    success: bool = True
    comment_id: str
    page_id: str
    removed: bool
    comment: CommentItem | None = None


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            ValidationError: If the comment ID is missing or malformed
            NotFoundError: If the comment does not exist
        """
        if not request.comment_id:
            raise ValidationError("Missing commentId")

        outcome = await self.comment_service.delete_comment(
            parse_comment_id(request.comment_id)
        )
        return DeleteCommentResponse(
            comment_id=str(outcome.comment_id),
            page_id=outcome.page_id,
            removed=outcome.removed,
            comment=CommentItem.from_comment(outcome.comment) if outcome.comment else None,
        )

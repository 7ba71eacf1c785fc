"""Get thread use case."""

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.application.usecase.comment.get_comments import CommentItem
from margin.domain.service import CommentService
from margin.domain.value import parse_comment_id


class GetThreadRequest(ApiModel):
    """Get thread request."""

    comment_id: str


class GetThreadResponse(ApiModel):
    """Get thread response."""

    success: bool = True
    top_level_comment_id: str
    comments: list[CommentItem]


class GetThreadUseCase(BaseUseCase):
    """Use case for reading a whole thread from any comment in it."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Returns:
            Root comment first, then every reply oldest first

        Raises:
            ValidationError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
        """
        thread = await self.comment_service.get_thread(
            parse_comment_id(request.comment_id)
        )
        return GetThreadResponse(
            top_level_comment_id=str(thread[0].id),
            comments=[CommentItem.from_comment(c) for c in thread],
        )

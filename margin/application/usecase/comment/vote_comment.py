"""Vote on comment use case."""

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.domain.error import ValidationError
from margin.domain.service import CommentService
from margin.domain.value import VoteDirection, parse_comment_id


class VoteCommentRequest(ApiModel):
    """Vote request."""

    comment_id: str | None = None
    vote_type: str | None = None  # "upvote" or "downvote"


class VoteCommentResponse(ApiModel):
    """Vote response."""

    success: bool = True
    comment_id: str
    page_id: str
    votes: int


class VoteCommentUseCase(BaseUseCase):
    """Use case for upvoting or downvoting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: VoteCommentRequest) -> VoteCommentResponse:
        """Execute vote flow.

        Raises:
            ValidationError: If the comment ID or vote type is missing or invalid
            NotFoundError: If the comment does not exist
        """
        if not request.comment_id or not request.vote_type:
            raise ValidationError("Missing required fields")

        try:
            direction = VoteDirection(request.vote_type)
        except ValueError:
            raise ValidationError(f"Invalid vote type: {request.vote_type}")

        comment = await self.comment_service.vote(
            parse_comment_id(request.comment_id), direction
        )
        return VoteCommentResponse(
            comment_id=str(comment.id),
            page_id=comment.page_id,
            votes=comment.votes,
        )

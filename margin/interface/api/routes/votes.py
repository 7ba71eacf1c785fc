"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from margin.application.usecase.comment import (
    VoteCommentRequest,
    VoteCommentResponse,
    VoteCommentUseCase,
)

router = APIRouter(prefix="/api", tags=["votes"], route_class=DishkaRoute)


@router.post("/votes", response_model=VoteCommentResponse)
async def vote(
    request: VoteCommentRequest,
    vote_comment_use_case: FromDishka[VoteCommentUseCase],
) -> VoteCommentResponse:
    """Upvote or downvote a comment.

    Args:
        request: ``{commentId, voteType}`` with voteType ``upvote`` or ``downvote``
        vote_comment_use_case: Vote use case from DI

    Returns:
        The comment's new vote total
    """
    return await vote_comment_use_case.execute(request)

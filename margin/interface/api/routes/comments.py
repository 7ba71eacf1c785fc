"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status

from margin.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentResponse,
    EditCommentUseCase,
    GetActiveThreadsRequest,
    GetActiveThreadsResponse,
    GetActiveThreadsUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    PostCommentRequest,
    PostCommentResponse,
    PostCommentUseCase,
)
from margin.application.usecase.base import ApiModel

router = APIRouter(prefix="/api", tags=["comments"], route_class=DishkaRoute)


class EditCommentAPIRequest(ApiModel):
    """API request for editing a comment."""

    content: str | None = None


@router.get("/messages/{page_id}", response_model=GetCommentsResponse)
async def get_comments(
    page_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
) -> GetCommentsResponse:
    """Get the most recent comments for a page, oldest first.

    Args:
        page_id: Page slug
        get_comments_use_case: Get comments use case from DI
        limit: Page size (server default when omitted, clamped to the maximum)
        offset: Number of most recent comments to skip

    Returns:
        Comments and the total stored for the page
    """
    request = GetCommentsRequest(page_id=page_id, limit=limit, offset=offset)
    return await get_comments_use_case.execute(request)


@router.get("/messages/{page_id}/active", response_model=GetActiveThreadsResponse)
async def get_active_threads(
    page_id: str,
    get_active_threads_use_case: FromDishka[GetActiveThreadsUseCase],
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
) -> GetActiveThreadsResponse:
    """Get top-level comments ordered by most recent activity in their thread."""
    request = GetActiveThreadsRequest(page_id=page_id, limit=limit, offset=offset)
    return await get_active_threads_use_case.execute(request)


@router.post(
    "/messages",
    response_model=PostCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_comment(
    request: PostCommentRequest,
    post_comment_use_case: FromDishka[PostCommentUseCase],
) -> PostCommentResponse:
    """Create a comment or a reply.

    Args:
        request: ``{username?, content, pageId, parentCommentId?}``
        post_comment_use_case: Post comment use case from DI

    Returns:
        Created comment
    """
    return await post_comment_use_case.execute(request)


@router.get("/comments/{comment_id}/thread", response_model=GetThreadResponse)
async def get_thread(
    comment_id: str,
    get_thread_use_case: FromDishka[GetThreadUseCase],
) -> GetThreadResponse:
    """Get the thread containing a comment, root first."""
    return await get_thread_use_case.execute(GetThreadRequest(comment_id=comment_id))


@router.patch("/comments/{comment_id}", response_model=EditCommentResponse)
async def edit_comment(
    comment_id: str,
    request: EditCommentAPIRequest,
    edit_comment_use_case: FromDishka[EditCommentUseCase],
) -> EditCommentResponse:
    """Replace the content of a comment.

    Deleted comments cannot be edited (409).
    """
    use_case_request = EditCommentRequest(
        comment_id=comment_id, content=request.content
    )
    return await edit_comment_use_case.execute(use_case_request)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> DeleteCommentResponse:
    """Delete a comment.

    A comment with replies is soft-deleted and stays in its thread.
    """
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id)
    )

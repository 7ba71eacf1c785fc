"""Get active threads use case."""

from margin.application.usecase.base import ApiModel, BaseUseCase
from margin.application.usecase.comment.get_comments import CommentItem
from margin.domain.service import CommentService
from margin.domain.value import PageId


class GetActiveThreadsRequest(ApiModel):
    """Get active threads request."""

    page_id: str
    limit: int | None = None
    offset: int = 0


class GetActiveThreadsResponse(ApiModel):
    """Get active threads response."""

    success: bool = True
    page_id: str
    threads: list[CommentItem]


class GetActiveThreadsUseCase(BaseUseCase):
    """Use case for listing threads by most recent activity."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: GetActiveThreadsRequest
    ) -> GetActiveThreadsResponse:
        threads = await self.comment_service.get_active_threads(
            PageId(request.page_id), limit=request.limit, offset=request.offset
        )
        return GetActiveThreadsResponse(
            page_id=request.page_id,
            threads=[CommentItem.from_comment(c) for c in threads],
        )

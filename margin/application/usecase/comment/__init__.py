"""Comment use cases."""

from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .edit_comment import EditCommentRequest, EditCommentResponse, EditCommentUseCase
from .get_active_threads import (
    GetActiveThreadsRequest,
    GetActiveThreadsResponse,
    GetActiveThreadsUseCase,
)
from .get_comments import (
    CommentItem,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from .get_thread import GetThreadRequest, GetThreadResponse, GetThreadUseCase
from .post_comment import PostCommentRequest, PostCommentResponse, PostCommentUseCase
from .vote_comment import VoteCommentRequest, VoteCommentResponse, VoteCommentUseCase

__all__ = [
    "CommentItem",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "EditCommentRequest",
    "EditCommentResponse",
    "EditCommentUseCase",
    "GetActiveThreadsRequest",
    "GetActiveThreadsResponse",
    "GetActiveThreadsUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "PostCommentRequest",
    "PostCommentResponse",
    "PostCommentUseCase",
    "VoteCommentRequest",
    "VoteCommentResponse",
    "VoteCommentUseCase",
]

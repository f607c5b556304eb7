"""Comment use cases."""

from .common import Subthread, ThreadEntry
from .get_comment import GetCommentRequest, GetCommentResponse, GetCommentUseCase
from .get_replies import GetRepliesRequest, GetRepliesResponse, GetRepliesUseCase
from .list_user_comments import ListUserCommentsRequest, ListUserCommentsUseCase
from .post_comment import (
    CommentOperation,
    PostCommentRequest,
    PostCommentResponse,
    PostCommentUseCase,
)

__all__ = [
    "CommentOperation",
    "GetCommentRequest",
    "GetCommentResponse",
    "GetCommentUseCase",
    "GetRepliesRequest",
    "GetRepliesResponse",
    "GetRepliesUseCase",
    "ListUserCommentsRequest",
    "ListUserCommentsUseCase",
    "PostCommentRequest",
    "PostCommentResponse",
    "PostCommentUseCase",
    "Subthread",
    "ThreadEntry",
]

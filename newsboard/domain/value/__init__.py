"""Domain value objects for newsboard."""

from newsboard.domain.value.identifiers import (
    NEW_ID,
    ROOT_COMMENT_ID,
    CommentId,
    ItemId,
    UserId,
    comment_votable_id,
    item_votable_id,
)
from newsboard.domain.value.types import (
    TEXT_URL_PREFIX,
    ItemUrl,
    UserFlag,
    Username,
    VotableType,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "ItemId",
    "CommentId",
    "ROOT_COMMENT_ID",
    "NEW_ID",
    "item_votable_id",
    "comment_votable_id",
    # Types
    "ItemUrl",
    "TEXT_URL_PREFIX",
    "Username",
    "UserFlag",
    "VoteType",
    "VotableType",
]

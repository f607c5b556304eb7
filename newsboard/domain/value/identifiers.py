"""Strongly typed identifiers for newsboard domain entities.

Item and user ids are minted from named counters so they stay stable
across storage backends. Comment ids are scoped per item.
"""

from typing import NewType

UserId = NewType("UserId", int)
ItemId = NewType("ItemId", int)
CommentId = NewType("CommentId", int)

# Parent id of top-level comments
ROOT_COMMENT_ID = CommentId(-1)

# Sentinel used by submit/post-comment requests for "create new"
NEW_ID = -1


def item_votable_id(item_id: ItemId) -> str:
    """Ledger key for an item."""
    return str(item_id)


def comment_votable_id(item_id: ItemId, comment_id: CommentId) -> str:
    """Ledger key for a comment: ``<item_id>-<comment_id>``."""
    return f"{item_id}-{comment_id}"

"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from newsboard.domain.model import Comment, Item, PasswordResetToken, User, Vote
from newsboard.domain.value import (
    CommentId,
    ItemId,
    ItemUrl,
    UserId,
    Username,
    VotableType,
    VoteType,
)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(row["id"]),
        username=Username(row["username"]),
        password_hash=row["password_hash"],
        created_at=row["created_at"],
        karma=row["karma"],
        about=row.get("about") or "",
        email=row.get("email"),
        auth_token=row["auth_token"],
        api_secret=row["api_secret"],
        flags=row.get("flags") or "",
        karma_incr_time=row.get("karma_incr_time") or 0,
        replies=row.get("replies") or 0,
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["username"] = str(user.username)
    return data


def row_to_item(row: Dict[str, Any]) -> Item:
    """Convert database row to Item domain model.

    Args:
        row: Database row as dict

    Returns:
        Item domain model
    """
    return Item(
        id=ItemId(row["id"]),
        title=row["title"],
        url=ItemUrl(row["url"]),
        author_id=UserId(row["author_id"]),
        created_at=row["created_at"],
        score=row["score"],
        rank=row["rank"],
        comment_count=row["comment_count"],
        deleted=row["deleted"],
    )


def item_to_dict(item: Item) -> Dict[str, Any]:
    """Convert Item domain model to database dict."""
    data = item.model_dump()
    data["url"] = str(item.url)
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(row["id"]),
        item_id=ItemId(row["item_id"]),
        parent_id=CommentId(row["parent_id"]),
        author_id=UserId(row["author_id"]),
        body=row["body"],
        created_at=row["created_at"],
        score=row["score"],
        deleted=row["deleted"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        user_id=UserId(row["user_id"]),
        votable_type=VotableType(row["votable_type"]),
        votable_id=row["votable_id"],
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Enums are stored by value.
    """
    return vote.model_dump(mode="json")


def row_to_password_reset_token(row: Dict[str, Any]) -> PasswordResetToken:
    """Convert database row to PasswordResetToken domain model."""
    return PasswordResetToken(
        token=row["token"],
        user_id=UserId(row["user_id"]),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        used=row["used"],
    )


def password_reset_token_to_dict(token: PasswordResetToken) -> Dict[str, Any]:
    """Convert PasswordResetToken domain model to database dict."""
    return token.model_dump()

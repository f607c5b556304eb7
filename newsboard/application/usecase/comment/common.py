"""Response models shared by the comment use cases."""

from typing import Iterable

from pydantic import BaseModel

from newsboard.domain.model import ThreadComment


class ThreadEntry(BaseModel):
    """One rendered comment: indentation level plus the annotated comment."""

    comment: ThreadComment
    level: int


def to_entries(thread: Iterable[tuple[ThreadComment, int]]) -> list[ThreadEntry]:
    """Drain a ``(comment, level)`` traversal into response entries."""
    return [ThreadEntry(comment=comment, level=level) for comment, level in thread]


class Subthread(BaseModel):
    """A comment followed by every reply beneath it (replies start at level 0)."""

    comment: ThreadComment
    replies: list[ThreadEntry]

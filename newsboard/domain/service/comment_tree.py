"""Comment tree assembly and traversal.

A thread is loaded flat in one query, indexed by parent id, and walked
depth-first. Ordering is applied per sibling group, never globally.
"""

from collections import defaultdict
from typing import Callable, Iterable, Iterator, Sequence

from newsboard.domain.model import ThreadComment
from newsboard.domain.value import ROOT_COMMENT_ID, CommentId

# (siblings, level) -> ordered siblings
Ordering = Callable[[Sequence[ThreadComment], int], list[ThreadComment]]


def default_ordering(siblings: Sequence[ThreadComment], level: int) -> list[ThreadComment]:
    """Higher score first; equal scores newest first."""
    return sorted(siblings, key=lambda c: (c.score, c.created_at), reverse=True)


class CommentTree:
    """Parent-indexed forest of one item's comments."""

    def __init__(
        self,
        comments: Iterable[ThreadComment],
        ordering: Ordering = default_ordering,
    ) -> None:
        self._by_parent: dict[CommentId, list[ThreadComment]] = defaultdict(list)
        for comment in comments:
            self._by_parent[comment.parent_id].append(comment)
        self.ordering = ordering

    def __len__(self) -> int:
        return sum(len(children) for children in self._by_parent.values())

    def children(self, parent_id: CommentId) -> list[ThreadComment]:
        """Unordered direct children of ``parent_id``."""
        return list(self._by_parent.get(parent_id, ()))

    def has_children(self, comment_id: CommentId) -> bool:
        return bool(self._by_parent.get(comment_id))

    def walk(
        self, root: CommentId = ROOT_COMMENT_ID
    ) -> Iterator[tuple[ThreadComment, int]]:
        """Lazily yield ``(comment, level)`` pairs in depth-first pre-order.

        Direct children of ``root`` are at level 0. A deleted comment is
        yielded only when it has replies, so they keep their position. Every
        call starts a fresh traversal.
        """
        # Stack of sibling iterators, one per open level
        stack = [iter(self._ordered(root, 0))]
        while stack:
            level = len(stack) - 1
            comment = next(stack[-1], None)
            if comment is None:
                stack.pop()
                continue

            if comment.deleted and not self.has_children(comment.id):
                continue

            yield comment, level
            if self.has_children(comment.id):
                stack.append(iter(self._ordered(comment.id, level + 1)))

    def _ordered(self, parent_id: CommentId, level: int) -> list[ThreadComment]:
        siblings = self._by_parent.get(parent_id)
        if not siblings:
            return []
        return self.ordering(siblings, level)

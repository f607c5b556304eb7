"""Comment domain service."""

from typing import Iterator

import logfire

from newsboard.config import Settings
from newsboard.domain.error import (
    ContentDeletedException,
    NotAuthorizedError,
    ValidationError,
)
from newsboard.domain.model import Comment, Item, ThreadComment, User
from newsboard.domain.repository import CommentRepository, ItemRepository
from newsboard.domain.value import (
    ROOT_COMMENT_ID,
    CommentId,
    ItemId,
    UserId,
    VotableType,
    VoteType,
    comment_votable_id,
)
from newsboard.util.clock import Clock

from .base import Service
from .comment_tree import CommentTree, Ordering, default_ordering
from .counter_service import CounterService
from .user_service import UserService
from .vote_service import VoteService


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        item_repository: ItemRepository,
        vote_service: VoteService,
        counter_service: CounterService,
        user_service: UserService,
        settings: Settings,
        clock: Clock,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            item_repository: Item repository (comment counts)
            vote_service: Vote ledger
            counter_service: Per-item comment id allocation
            user_service: Unread replies, karma, usernames
            settings: Application settings
            clock: Time source
        """
        self.comment_repository = comment_repository
        self.item_repository = item_repository
        self.vote_service = vote_service
        self.counter_service = counter_service
        self.user_service = user_service
        self.settings = settings
        self.clock = clock

    async def annotate(self, comments: list[Comment]) -> list[ThreadComment]:
        """Attach live ledger counts and author names."""
        by_item: dict[ItemId, list[Comment]] = {}
        for comment in comments:
            by_item.setdefault(comment.item_id, []).append(comment)

        counts = {}
        for item_id, group in by_item.items():
            counts.update(
                await self.vote_service.get_vote_counts_many(
                    VotableType.COMMENT,
                    [comment_votable_id(item_id, c.id) for c in group],
                )
            )
        usernames = await self.user_service.get_usernames(
            [c.author_id for c in comments]
        )

        annotated = []
        for comment in comments:
            vote_counts = counts[comment_votable_id(comment.item_id, comment.id)]
            annotated.append(
                ThreadComment(
                    comment=comment,
                    up=vote_counts.up,
                    down=vote_counts.down,
                    author_username=usernames.get(comment.author_id),
                )
            )
        return annotated

    async def fetch(self, item_id: ItemId, comment_id: CommentId) -> ThreadComment | None:
        """Point lookup with the score recomputed from the vote ledger.

        Args:
            item_id: Item ID
            comment_id: Per-item comment ID

        Returns:
            Annotated comment, or None if it doesn't exist
        """
        with logfire.span(
            "comment_service.fetch", item_id=item_id, comment_id=comment_id
        ):
            comment = await self.comment_repository.find(item_id, comment_id)
            if comment is None:
                logfire.warn("Comment not found", item_id=item_id, comment_id=comment_id)
                return None
            annotated = await self.annotate([comment])
            return annotated[0]

    async def build_tree(
        self, item_id: ItemId, ordering: Ordering = default_ordering
    ) -> CommentTree:
        """Load the whole thread once and index it by parent."""
        with logfire.span("comment_service.build_tree", item_id=item_id):
            comments = await self.comment_repository.find_by_item(item_id)
            tree = CommentTree(await self.annotate(comments), ordering)
            logfire.info("Thread loaded", item_id=item_id, count=len(comments))
            return tree

    async def render(
        self,
        item_id: ItemId,
        root: CommentId = ROOT_COMMENT_ID,
        ordering: Ordering = default_ordering,
    ) -> Iterator[tuple[ThreadComment, int]]:
        """Depth-first ``(comment, level)`` sequence of a thread or subthread."""
        tree = await self.build_tree(item_id, ordering)
        return tree.walk(root)

    def validate_body(self, body: str) -> None:
        """Check comment length bounds.

        Raises:
            ValidationError: Too short or too long
        """
        limits = self.settings.comments
        if len(body.strip()) < limits.min_length:
            raise ValidationError(
                f"Comment must be at least {limits.min_length} characters long"
            )
        if len(body) > limits.max_length:
            raise ValidationError(
                f"Comment too long (max {limits.max_length} characters)"
            )

    async def insert_comment(
        self,
        author: User,
        item: Item,
        body: str,
        parent_id: CommentId = ROOT_COMMENT_ID,
    ) -> Comment:
        """Post a new comment.

        Every write below belongs to the caller's transaction: the comment,
        the author's upvote, the item's comment count and the parent
        author's unread replies.

        Args:
            author: Commenting user
            item: Item being discussed (must not be deleted)
            body: Comment text
            parent_id: Comment replied to, -1 for a top-level comment

        Returns:
            The created comment

        Raises:
            ValidationError: Bad length or unknown parent
            ContentDeletedException: The item is deleted
        """
        with logfire.span(
            "comment_service.insert_comment",
            item_id=item.id,
            author_id=author.id,
            parent_id=parent_id,
        ):
            if item.deleted:
                raise ContentDeletedException("item", str(item.id))
            self.validate_body(body)

            parent = None
            if parent_id != ROOT_COMMENT_ID:
                parent = await self.comment_repository.find(item.id, parent_id)
                if parent is None:
                    logfire.error(
                        "Parent comment not found", item_id=item.id, parent_id=parent_id
                    )
                    raise ValidationError("Parent comment not found")

            comment = Comment(
                id=await self.counter_service.next_comment_id(item.id),
                item_id=item.id,
                parent_id=parent_id,
                author_id=author.id,
                body=body,
                created_at=self.clock.now(),
            )
            await self.comment_repository.insert(comment)

            await self.vote_service.cast_vote(
                author.id,
                VotableType.COMMENT,
                comment_votable_id(item.id, comment.id),
                VoteType.UP,
            )
            await self.comment_repository.update_score(item.id, comment.id, 1)
            await self.item_repository.increment_comment_count(item.id, 1)
            if parent is not None and parent.author_id != author.id:
                await self.user_service.increment_replies(parent.author_id)

            logfire.info("Comment created", item_id=item.id, comment_id=comment.id)
            return comment.model_copy(update={"score": 1})

    async def _owned(self, user: User, item_id: ItemId, comment_id: CommentId) -> Comment | None:
        comment = await self.comment_repository.find(item_id, comment_id)
        if comment is None:
            return None
        if comment.author_id != user.id:
            raise NotAuthorizedError("comment", f"{item_id}-{comment_id}", str(user.id))
        return comment

    async def edit_comment(
        self, user: User, item_id: ItemId, comment_id: CommentId, body: str
    ) -> Comment | None:
        """Replace a comment body (owner only).

        Returns:
            Updated comment, or None if it doesn't exist

        Raises:
            NotAuthorizedError: Not the author
            ContentDeletedException: Comment is deleted
            ValidationError: Body too long
        """
        with logfire.span(
            "comment_service.edit_comment", item_id=item_id, comment_id=comment_id
        ):
            comment = await self._owned(user, item_id, comment_id)
            if comment is None:
                return None
            if comment.deleted:
                raise ContentDeletedException("comment", f"{item_id}-{comment_id}")
            self.validate_body(body)

            updated = await self.comment_repository.update_body(item_id, comment_id, body)
            if updated is None:
                raise ContentDeletedException("comment", f"{item_id}-{comment_id}")
            return updated

    async def delete_comment(
        self, user: User, item_id: ItemId, comment_id: CommentId
    ) -> bool:
        """Soft-delete a comment (owner only) and decrement the item count.

        Returns:
            False if the comment doesn't exist or was already deleted

        Raises:
            NotAuthorizedError: Not the author
        """
        with logfire.span(
            "comment_service.delete_comment", item_id=item_id, comment_id=comment_id
        ):
            comment = await self._owned(user, item_id, comment_id)
            if comment is None:
                return False

            deleted = await self.comment_repository.mark_deleted(item_id, comment_id)
            if deleted:
                await self.item_repository.increment_comment_count(item_id, -1)
                logfire.info("Comment deleted", item_id=item_id, comment_id=comment_id)
            return deleted

    async def vote_comment(
        self, voter: User, comment: Comment, vote_type: VoteType
    ) -> bool:
        """Vote on a comment and reconcile its stored score with the ledger.

        Returns:
            False if the voter had already voted on this comment
        """
        votable_id = comment_votable_id(comment.item_id, comment.id)
        with logfire.span("comment_service.vote_comment", votable_id=votable_id):
            voted = await self.vote_service.cast_vote(
                voter.id, VotableType.COMMENT, votable_id, vote_type
            )
            if not voted:
                return False

            counts = await self.vote_service.get_vote_counts(
                VotableType.COMMENT, votable_id
            )
            await self.comment_repository.update_score(
                comment.item_id, comment.id, counts.difference
            )
            if vote_type == VoteType.UP and comment.author_id != voter.id:
                await self.user_service.transfer_karma(
                    comment.author_id, self.settings.karma.upvote_transfer
                )
            return True

    async def get_user_comments(
        self, author_id: UserId, start: int, count: int
    ) -> tuple[list[ThreadComment], int]:
        """A user's live comments, newest first, with the total."""
        comments = await self.comment_repository.find_by_author(author_id, count, start)
        total = await self.comment_repository.count_by_author(author_id)
        return await self.annotate(comments), total

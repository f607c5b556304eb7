"""Item domain service: submission and edit policy."""

from typing import Sequence

import logfire

from newsboard.config import Settings
from newsboard.domain.error import (
    ContentDeletedException,
    NotAuthorizedError,
    RateLimitedError,
    ValidationError,
)
from newsboard.domain.model import Item, ItemView, RequestContext, User
from newsboard.domain.repository import ItemRepository, RepostWindowRepository
from newsboard.domain.value import (
    ItemId,
    ItemUrl,
    UserId,
    VotableType,
    VoteType,
    item_votable_id,
)
from newsboard.util.clock import Clock

from .base import Service
from .counter_service import CounterService
from .ranking_service import RankingService
from .rate_limit_service import RateLimitService, throttle_key
from .user_service import UserService
from .vote_service import VoteService


def submitted_recently_key(user_id: UserId) -> str:
    return f"user:{user_id}:submitted_recently"


class ItemService(Service):
    """Domain service for item submission, edits, deletion and votes."""

    def __init__(
        self,
        item_repository: ItemRepository,
        repost_window_repository: RepostWindowRepository,
        vote_service: VoteService,
        ranking_service: RankingService,
        rate_limit_service: RateLimitService,
        counter_service: CounterService,
        user_service: UserService,
        settings: Settings,
        clock: Clock,
    ) -> None:
        """Initialize item service.

        Args:
            item_repository: Item repository
            repost_window_repository: Recently submitted urls
            vote_service: Vote ledger
            ranking_service: Score and rank reconciliation
            rate_limit_service: Cooldowns and throttles
            counter_service: Id allocation
            user_service: Karma transfer and author lookup
            settings: Application settings
            clock: Time source
        """
        self.item_repository = item_repository
        self.repost_window_repository = repost_window_repository
        self.vote_service = vote_service
        self.ranking_service = ranking_service
        self.rate_limit_service = rate_limit_service
        self.counter_service = counter_service
        self.user_service = user_service
        self.settings = settings
        self.clock = clock

    def validate_submission(self, title: str, url: str, text: str) -> None:
        """Check title, url and text bounds.

        Raises:
            ValidationError: On the first violated rule
        """
        limits = self.settings.submission
        if not title.strip():
            raise ValidationError("Title is required")
        if len(title) > limits.title_max_length:
            raise ValidationError(
                f"Title too long (max {limits.title_max_length} characters)"
            )
        if not url and not text.strip():
            raise ValidationError("Please specify a news url or a text")
        if url and not (url.startswith("http://") or url.startswith("https://")):
            raise ValidationError("URL must start with http:// or https://")
        if len(url) > limits.url_max_length:
            raise ValidationError(f"URL too long (max {limits.url_max_length} characters)")
        if len(text) > limits.text_max_length:
            raise ValidationError(
                f"Text too long (max {limits.text_max_length} characters)"
            )

    def normalize_url(self, url: str, text: str) -> ItemUrl:
        """Empty url means a text post: embed the truncated text instead."""
        if not url:
            return ItemUrl.for_text(text, self.settings.submission.text_marker_length)
        return ItemUrl(url)

    async def allowed_to_post_in_seconds(self, ctx: RequestContext) -> int:
        """Seconds before the context user may submit again (0 = now)."""
        if ctx.user is None:
            return 0
        if ctx.is_admin:
            return 0
        ttl = await self.rate_limit_service.ttl(submitted_recently_key(ctx.user.id))
        return max(ttl, 0)

    async def get_item(self, item_id: ItemId) -> Item | None:
        """Get an item by ID, including deleted ones."""
        return await self.item_repository.find_by_id(item_id)

    async def find_recent_submission(self, url: ItemUrl) -> ItemId | None:
        """Item that claimed a link url within the repost window."""
        if url.is_text:
            return None
        now = self.clock.now()
        await self.repost_window_repository.purge_expired(now)
        return await self.repost_window_repository.find_item_id(str(url), now)

    async def insert_item(
        self, author: User, title: str, url: str, text: str
    ) -> tuple[ItemId, bool]:
        """Create an item, or return the one that already claimed the url.

        On creation the author upvotes the item, the author's submission
        cooldown starts and link urls enter the repost window.

        Args:
            author: Submitting user
            title: Item title
            url: Link url, empty for a text post
            text: Body of a text post

        Returns:
            (item id, created). ``created`` is False when an item submitted
            within the repost window was returned instead.

        Raises:
            ValidationError: Malformed title, url or text
        """
        with logfire.span("item_service.insert_item", author_id=author.id):
            self.validate_submission(title, url, text)
            item_url = self.normalize_url(url, text)

            existing = await self.find_recent_submission(item_url)
            if existing is not None:
                logfire.info("Repost within window", url=str(item_url), item_id=existing)
                return existing, False

            now = self.clock.now()
            item = Item(
                id=await self.counter_service.next_item_id(),
                title=title,
                url=item_url,
                author_id=author.id,
                created_at=now,
            )
            await self.item_repository.insert(item)

            await self.vote_service.cast_vote(
                author.id, VotableType.ITEM, item_votable_id(item.id), VoteType.UP
            )
            await self.ranking_service.refresh(item.id)

            limits = self.settings.submission
            await self.rate_limit_service.set(
                submitted_recently_key(author.id), limits.submission_break
            )
            if not item_url.is_text:
                await self.repost_window_repository.upsert(
                    str(item_url), item.id, now + limits.prevent_repost_time
                )

            logfire.info("Item created", item_id=item.id, author_id=author.id)
            return item.id, True

    async def _throttle(self, ctx: RequestContext, action: str, delay: int) -> None:
        if await self.rate_limit_service.throttle(delay, action, ctx.client_key):
            retry_after = await self.rate_limit_service.ttl(
                throttle_key(action, ctx.client_key)
            )
            raise RateLimitedError(action, retry_after)

    def _check_can_modify(self, ctx: RequestContext, item: Item) -> None:
        if ctx.is_admin:
            return
        user_id = ctx.user_id
        within_window = item.age(self.clock.now()) <= self.settings.submission.edit_time
        if user_id is None or item.author_id != user_id or not within_window:
            raise NotAuthorizedError("item", str(item.id), str(user_id))

    async def edit_item(
        self, ctx: RequestContext, item_id: ItemId, title: str, url: str, text: str
    ) -> Item | None:
        """Edit title and url (or text) of an item.

        Allowed to the author within ``edit_time`` seconds of creation, and
        to admins at any time. A url change must not collide with another
        item's repost window entry; the window entry moves to the new url.

        The per-client throttle is checked once the caller is allowed to
        modify the item, so refused attempts never start the window.

        Returns:
            Updated item, or None if it doesn't exist

        Raises:
            RateLimitedError: Too many edits from this client
            NotAuthorizedError: Outside the edit policy
            ContentDeletedException: The item is deleted
            ValidationError: Malformed input or url recently submitted
        """
        with logfire.span("item_service.edit_item", item_id=item_id):
            item = await self.item_repository.find_by_id(item_id)
            if item is None:
                return None
            self._check_can_modify(ctx, item)
            if item.deleted:
                raise ContentDeletedException("item", str(item_id))
            await self._throttle(ctx, "edit_news", self.settings.submission.edit_throttle)

            self.validate_submission(title, url, text)
            item_url = self.normalize_url(url, text)

            if not item_url.is_text and item_url != item.url:
                claimed_by = await self.find_recent_submission(item_url)
                if claimed_by is not None and claimed_by != item_id:
                    raise ValidationError("This URL was submitted recently")

                await self.repost_window_repository.remove_for_item(item_id)
                await self.repost_window_repository.upsert(
                    str(item_url),
                    item_id,
                    self.clock.now() + self.settings.submission.prevent_repost_time,
                )

            updated = await self.item_repository.update_content(item_id, title, item_url)
            logfire.info("Item edited", item_id=item_id)
            return updated

    async def delete_item(self, ctx: RequestContext, item_id: ItemId) -> bool:
        """Soft-delete an item (same policy and throttle ordering as edits).

        Returns:
            False if the item doesn't exist

        Raises:
            RateLimitedError: Too many deletions from this client
            NotAuthorizedError: Outside the edit policy
        """
        with logfire.span("item_service.delete_item", item_id=item_id):
            item = await self.item_repository.find_by_id(item_id)
            if item is None:
                return False
            self._check_can_modify(ctx, item)
            await self._throttle(
                ctx, "delete_news", self.settings.submission.delete_throttle
            )

            deleted = await self.item_repository.mark_deleted(item_id)
            logfire.info("Item deleted", item_id=item_id, deleted=deleted)
            return deleted

    async def vote_item(
        self, voter: User, item: Item, vote_type: VoteType
    ) -> bool:
        """Vote on an item; on success rescore it and reward the author.

        Returns:
            False if the voter had already voted on this item
        """
        with logfire.span(
            "item_service.vote_item", item_id=item.id, user_id=voter.id
        ):
            voted = await self.vote_service.cast_vote(
                voter.id, VotableType.ITEM, item_votable_id(item.id), vote_type
            )
            if not voted:
                return False

            await self.ranking_service.refresh(item.id)
            if vote_type == VoteType.UP and item.author_id != voter.id:
                await self.user_service.transfer_karma(
                    item.author_id, self.settings.karma.upvote_transfer
                )
            return True

    async def annotate(
        self, items: Sequence[Item], viewer_id: UserId | None = None
    ) -> list[ItemView]:
        """Attach live vote counts, author names and the viewer's votes."""
        votable_ids = [item_votable_id(item.id) for item in items]
        counts = await self.vote_service.get_vote_counts_many(
            VotableType.ITEM, votable_ids
        )
        usernames = await self.user_service.get_usernames(
            [item.author_id for item in items]
        )
        user_votes = {}
        if viewer_id is not None:
            user_votes = await self.vote_service.get_user_votes(
                viewer_id, VotableType.ITEM, votable_ids
            )

        return [
            ItemView(
                item=item,
                up=counts[vid].up,
                down=counts[vid].down,
                author_username=usernames.get(item.author_id),
                user_vote=user_votes.get(vid),
            )
            for item, vid in zip(items, votable_ids)
        ]

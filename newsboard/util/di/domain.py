"""Domain layer DI providers."""

from dishka import Scope, provide

from newsboard.config import Settings
from newsboard.domain.repository import (
    CommentRepository,
    CounterRepository,
    ItemRepository,
    PasswordResetRepository,
    RateLimitRepository,
    RepostWindowRepository,
    UserRepository,
    VoteRepository,
)
from newsboard.domain.service import (
    CommentService,
    CounterService,
    ItemService,
    PasswordResetService,
    RankingService,
    RateLimitService,
    UserService,
    VoteService,
)
from newsboard.util.clock import Clock
from newsboard.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_rate_limit_service(
        self, rate_limit_repository: RateLimitRepository, clock: Clock
    ) -> RateLimitService:
        """Provide rate limit domain service."""
        return RateLimitService(rate_limit_repository=rate_limit_repository, clock=clock)

    @provide
    def get_counter_service(self, counter_repository: CounterRepository) -> CounterService:
        """Provide counter domain service."""
        return CounterService(counter_repository=counter_repository)

    @provide
    def get_vote_service(self, vote_repository: VoteRepository, clock: Clock) -> VoteService:
        """Provide vote ledger domain service."""
        return VoteService(vote_repository=vote_repository, clock=clock)

    @provide
    def get_ranking_service(
        self,
        item_repository: ItemRepository,
        vote_service: VoteService,
        settings: Settings,
        clock: Clock,
    ) -> RankingService:
        """Provide ranking domain service."""
        return RankingService(
            item_repository=item_repository,
            vote_service=vote_service,
            settings=settings,
            clock=clock,
        )

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        item_repository: ItemRepository,
        comment_repository: CommentRepository,
        counter_service: CounterService,
        rate_limit_service: RateLimitService,
        settings: Settings,
        clock: Clock,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            item_repository=item_repository,
            comment_repository=comment_repository,
            counter_service=counter_service,
            rate_limit_service=rate_limit_service,
            settings=settings,
            clock=clock,
        )

    @provide
    def get_item_service(
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
    ) -> ItemService:
        """Provide item domain service."""
        return ItemService(
            item_repository=item_repository,
            repost_window_repository=repost_window_repository,
            vote_service=vote_service,
            ranking_service=ranking_service,
            rate_limit_service=rate_limit_service,
            counter_service=counter_service,
            user_service=user_service,
            settings=settings,
            clock=clock,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        item_repository: ItemRepository,
        vote_service: VoteService,
        counter_service: CounterService,
        user_service: UserService,
        settings: Settings,
        clock: Clock,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            item_repository=item_repository,
            vote_service=vote_service,
            counter_service=counter_service,
            user_service=user_service,
            settings=settings,
            clock=clock,
        )

    @provide
    def get_password_reset_service(
        self,
        user_repository: UserRepository,
        password_reset_repository: PasswordResetRepository,
        rate_limit_service: RateLimitService,
        settings: Settings,
        clock: Clock,
    ) -> PasswordResetService:
        """Provide password reset domain service."""
        return PasswordResetService(
            user_repository=user_repository,
            password_reset_repository=password_reset_repository,
            rate_limit_service=rate_limit_service,
            settings=settings,
            clock=clock,
        )

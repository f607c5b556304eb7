"""Application layer DI providers."""

from dishka import Scope, provide

from newsboard.application.usecase.admin import RecomputeRanksUseCase
from newsboard.application.usecase.auth import (
    AuthenticateUseCase,
    CompletePasswordResetUseCase,
    CreateAccountUseCase,
    LogoutUseCase,
    RequestPasswordResetUseCase,
)
from newsboard.application.usecase.comment import (
    GetCommentUseCase,
    GetRepliesUseCase,
    ListUserCommentsUseCase,
    PostCommentUseCase,
)
from newsboard.application.usecase.item import (
    DeleteItemUseCase,
    GetItemUseCase,
    ListItemsUseCase,
    SubmitItemUseCase,
)
from newsboard.application.usecase.user import (
    GetUserProfileUseCase,
    UpdateUserProfileUseCase,
)
from newsboard.application.usecase.vote import CastVoteUseCase
from newsboard.config import Settings
from newsboard.domain.repository import ItemRepository
from newsboard.domain.service import (
    CommentService,
    ItemService,
    PasswordResetService,
    RankingService,
    RateLimitService,
    UserService,
)
from newsboard.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_authenticate_use_case(self, user_service: UserService) -> AuthenticateUseCase:
        """Provide authenticate use case."""
        return AuthenticateUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_create_account_use_case(
        self, user_service: UserService
    ) -> CreateAccountUseCase:
        """Provide create account use case."""
        return CreateAccountUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(self, user_service: UserService) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_request_password_reset_use_case(
        self, password_reset_service: PasswordResetService
    ) -> RequestPasswordResetUseCase:
        """Provide request password reset use case."""
        return RequestPasswordResetUseCase(
            password_reset_service=password_reset_service
        )

    @provide(scope=Scope.REQUEST)
    def get_complete_password_reset_use_case(
        self, password_reset_service: PasswordResetService
    ) -> CompletePasswordResetUseCase:
        """Provide complete password reset use case."""
        return CompletePasswordResetUseCase(
            password_reset_service=password_reset_service
        )

    # Item use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_item_use_case(self, item_service: ItemService) -> SubmitItemUseCase:
        """Provide submit item use case."""
        return SubmitItemUseCase(item_service=item_service)

    @provide(scope=Scope.REQUEST)
    def get_get_item_use_case(
        self,
        item_service: ItemService,
        ranking_service: RankingService,
        comment_service: CommentService,
    ) -> GetItemUseCase:
        """Provide get item use case."""
        return GetItemUseCase(
            item_service=item_service,
            ranking_service=ranking_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_items_use_case(
        self,
        item_repository: ItemRepository,
        item_service: ItemService,
        user_service: UserService,
        settings: Settings,
    ) -> ListItemsUseCase:
        """Provide list items use case."""
        return ListItemsUseCase(
            item_repository=item_repository,
            item_service=item_service,
            user_service=user_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_item_use_case(self, item_service: ItemService) -> DeleteItemUseCase:
        """Provide delete item use case."""
        return DeleteItemUseCase(item_service=item_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_post_comment_use_case(
        self, comment_service: CommentService, item_service: ItemService
    ) -> PostCommentUseCase:
        """Provide post comment use case."""
        return PostCommentUseCase(
            comment_service=comment_service, item_service=item_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_service: CommentService, item_service: ItemService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(
            comment_service=comment_service, item_service=item_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_user_comments_use_case(
        self,
        comment_service: CommentService,
        user_service: UserService,
        settings: Settings,
    ) -> ListUserCommentsUseCase:
        """Provide list user comments use case."""
        return ListUserCommentsUseCase(
            comment_service=comment_service,
            user_service=user_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_replies_use_case(
        self,
        comment_service: CommentService,
        user_service: UserService,
        settings: Settings,
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(
            comment_service=comment_service,
            user_service=user_service,
            settings=settings,
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, item_service: ItemService, comment_service: CommentService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            item_service=item_service, comment_service=comment_service
        )

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_user_profile_use_case(
        self, user_service: UserService
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(user_service=user_service)

    # Admin use cases
    @provide(scope=Scope.REQUEST)
    def get_recompute_ranks_use_case(
        self,
        ranking_service: RankingService,
        rate_limit_service: RateLimitService,
        settings: Settings,
    ) -> RecomputeRanksUseCase:
        """Provide recompute ranks use case."""
        return RecomputeRanksUseCase(
            ranking_service=ranking_service,
            rate_limit_service=rate_limit_service,
            settings=settings,
        )

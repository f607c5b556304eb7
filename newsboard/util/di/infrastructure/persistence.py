"""Persistence infrastructure providers."""

from collections.abc import AsyncGenerator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

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
from newsboard.persistence.database import create_engine, create_session_factory
from newsboard.persistence.repository import (
    PostgresCommentRepository,
    PostgresCounterRepository,
    PostgresItemRepository,
    PostgresPasswordResetRepository,
    PostgresRateLimitRepository,
    PostgresRepostWindowRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from newsboard.util.di.base import ProviderBase
from newsboard.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncGenerator[AsyncSession, BaseException | None]:
        """Provide database session for request scope.

        The session is committed when the request scope closes without error
        and rolled back otherwise, so every use case is all-or-nothing.
        dishka sends the exception that closed the scope (or None) back into
        this generator rather than raising it here.
        """
        async with session_factory() as session:
            exception = yield session
            if exception is None:
                await session.commit()
                logfire.info("Session committed")
            else:
                logfire.warn("Session rollback", error=str(exception))
                await session.rollback()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_item_repository(self, session: AsyncSession) -> ItemRepository:
        """Provide Item repository."""
        return PostgresItemRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_counter_repository(self, session: AsyncSession) -> CounterRepository:
        """Provide Counter repository."""
        return PostgresCounterRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_rate_limit_repository(self, session: AsyncSession) -> RateLimitRepository:
        """Provide RateLimit repository."""
        return PostgresRateLimitRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_repost_window_repository(
        self, session: AsyncSession
    ) -> RepostWindowRepository:
        """Provide RepostWindow repository."""
        return PostgresRepostWindowRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_password_reset_repository(
        self, session: AsyncSession
    ) -> PasswordResetRepository:
        """Provide PasswordReset repository."""
        return PostgresPasswordResetRepository(session)

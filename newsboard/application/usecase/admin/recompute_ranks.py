"""Recompute ranks use case (admin)."""

import logfire
from pydantic import BaseModel

from newsboard.config import Settings
from newsboard.domain.error import NotAuthorizedError, RateLimitedError
from newsboard.domain.model import RequestContext
from newsboard.domain.service import RankingService, RateLimitService, throttle_key


class RecomputeRanksRequest(BaseModel):
    """Recompute ranks request."""

    context: RequestContext


class RecomputeRanksResponse(BaseModel):
    """Recompute ranks response."""

    updated: int


class RecomputeRanksUseCase:
    """Use case for the full score and rank sweep.

    Safe to re-run; throttled per admin.
    """

    def __init__(
        self,
        ranking_service: RankingService,
        rate_limit_service: RateLimitService,
        settings: Settings,
    ) -> None:
        self.ranking_service = ranking_service
        self.rate_limit_service = rate_limit_service
        self.throttle = settings.ranking.recompute_throttle

    async def execute(self, request: RecomputeRanksRequest) -> RecomputeRanksResponse:
        """Execute recompute flow.

        Raises:
            NotAuthorizedError: Not an admin
            RateLimitedError: Ran too recently
        """
        ctx = request.context
        if not ctx.is_admin:
            raise NotAuthorizedError("admin", "recompute", str(ctx.user_id))

        tags = ("admin", "recompute", str(ctx.user_id))
        if await self.rate_limit_service.throttle(self.throttle, *tags):
            retry_after = await self.rate_limit_service.ttl(throttle_key(*tags))
            raise RateLimitedError("admin.recompute", retry_after)

        with logfire.span("recompute_ranks.execute", user_id=ctx.user_id):
            updated = await self.ranking_service.recompute_all()
            return RecomputeRanksResponse(updated=updated)

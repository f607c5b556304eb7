"""Rate limit (TTL record) domain service."""

import logfire

from newsboard.domain.repository import RateLimitRepository
from newsboard.util.clock import Clock

from .base import Service


def throttle_key(*tags: str) -> str:
    """Key used by ``RateLimitService.throttle``: ``limit:<tag>.<tag>...``."""
    return "limit:" + ".".join(str(tag) for tag in tags)


class RateLimitService(Service):
    """Expiring keys emulated on a plain table.

    Check-then-set is deliberately not atomic: two concurrent callers may
    both pass ``is_limited`` before either calls ``set``. The rare double
    action is accepted.
    """

    def __init__(self, rate_limit_repository: RateLimitRepository, clock: Clock) -> None:
        """Initialize rate limit service.

        Args:
            rate_limit_repository: TTL record repository
            clock: Time source
        """
        self.rate_limit_repository = rate_limit_repository
        self.clock = clock

    async def _active_expiry(self, key: str) -> int | None:
        now = self.clock.now()
        await self.rate_limit_repository.purge_expired(now)
        expires_at = await self.rate_limit_repository.find_expiry(key)
        if expires_at is None or expires_at <= now:
            return None
        return expires_at

    async def is_limited(self, key: str) -> bool:
        """Check whether an unexpired record exists for ``key``.

        Expired records are purged first and never block.
        """
        return await self._active_expiry(key) is not None

    async def set(self, key: str, ttl_seconds: int) -> None:
        """Create or refresh ``key`` so it expires ``ttl_seconds`` from now."""
        with logfire.span("rate_limit_service.set", key=key, ttl=ttl_seconds):
            await self.rate_limit_repository.upsert(key, self.clock.now() + ttl_seconds)

    async def ttl(self, key: str) -> int:
        """Seconds remaining for ``key``, or -1 when it isn't active."""
        expires_at = await self._active_expiry(key)
        if expires_at is None:
            return -1
        return expires_at - self.clock.now()

    async def throttle(self, delay: int, *tags: str) -> bool:
        """Allow an action at most once per ``delay`` seconds per tag set.

        Args:
            delay: Window length in seconds
            tags: Action name and identity (e.g. "delete_news", client key)

        Returns:
            True if the caller is limited and must not act, False if the
            action may proceed (the window has been started)
        """
        key = throttle_key(*tags)
        if await self.is_limited(key):
            logfire.warn("Throttled", key=key)
            return True

        await self.set(key, delay)
        return False

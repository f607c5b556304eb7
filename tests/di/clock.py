"""Mock clock provider for testing."""

from dishka import Scope, provide

from newsboard.util.clock import Clock
from newsboard.util.di.infrastructure.clock import ClockProvider

# 2024-01-01T00:00:00Z
DEFAULT_NOW = 1_704_067_200


class FrozenClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, now: int = DEFAULT_NOW) -> None:
        self.current = now

    def now(self) -> int:
        return self.current

    def advance(self, seconds: int) -> None:
        self.current += seconds


class MockClockProvider(ClockProvider):
    """Frozen clock, shared by every service resolved from one container."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_frozen_clock(self) -> FrozenClock:
        """Provide the frozen clock (tests advance it)."""
        return FrozenClock()

    @provide(scope=Scope.APP)
    def get_clock(self, clock: FrozenClock) -> Clock:
        """Expose the frozen clock as the domain clock."""
        return clock

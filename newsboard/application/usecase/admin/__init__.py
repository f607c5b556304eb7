"""Administration use cases."""

from .recompute_ranks import (
    RecomputeRanksRequest,
    RecomputeRanksResponse,
    RecomputeRanksUseCase,
)

__all__ = [
    "RecomputeRanksRequest",
    "RecomputeRanksResponse",
    "RecomputeRanksUseCase",
]

#!/usr/bin/env python3
"""Recompute score and rank of every live item."""

import asyncio
import sys

import logfire

from newsboard.config import Settings
from newsboard.domain.service import RankingService
from newsboard.util.di.container import create_container
from newsboard.util.logging import get_logger, setup_logging
from newsboard.util.observability import configure_logfire

logger = get_logger(__name__)


async def run() -> int:
    """Run the sweep inside a single request scope."""
    container = create_container()
    try:
        async with container() as request_container:
            ranking_service = await request_container.get(RankingService)
            return await ranking_service.recompute_all()
    finally:
        await container.close()


def main() -> int:
    """Recompute ranks outside the per-user admin throttle."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings, component="newsboard-recompute-ranks")

    try:
        updated = asyncio.run(run())
        logger.info(f"Recomputed {updated} items")
        return 0

    except Exception as e:
        logfire.error(
            "Rank recompute failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Create the database schema with Logfire error tracking."""

import asyncio
import sys

import logfire

from newsboard.config import Settings
from newsboard.persistence.database import create_engine, create_schema
from newsboard.util.logging import setup_logging
from newsboard.util.observability import configure_logfire


async def run(settings: Settings) -> None:
    """Create every missing table."""
    engine = create_engine(settings)
    try:
        await create_schema(engine)
    finally:
        await engine.dispose()


def main() -> int:
    """Create the schema and log any errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings, component="newsboard-create-schema")

    try:
        logfire.info("Creating database schema")
        asyncio.run(run(settings))
        logfire.info("Database schema ready")
        return 0

    except Exception as e:
        logfire.error(
            "Schema creation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

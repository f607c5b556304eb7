"""Test harness for unit and integration tests.

Unit tests run entirely in memory. Integration tests need a reachable
PostgreSQL database: set NEWSBOARD_TEST_DATABASE_URL (an asyncpg url) to
enable them, otherwise they are skipped.
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

import pytest
import pytest_asyncio
from dishka import AsyncContainer
from sqlalchemy.ext.asyncio import AsyncEngine

from newsboard.persistence.database import create_schema, drop_schema
from newsboard.util.di import Component
from tests.di import build_test_container

TEST_DATABASE_URL_ENV = "NEWSBOARD_TEST_DATABASE_URL"


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Recreates the schema when persistence is unmocked

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_insert_item(integration_env):
            repo = await integration_env.get(ItemRepository)
            await repo.insert(Item(...))
    """
    unmock = unmock or set()

    @pytest_asyncio.fixture
    async def _test_environment():
        async with _app_container(unmock) as container:
            # Open request-scoped context
            async with container() as request_container:
                yield request_container

    return _test_environment


def create_app_fixture(unmock: set[Component] | None = None):
    """Like ``create_env_fixture`` but yields the APP-scoped container.

    Tests open their own request scopes, one per unit of work, to observe
    what a committed or rolled back transaction leaves behind:

        app_env = create_app_fixture(unmock={"persistence"})

        async def test_rollback(app_env):
            async with app_env() as request:
                ...
    """
    unmock = unmock or set()

    @pytest_asyncio.fixture
    async def _app_environment():
        async with _app_container(unmock) as container:
            yield container

    return _app_environment


@asynccontextmanager
async def _app_container(unmock: set[Component]) -> AsyncIterator[AsyncContainer]:
    if "persistence" in unmock:
        url = os.environ.get(TEST_DATABASE_URL_ENV)
        if not url:
            pytest.skip(f"{TEST_DATABASE_URL_ENV} not set")
        os.environ["DATABASE__URL"] = url

    container = build_test_container(unmock=unmock)
    try:
        if "persistence" in unmock:
            engine = await container.get(AsyncEngine)
            await drop_schema(engine)
            await create_schema(engine)
        yield container
    finally:
        await container.close()

"""PostgreSQL implementations of the counter and TTL record repositories."""

from typing import Optional

import logfire
from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.domain.repository.store import (
    CounterRepository,
    RateLimitRepository,
    RepostWindowRepository,
)
from newsboard.domain.value import ItemId
from newsboard.persistence.tables import (
    counters_table,
    rate_limits_table,
    repost_window_table,
)


class PostgresCounterRepository(CounterRepository):
    """Counters backed by a single-row atomic upsert."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def increment(self, name: str, by: int = 1) -> int:
        """INSERT ... ON CONFLICT DO UPDATE ... RETURNING value."""
        stmt = insert(counters_table).values(name=name, value=by)
        stmt = stmt.on_conflict_do_update(
            index_elements=[counters_table.c.name],
            set_={"value": counters_table.c.value + stmt.excluded.value},
        ).returning(counters_table.c.value)
        result = await self.session.execute(stmt)
        value = result.scalar_one()
        logfire.debug("Counter incremented", name=name, value=value)
        return value

    async def get(self, name: str) -> int:
        stmt = select(counters_table.c.value).where(counters_table.c.name == name)
        result = await self.session.execute(stmt)
        return result.scalar() or 0


class PostgresRateLimitRepository(RateLimitRepository):
    """TTL records in the rate_limits table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def purge_expired(self, now: int) -> int:
        stmt = delete(rate_limits_table).where(rate_limits_table.c.expires_at <= now)
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    async def find_expiry(self, key: str) -> Optional[int]:
        stmt = select(rate_limits_table.c.expires_at).where(
            rate_limits_table.c.key == key
        )
        result = await self.session.execute(stmt)
        return result.scalar()

    async def upsert(self, key: str, expires_at: int) -> None:
        stmt = insert(rate_limits_table).values(key=key, expires_at=expires_at)
        stmt = stmt.on_conflict_do_update(
            index_elements=[rate_limits_table.c.key],
            set_={"expires_at": stmt.excluded.expires_at},
        )
        await self.session.execute(stmt)


class PostgresRepostWindowRepository(RepostWindowRepository):
    """Repost window entries keyed by exact url."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def purge_expired(self, now: int) -> int:
        stmt = delete(repost_window_table).where(
            repost_window_table.c.expires_at <= now
        )
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    async def find_item_id(self, url: str, now: int) -> Optional[ItemId]:
        stmt = select(repost_window_table.c.item_id).where(
            repost_window_table.c.url == url,
            repost_window_table.c.expires_at > now,
        )
        result = await self.session.execute(stmt)
        item_id = result.scalar()
        return ItemId(item_id) if item_id is not None else None

    async def upsert(self, url: str, item_id: ItemId, expires_at: int) -> None:
        stmt = insert(repost_window_table).values(
            url=url, item_id=item_id, expires_at=expires_at
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[repost_window_table.c.url],
            set_={
                "item_id": stmt.excluded.item_id,
                "expires_at": stmt.excluded.expires_at,
            },
        )
        await self.session.execute(stmt)

    async def remove_for_item(self, item_id: ItemId) -> None:
        stmt = delete(repost_window_table).where(
            repost_window_table.c.item_id == item_id
        )
        await self.session.execute(stmt)

# hive_idx/adapters/cache/sql.py
from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...models import ListingCacheEntry


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_aware_utc(dt: datetime) -> datetime:
    """
    SQLite + SQLAlchemy hands back naive datetimes even for timezone=True columns.
    If naive, assume it's UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class SqlResponseCache:
    """Shared cache table so several API workers reuse one upstream response."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._session_maker = session_maker
        self._clock = clock

    async def get(self, key: str) -> dict[str, Any] | None:
        async with self._session_maker() as session:
            q = select(ListingCacheEntry).where(ListingCacheEntry.cache_key == key)
            row = (await session.execute(q)).scalars().first()
            if row is None:
                return None
            if _ensure_aware_utc(row.expires_at) <= self._clock():
                await session.delete(row)
                await session.commit()
                return None
            return json.loads(row.value_json)

    async def set(self, key: str, value: dict[str, Any], ttl_s: int) -> None:
        now = self._clock()
        blob = json.dumps(value, default=str)
        expires_at = now + timedelta(seconds=int(ttl_s))

        async with self._session_maker() as session:
            row = await session.get(ListingCacheEntry, key)
            if row is not None:
                row.value_json = blob
                row.expires_at = expires_at
                await session.commit()
                return

            session.add(ListingCacheEntry(cache_key=key, value_json=blob, expires_at=expires_at, created_at=now))
            try:
                await session.commit()
                return
            except IntegrityError:
                # another worker inserted the same key first; last write wins
                await session.rollback()

        async with self._session_maker() as session:
            await session.execute(
                update(ListingCacheEntry)
                .where(ListingCacheEntry.cache_key == key)
                .values(value_json=blob, expires_at=expires_at)
            )
            await session.commit()

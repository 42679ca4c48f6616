# tests/conftest.py
import json

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from hive_idx.adapters.cache.memory import MemoryCache
from hive_idx.adapters.clients.reso_web_api import ListingsClient, ResoConfig
from hive_idx.models import Base


class FakeBackend:
    """Scripted upstream: records every request, answers with the current reply."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status = 200
        self.body: bytes | None = json.dumps({"value": [], "@odata.count": 0}).encode()
        self.error: Exception | None = None

    def reply(self, payload, status: int = 200) -> None:
        self.status = status
        self.body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        self.error = None

    def fail(self, exc_type=httpx.ConnectError, message: str = "Connection refused") -> None:
        self.error = exc_type(message)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status, content=self.body)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def cfg() -> ResoConfig:
    return ResoConfig(api_key="test-token", api_base_url="https://api.example.test/odata/")


@pytest.fixture
def client(cfg, cache, backend) -> ListingsClient:
    return ListingsClient(cfg, cache=cache, transport=httpx.MockTransport(backend))


@pytest.fixture
async def cache_sessions():
    """
    Session factory over a throwaway in-memory listing_cache table. StaticPool
    keeps one connection so every session sees the same sqlite memory db.
    """
    cache_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with cache_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(cache_engine, expire_on_commit=False)
    await cache_engine.dispose()

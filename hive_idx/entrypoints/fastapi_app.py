# hive_idx/entrypoints/fastapi_app.py
from __future__ import annotations

from fastapi import FastAPI

from ..adapters.cache.factory import build_cache
from ..adapters.cache.sql import SqlResponseCache
from ..adapters.clients.reso_web_api import ListingsClient
from ..config import settings
from .api.routers import health, listings


def create_app(client: ListingsClient | None = None) -> FastAPI:
    app = FastAPI(title="Hive MLS IDX - listings API")

    if client is None:
        client = ListingsClient.from_settings(settings, cache=build_cache(settings))
    app.state.listings_client = client

    @app.on_event("startup")
    async def _startup() -> None:
        # Cache table only matters for the shared SQL backend.
        if isinstance(client.cache, SqlResponseCache):
            from ..db import engine
            from ..models import Base

            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

    # Routers
    app.include_router(health.router)
    app.include_router(listings.router)

    return app

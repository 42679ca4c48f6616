# hive_idx/entrypoints/api/routers/health.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from ..deps import require_api_key
from ....config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/debug/config", dependencies=[Depends(require_api_key)])
def debug_config(request: Request) -> dict[str, Any]:
    """Effective upstream/cache settings; the SourceRE key is only reported as set or not."""
    client = request.app.state.listings_client
    return {
        "ENV": settings.ENV,
        "endpoint": client.endpoint,
        "api_key_set": bool(client.cfg.api_key),
        "timeout_s": client.cfg.timeout_s,
        "cache": type(client.cache).__name__,
        "cache_ttl_s": client.cfg.cache_ttl_s,
        "extended_filters": client.builder.extended_filters,
    }

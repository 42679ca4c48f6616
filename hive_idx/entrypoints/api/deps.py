# hive_idx/entrypoints/api/deps.py
from __future__ import annotations

import hmac

from fastapi import Header, HTTPException, Request

from ...adapters.clients.reso_web_api import ListingsClient
from ...config import settings


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    """Guards the debug routes only; listings stay public like the embedded grid."""
    expected = settings.API_KEY
    if not expected:
        return
    if not x_api_key or not hmac.compare_digest(x_api_key.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(status_code=401, detail="Invalid API key")


def get_listings_client(request: Request) -> ListingsClient:
    client: ListingsClient = request.app.state.listings_client
    if not client.cfg.api_key:
        raise HTTPException(status_code=503, detail="Missing API key")
    return client

# hive_idx/adapters/cache/factory.py
from __future__ import annotations

from typing import Any

from .base import ResponseCache
from .memory import MemoryCache
from .sql import SqlResponseCache


def build_cache(s: Any) -> ResponseCache:
    backend = (s.LISTINGS_CACHE_BACKEND or "memory").strip().lower()
    if backend == "memory":
        return MemoryCache()
    if backend == "sql":
        from ...db import AsyncSessionLocal

        return SqlResponseCache(AsyncSessionLocal)
    raise ValueError(f"Unknown LISTINGS_CACHE_BACKEND: {s.LISTINGS_CACHE_BACKEND}")

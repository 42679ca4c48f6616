# hive_idx/adapters/cache/memory.py
from __future__ import annotations

import json
import time
from typing import Any, Callable


class MemoryCache:
    """
    Per-process TTL cache. Values are stored as JSON text so callers never
    share mutable state with the cache.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> dict[str, Any] | None:
        hit = self._entries.get(key)
        if hit is None:
            return None
        expires_at, blob = hit
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return json.loads(blob)

    def _sweep(self, now: float) -> None:
        for k in [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]:
            del self._entries[k]

    async def set(self, key: str, value: dict[str, Any], ttl_s: int) -> None:
        # one-off queries never get read again; drop them on write
        self._sweep(self._clock())
        self._entries[key] = (self._clock() + float(ttl_s), json.dumps(value, default=str))

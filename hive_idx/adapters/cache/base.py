# hive_idx/adapters/cache/base.py
from __future__ import annotations

from typing import Any, Protocol


class ResponseCache(Protocol):
    async def get(self, key: str) -> dict[str, Any] | None:
        raise NotImplementedError

    async def set(self, key: str, value: dict[str, Any], ttl_s: int) -> None:
        raise NotImplementedError

# hive_idx/adapters/clients/reso_web_api.py
from __future__ import annotations

import asyncio
import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import httpx

from ...domain.odata import ODataQuery, QueryBuilder
from ...domain.parsing import to_int
from ...domain.types import ErrorKind, ListingQueryParams, ListingResult, SingleResult
from ..cache.base import ResponseCache
from ..cache.memory import MemoryCache

log = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.sourceredb.com/odata/"
CACHE_KEY_PREFIX = "hive_idx_"
BODY_SNIPPET_BYTES = 500

ResultsExtractor = Callable[[dict[str, Any]], Any]


def default_results_extractor(payload: dict[str, Any]) -> Any:
    return payload.get("value", [])


@dataclass(frozen=True)
class ResoConfig:
    api_key: str = ""
    api_base_url: str = DEFAULT_API_BASE
    timeout_s: float = 12.0
    cache_ttl_s: int = 300

    @classmethod
    def from_settings(cls, s: Any) -> "ResoConfig":
        return cls(
            api_key=s.SOURCERE_API_KEY or "",
            api_base_url=s.SOURCERE_API_BASE or DEFAULT_API_BASE,
            timeout_s=float(s.HTTP_TIMEOUT_S),
            cache_ttl_s=int(s.LISTINGS_CACHE_TTL_S),
        )


class _BadResponse(Exception):
    pass


class ListingsClient:
    """
    RESO OData Property client for the list and detail views.

    List responses are cached per query fingerprint; the detail path always
    goes to the network. Failures come back as error-tagged envelopes, they
    are never raised.
    """

    def __init__(
        self,
        cfg: ResoConfig,
        *,
        cache: ResponseCache | None = None,
        builder: QueryBuilder | None = None,
        results_extractor: ResultsExtractor = default_results_extractor,
        count_field: str = "@odata.count",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.cfg = cfg
        self.cache = cache if cache is not None else MemoryCache()
        self.builder = builder if builder is not None else QueryBuilder()
        self._results_extractor = results_extractor
        self._count_field = count_field
        self._transport = transport
        self._inflight: dict[str, asyncio.Lock] = {}

    @classmethod
    def from_settings(cls, s: Any, *, cache: ResponseCache | None = None) -> "ListingsClient":
        return cls(ResoConfig.from_settings(s), cache=cache, builder=QueryBuilder.from_settings(s))

    @property
    def endpoint(self) -> str:
        return self.cfg.api_base_url.rstrip("/") + "/Property"

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "Authorization": f"Bearer {self.cfg.api_key}"}

    def cache_key(self, query: ODataQuery) -> str:
        digest = hashlib.md5(f"{self.endpoint}|{query.canonical()}".encode("utf-8")).hexdigest()
        return CACHE_KEY_PREFIX + digest

    async def _get_json(self, query: ODataQuery) -> dict[str, Any]:
        """
        One GET, no retries. Raises httpx.HTTPError on transport failure and
        _BadResponse on a non-200 status or a body that is not a JSON object.
        """
        timeout = httpx.Timeout(float(self.cfg.timeout_s))
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            resp = await client.get(self.endpoint, headers=self._headers(), params=query.to_params())

        snippet = resp.content[:BODY_SNIPPET_BYTES].decode("utf-8", errors="replace")
        if resp.status_code != 200:
            raise _BadResponse(f"{resp.status_code} body={snippet}")
        try:
            data = resp.json()
        except ValueError:
            raise _BadResponse(f"{resp.status_code} body={snippet}") from None
        if not isinstance(data, dict):
            raise _BadResponse(f"{resp.status_code} body={snippet}")
        return data

    def _to_result(self, data: dict[str, Any]) -> ListingResult:
        try:
            items = self._results_extractor(data)
        except (KeyError, IndexError, TypeError, AttributeError, ValueError) as e:
            raise _BadResponse(f"results extractor failed: {e!r}") from e
        items = list(items) if isinstance(items, (list, tuple)) else []
        # a null count reads as absent
        count = data.get(self._count_field)
        total = to_int(count) if count is not None else len(items)
        return ListingResult(items=items, total=max(0, total))

    async def fetch_listings(self, params: ListingQueryParams | Mapping[str, Any]) -> ListingResult:
        if not isinstance(params, ListingQueryParams):
            params = ListingQueryParams.from_mapping(params)

        query = self.builder.build_query(params)
        key = self.cache_key(query)

        cached = await self.cache.get(key)
        if cached is not None:
            return ListingResult.from_dict(cached)

        lock = self._inflight.setdefault(key, asyncio.Lock())
        try:
            async with lock:
                # a concurrent caller may have filled it while we waited
                cached = await self.cache.get(key)
                if cached is not None:
                    return ListingResult.from_dict(cached)
                return await self._fetch_and_store(query, key)
        finally:
            if self._inflight.get(key) is lock and not lock.locked():
                self._inflight.pop(key, None)

    async def _fetch_and_store(self, query: ODataQuery, key: str) -> ListingResult:
        try:
            data = await self._get_json(query)
            result = self._to_result(data)
        except httpx.HTTPError as e:
            log.warning("SourceRE HTTP error: %s", e)
            return ListingResult.failed(ErrorKind.transport)
        except _BadResponse as e:
            log.warning("SourceRE bad response: %s", e)
            return ListingResult.failed(ErrorKind.bad_response)

        await self.cache.set(key, result.to_dict(), self.cfg.cache_ttl_s)
        return result

    async def fetch_listing_by_key(self, listing_key: str) -> SingleResult:
        query = self.builder.build_detail_query(listing_key)
        try:
            data = await self._get_json(query)
        except httpx.HTTPError as e:
            log.warning("SourceRE single HTTP error: %s", e)
            return SingleResult.failed(ErrorKind.transport)
        except _BadResponse as e:
            log.warning("SourceRE single bad response: %s", e)
            return SingleResult.failed(ErrorKind.bad_response)

        rows = data.get("value")
        item = rows[0] if isinstance(rows, list) and rows else {}
        return SingleResult(item=item if isinstance(item, dict) else {})

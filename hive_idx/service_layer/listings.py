# hive_idx/service_layer/listings.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from ..adapters.clients.reso_web_api import ListingsClient
from ..domain.odata import DEFAULT_ORDER_BY, normalize_paging
from ..domain.parsing import to_int
from ..domain.types import ErrorKind, ListingQueryParams, ListingResult, RawListing, SingleResult

# Defaults the listing grid applies before caller attributes.
DEFAULT_ATTRIBUTES: dict[str, Any] = {
    "city": "",
    "min_price": "",
    "max_price": "",
    "beds": "",
    "baths": "",
    "property_type": "",
    "orderby": DEFAULT_ORDER_BY,
    "limit": 12,
    "page": 1,
    "office_name": "",
    "office_mlsid": "",
    "agent_mlsid": "",
    "team_name": "",
    "status": "Active",
    "rental": "",
    "available_only": "true",
}

_ALIASES = {
    "order_by": "orderby",
    "orderBy": "orderby",
    "office_mls_id": "office_mlsid",
    "officeMlsId": "office_mlsid",
    "agent_mls_id": "agent_mlsid",
    "agentMlsId": "agent_mlsid",
    "minPrice": "min_price",
    "maxPrice": "max_price",
    "propertyType": "property_type",
    "officeName": "office_name",
    "teamName": "team_name",
    "availableOnly": "available_only",
}


@dataclass(frozen=True)
class ListingsPage:
    items: list[RawListing]
    total: int
    page: int
    limit: int
    pages: int
    error: ErrorKind | None = None


def page_count(total: int, limit: int) -> int:
    return max(1, math.ceil(max(0, total) / max(1, limit)))


def merge_attributes(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Defaults first; caller keys (any accepted spelling) win. None means "use default"."""
    merged = dict(DEFAULT_ATTRIBUTES)
    for k, v in raw.items():
        if v is None:
            continue
        merged[_ALIASES.get(k, k)] = v
    return merged


async def search_listings(
    client: ListingsClient,
    raw: Mapping[str, Any],
    *,
    page_override: Any = None,
) -> ListingsPage:
    attrs = merge_attributes(raw)

    # a positive ?p= style override beats the configured page
    override = to_int(page_override)
    if override > 0:
        attrs["page"] = override

    params = ListingQueryParams.from_mapping(attrs)
    result: ListingResult = await client.fetch_listings(params)

    limit, page = normalize_paging(params.limit, params.page)
    return ListingsPage(
        items=result.items,
        total=result.total,
        page=page,
        limit=limit,
        pages=page_count(result.total, limit),
        error=result.error,
    )


async def get_listing(client: ListingsClient, listing_key: str | None) -> SingleResult:
    key = (listing_key or "").strip()
    if not key:
        return SingleResult()
    return await client.fetch_listing_by_key(key)

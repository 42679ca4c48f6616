# hive_idx/entrypoints/api/routers/listings.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_listings_client
from ....adapters.clients.reso_web_api import ListingsClient
from ....schemas import ListingDetailOut, ListingsPageOut
from ....service_layer.listings import get_listing, search_listings

router = APIRouter(tags=["listings"])


@router.get("/listings", response_model=ListingsPageOut)
async def list_listings(
    city: str | None = Query(default=None),
    min_price: str | None = Query(default=None),
    max_price: str | None = Query(default=None),
    beds: str | None = Query(default=None),
    baths: str | None = Query(default=None),
    property_type: str | None = Query(default=None),
    office_name: str | None = Query(default=None),
    office_mlsid: str | None = Query(default=None),
    agent_mlsid: str | None = Query(default=None),
    team_name: str | None = Query(default=None),
    status: str | None = Query(default=None),
    rental: str | None = Query(default=None),
    available_only: str | None = Query(default=None),
    orderby: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    page: str | None = Query(default=None),
    p: str | None = Query(default=None, description="Page override, wins over `page` when positive"),
    client: ListingsClient = Depends(get_listings_client),
) -> ListingsPageOut:
    # Strings on purpose: the builder coerces, it never rejects.
    raw = {
        "city": city,
        "min_price": min_price,
        "max_price": max_price,
        "beds": beds,
        "baths": baths,
        "property_type": property_type,
        "office_mlsid": office_mlsid,
        "office_name": office_name,
        "agent_mlsid": agent_mlsid,
        "team_name": team_name,
        "status": status,
        "rental": rental,
        "available_only": available_only,
        "orderby": orderby,
        "limit": limit,
        "page": page,
    }
    result = await search_listings(client, raw, page_override=p)
    return ListingsPageOut(
        items=result.items,
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
        error=result.error.value if result.error else None,
    )


@router.get("/listings/{listing_key}", response_model=ListingDetailOut)
async def listing_detail(
    listing_key: str,
    client: ListingsClient = Depends(get_listings_client),
) -> ListingDetailOut:
    single = await get_listing(client, listing_key)
    if single.error is None and not single.item:
        raise HTTPException(status_code=404, detail="Listing not found")
    return ListingDetailOut(
        item=single.item,
        found=single.found,
        error=single.error.value if single.error else None,
    )

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from hive_idx.adapters.clients.reso_web_api import ListingsClient
from hive_idx.config import settings
from hive_idx.service_layer.listings import get_listing, search_listings


async def main() -> None:
    ap = argparse.ArgumentParser(description="Fetch one page of listings (or one listing) and print JSON.")
    ap.add_argument("--city", default=None)
    ap.add_argument("--min-price", default=None)
    ap.add_argument("--max-price", default=None)
    ap.add_argument("--beds", default=None)
    ap.add_argument("--baths", default=None)
    ap.add_argument("--rental", default=None, help="1/true/yes, 0/false/no")
    ap.add_argument("--status", default=None)
    ap.add_argument("--limit", default=None)
    ap.add_argument("--page", default=None)
    ap.add_argument("--key", default=None, help="ListingKey for the detail view")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if not settings.SOURCERE_API_KEY:
        raise SystemExit("SOURCERE_API_KEY is not set")

    client = ListingsClient.from_settings(settings)

    if args.key:
        single = await get_listing(client, args.key)
        print(json.dumps(single.to_dict(), indent=2, default=str))
        return

    page = await search_listings(
        client,
        {
            "city": args.city,
            "min_price": args.min_price,
            "max_price": args.max_price,
            "beds": args.beds,
            "baths": args.baths,
            "rental": args.rental,
            "status": args.status,
            "limit": args.limit,
            "page": args.page,
        },
    )
    print(
        json.dumps(
            {
                "total": page.total,
                "page": page.page,
                "pages": page.pages,
                "error": page.error.value if page.error else None,
                "keys": [i.get("ListingKey") for i in page.items if isinstance(i, dict)],
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    asyncio.run(main())

# hive_idx/domain/odata.py
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .parsing import is_empty, parse_flag, to_int
from .types import ListingQueryParams, RentalMode

LIST_SELECT = "ListingKey,UnparsedAddress,City,ListPrice,BedroomsTotal,BathroomsTotalInteger"
DETAIL_SELECT = (
    LIST_SELECT + ",PublicRemarks,YearBuilt,LivingArea,LotSizeArea,StandardStatus,PropertyType"
)
MEDIA_EXPAND = "Media($select=MediaURL,Order;$orderby=Order asc)"
DEFAULT_ORDER_BY = "APIModificationTimestamp desc"

DEFAULT_LIMIT = 12
DEFAULT_PAGE = 1
MAX_TOP = 1000

DEFAULT_RENTAL_PROPERTY_TYPE = "Residential Lease"
DEFAULT_EXCLUDED_STATUSES: tuple[str, ...] = ("Closed", "Canceled", "Expired")

RentalTypeResolver = Callable[[ListingQueryParams], str]
StatusExclusionResolver = Callable[[ListingQueryParams], Iterable[Any]]


def escape_literal(value: Any) -> str:
    """OData string literal: single-quoted, embedded quotes doubled."""
    return "'" + str(value).replace("'", "''") + "'"


def normalize_paging(limit: Any, page: Any) -> tuple[int, int]:
    """Absent -> defaults; anything else is parsed loosely and floored at 1."""
    lim = DEFAULT_LIMIT if limit is None else to_int(limit)
    pg = DEFAULT_PAGE if page is None else to_int(page)
    return max(1, lim), max(1, pg)


@dataclass(frozen=True)
class ODataQuery:
    select: str
    expand: str
    top: int
    orderby: str | None = None
    skip: int | None = None
    count: bool = False
    filter: str | None = None

    def to_params(self) -> dict[str, str]:
        """Request parameters in a fixed key order."""
        params: dict[str, str] = {"$select": self.select, "$expand": self.expand}
        if self.orderby is not None:
            params["$orderby"] = self.orderby
        params["$top"] = str(self.top)
        if self.skip is not None:
            params["$skip"] = str(self.skip)
        if self.count:
            params["$count"] = "true"
        if self.filter:
            params["$filter"] = self.filter
        return params

    def canonical(self) -> str:
        return json.dumps(self.to_params(), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _default_rental_type(_: ListingQueryParams) -> str:
    return DEFAULT_RENTAL_PROPERTY_TYPE


def _default_excluded_statuses(_: ListingQueryParams) -> Iterable[Any]:
    return DEFAULT_EXCLUDED_STATUSES


@dataclass(frozen=True)
class QueryBuilder:
    """
    Pure params -> ODataQuery translation.

    rental_type / excluded_statuses let the embedding app override the
    defaults per request. extended_filters=False is the "lite" variant
    (city, price, beds, baths and property type only).
    """

    rental_type: RentalTypeResolver = _default_rental_type
    excluded_statuses: StatusExclusionResolver = _default_excluded_statuses
    extended_filters: bool = True

    @classmethod
    def from_settings(cls, s: Any) -> "QueryBuilder":
        rental_pt = s.RENTAL_PROPERTY_TYPE
        statuses = tuple(s.EXCLUDED_STATUSES)
        return cls(
            rental_type=lambda _: rental_pt,
            excluded_statuses=lambda _: statuses,
            extended_filters=bool(s.EXTENDED_FILTERS),
        )

    def build_filter(self, params: ListingQueryParams) -> str:
        filters: list[str] = []

        if not is_empty(params.city):
            filters.append("City eq " + escape_literal(params.city))
        # zero thresholds read as "not set"
        if not is_empty(params.min_price):
            filters.append(f"ListPrice ge {to_int(params.min_price)}")
        if not is_empty(params.max_price):
            filters.append(f"ListPrice le {to_int(params.max_price)}")
        if not is_empty(params.beds):
            filters.append(f"BedroomsTotal ge {to_int(params.beds)}")
        if not is_empty(params.baths):
            filters.append(f"BathroomsTotalInteger ge {to_int(params.baths)}")
        if not is_empty(params.property_type):
            filters.append("PropertyType eq " + escape_literal(params.property_type))

        if not self.extended_filters:
            return " and ".join(filters)

        rental = RentalMode.parse(params.rental)
        if rental is RentalMode.include:
            filters.append("PropertyType eq " + escape_literal(self.rental_type(params)))
        elif rental is RentalMode.exclude:
            filters.append("PropertyType ne " + escape_literal(self.rental_type(params)))

        if not is_empty(params.office_name):
            filters.append("ListOfficeName eq " + escape_literal(params.office_name))
        if not is_empty(params.office_mls_id):
            filters.append("ListOfficeMlsId eq " + escape_literal(params.office_mls_id))
        if not is_empty(params.agent_mls_id):
            filters.append("ListAgentMlsId eq " + escape_literal(params.agent_mls_id))
        if not is_empty(params.team_name):
            filters.append("ListTeamName eq " + escape_literal(params.team_name))
        if not is_empty(params.status):
            filters.append("StandardStatus eq " + escape_literal(params.status))

        if parse_flag(params.available_only) is True:
            for status in self.excluded_statuses(params) or ():
                if not isinstance(status, str) or status == "":
                    continue
                filters.append("StandardStatus ne " + escape_literal(status))

        return " and ".join(filters)

    def build_query(self, params: ListingQueryParams) -> ODataQuery:
        limit, page = normalize_paging(params.limit, params.page)
        top = min(limit, MAX_TOP)
        order_by = DEFAULT_ORDER_BY if is_empty(params.order_by) else str(params.order_by)
        return ODataQuery(
            select=LIST_SELECT,
            expand=MEDIA_EXPAND,
            orderby=order_by,
            top=top,
            skip=(page - 1) * top,
            count=True,
            filter=self.build_filter(params) or None,
        )

    def build_detail_query(self, listing_key: Any) -> ODataQuery:
        return ODataQuery(
            select=DETAIL_SELECT,
            expand=MEDIA_EXPAND,
            top=1,
            filter="ListingKey eq " + escape_literal(listing_key),
        )

# hive_idx/domain/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from .parsing import get_first, parse_flag

RawListing = dict[str, Any]


class ErrorKind(str, Enum):
    transport = "http"
    bad_response = "bad_response"


class RentalMode(str, Enum):
    include = "include"
    exclude = "exclude"
    unset = "unset"

    @classmethod
    def parse(cls, raw: Any) -> "RentalMode":
        if isinstance(raw, RentalMode):
            return raw
        flag = parse_flag(raw)
        if flag is True:
            return cls.include
        if flag is False:
            return cls.exclude
        return cls.unset


@dataclass(frozen=True)
class ListingQueryParams:
    """
    Loose request bag. Values are kept as given; the query builder does the
    coercion, so "abc", -3 or None are all acceptable here.
    """

    city: Any = None
    min_price: Any = None
    max_price: Any = None
    beds: Any = None
    baths: Any = None
    property_type: Any = None
    office_name: Any = None
    office_mls_id: Any = None
    agent_mls_id: Any = None
    team_name: Any = None
    status: Any = None
    rental: RentalMode = RentalMode.unset
    available_only: Any = False
    order_by: Any = None
    limit: Any = None
    page: Any = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ListingQueryParams":
        """
        Accepts snake_case, camelCase and the legacy shortcode attribute
        names (orderby, office_mlsid, agent_mlsid).
        """
        d = dict(raw)
        return cls(
            city=get_first(d, "city"),
            min_price=get_first(d, "min_price", "minPrice"),
            max_price=get_first(d, "max_price", "maxPrice"),
            beds=get_first(d, "beds"),
            baths=get_first(d, "baths"),
            property_type=get_first(d, "property_type", "propertyType"),
            office_name=get_first(d, "office_name", "officeName"),
            office_mls_id=get_first(d, "office_mls_id", "office_mlsid", "officeMlsId"),
            agent_mls_id=get_first(d, "agent_mls_id", "agent_mlsid", "agentMlsId"),
            team_name=get_first(d, "team_name", "teamName"),
            status=get_first(d, "status"),
            rental=RentalMode.parse(get_first(d, "rental")),
            available_only=parse_flag(get_first(d, "available_only", "availableOnly")) is True,
            order_by=get_first(d, "order_by", "orderby", "orderBy"),
            limit=get_first(d, "limit"),
            page=get_first(d, "page"),
        )


@dataclass(frozen=True)
class ListingResult:
    items: list[RawListing] = field(default_factory=list)
    total: int = 0
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: ErrorKind) -> "ListingResult":
        return cls(items=[], total=0, error=error)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"items": list(self.items), "total": self.total}
        if self.error is not None:
            out["error"] = self.error.value
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ListingResult":
        items = data.get("items")
        error = data.get("error")
        return cls(
            items=list(items) if isinstance(items, list) else [],
            total=int(data.get("total") or 0),
            error=ErrorKind(error) if error else None,
        )


@dataclass(frozen=True)
class SingleResult:
    item: RawListing = field(default_factory=dict)
    error: ErrorKind | None = None

    @property
    def found(self) -> bool:
        # "not found" is an empty item without an error
        return self.error is None and bool(self.item)

    @classmethod
    def failed(cls, error: ErrorKind) -> "SingleResult":
        return cls(item={}, error=error)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"item": dict(self.item)}
        if self.error is not None:
            out["error"] = self.error.value
        return out

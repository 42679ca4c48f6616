from pydantic import BaseModel, Field
from typing import Any, Literal

ErrorTag = Literal["http", "bad_response"]


class ListingsPageOut(BaseModel):
    items: list[Any]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    pages: int = Field(..., ge=1)
    error: ErrorTag | None = None


class ListingDetailOut(BaseModel):
    item: dict[str, Any]
    found: bool
    error: ErrorTag | None = None

# hive_idx/models.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class ListingCacheEntry(Base):
    """
    One cached list-path envelope per fingerprint.
    value_json is the serialized ListingResult; rows past expires_at are stale.
    """

    __tablename__ = "listing_cache"

    cache_key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value_json: Mapped[str] = mapped_column(Text)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

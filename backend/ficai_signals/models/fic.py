"""Fic + FicUrlCache ORM: resolved story identities and the URL → fic mapping.

Invariants:
    - Fic.id is the external lookup service's canonical id
    - FicUrlCache has one row per literal URL string (url is the primary key)
    - Many URL variants may point at one Fic
    - Cache rows never expire; re-resolution overwrites fic_id and fetched_at

Design Decisions:
    - url stored verbatim, no normalization: the cache key is exactly what was asked
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from ficai_signals.db.base import Base


class Fic(Base):
    """Resolved story."""
    __tablename__ = "fics"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    source_url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)


class FicUrlCache(Base):
    """Cache entry: literal URL → resolved Fic."""
    __tablename__ = "fic_url_cache"

    url: Mapped[str] = mapped_column(String(2048), primary_key=True)
    fic_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("fics.id"), nullable=False, index=True,
    )
    fetched_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(timezone.utc), server_default=func.now(),
    )

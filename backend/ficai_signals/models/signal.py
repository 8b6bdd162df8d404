"""Signal ORM: one account's for/against stance on one tag for one story URL.

Invariants:
    - Primary key (account_id, url, tag): at most one row per triple
    - sign is NOT NULL: "no opinion" is the absence of a row
    - Distinct tags and distinct urls over this table are the only tag/URL catalogs

Design Decisions:
    - Separate indexes on url and tag: per-URL aggregation and tag/URL listing
      both read this table directly
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, Boolean, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from ficai_signals.db.base import Base


class Signal(Base):
    """Signal row: a single vote."""
    __tablename__ = "signals"

    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    url: Mapped[str] = mapped_column(String(2048), primary_key=True, index=True)
    tag: Mapped[str] = mapped_column(String(200), primary_key=True, index=True)
    sign: Mapped[bool] = mapped_column(Boolean, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(timezone.utc), server_default=func.now(),
    )

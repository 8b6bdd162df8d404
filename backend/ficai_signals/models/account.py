"""Account ORM: a registered voter.

Invariants:
    - email is unique and stored lowercased
    - password_hash embeds its own method, salt and parameters
    - Never mutated after registration, never deleted

Design Decisions:
    - Integer autoincrement id: account ids appear in logs, never in cookies
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ficai_signals.db.base import Base


class Account(Base):
    """Account entity: owner of sessions and signals."""
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(timezone.utc), server_default=func.now(),
    )

"""AccountSession ORM: a login session identified by an opaque random token.

Invariants:
    - token is 16 random bytes, stored verbatim (primary key)
    - Always references a live Account (account_id FK, cascade on delete)
    - Many sessions may exist per account at once

Design Decisions:
    - Token stored unhashed: reading this table already implies full store access
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, LargeBinary, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from ficai_signals.db.base import Base


class AccountSession(Base):
    """Session entity: maps a cookie token to an account."""
    __tablename__ = "account_sessions"

    token: Mapped[bytes] = mapped_column(LargeBinary(16), primary_key=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(timezone.utc), server_default=func.now(),
    )
